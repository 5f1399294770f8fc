"""Response body buffering and JSON decoding."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from .errors import (
    OdataHttpStatusError,
    OdataIoError,
    OdataParseError,
    OdataTextDecodeError,
)

logger = logging.getLogger("odata_simple_client")

T = TypeVar("T")

# Exceptions a payload parser may raise for a document of the wrong shape.
_SHAPE_ERRORS = (KeyError, TypeError, ValueError, IndexError)


class StreamedResponse(Protocol):
    status_code: int

    async def aread(self) -> bytes: ...
    async def aclose(self) -> None: ...


async def read_body(response: StreamedResponse, *, uri: str | None = None) -> bytes:
    """Buffer the whole body and close the response."""

    try:
        return await response.aread()
    except Exception as exc:
        logger.error("response read error uri=%s error=%s", uri, exc.__class__.__name__)
        raise OdataIoError(
            "failed to read response body",
            http_status=getattr(response, "status_code", None),
            uri=uri,
            cause="io",
        ) from exc
    finally:
        await response.aclose()


def decode_text(body: bytes, *, http_status: int | None = None, uri: str | None = None) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("response body is not utf-8 uri=%s", uri)
        raise OdataTextDecodeError(
            "response body is not valid UTF-8",
            http_status=http_status,
            uri=uri,
            cause="text_decode",
        ) from exc


def parse_json_text(
    text: str,
    parser: Callable[[Any], T] | None = None,
    *,
    http_status: int | None = None,
    uri: str | None = None,
) -> T:
    """Parse JSON text and map it with ``parser``, keeping ``text`` on failure."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("response parse error uri=%s http_status=%s", uri, http_status)
        raise OdataParseError(
            "response body is not valid JSON",
            text=text,
            error=exc,
            http_status=http_status,
            uri=uri,
        ) from exc
    if parser is None:
        return payload
    try:
        return parser(payload)
    except _SHAPE_ERRORS as exc:
        logger.error("response shape error uri=%s http_status=%s", uri, http_status)
        raise OdataParseError(
            f"response JSON has unexpected shape: {exc}",
            text=text,
            error=exc,
            http_status=http_status,
            uri=uri,
        ) from exc


async def decode_response(
    response: StreamedResponse,
    parser: Callable[[Any], T] | None = None,
    *,
    uri: str | None = None,
) -> T:
    body = await read_body(response, uri=uri)
    http_status = getattr(response, "status_code", None)
    if http_status is not None and http_status >= 400:
        logger.error("request failed uri=%s http_status=%s", uri, http_status)
        raise OdataHttpStatusError(
            f"server responded with HTTP {http_status}",
            http_status=http_status,
            text=body.decode("utf-8", errors="replace"),
            uri=uri,
        )
    text = decode_text(body, http_status=http_status, uri=uri)
    return parse_json_text(text, parser, http_status=http_status, uri=uri)


__all__ = [
    "StreamedResponse",
    "read_body",
    "decode_text",
    "parse_json_text",
    "decode_response",
]
