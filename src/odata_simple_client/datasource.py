"""Async data source for an OData API reachable over HTTPS."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol, TypeVar

import httpx

from .client_shared import Request, as_json_request, to_path_builder, validate_client_config
from .config import OdataClientConfig
from .core.errors import OdataClientClosedError, OdataTransportError
from .core.models import Page
from .core.path import validate_authority
from .core.response_parsing import StreamedResponse, decode_response
from .core.transport_shared import build_default_client
from .queries import GetRequest, ListRequest

logger = logging.getLogger("odata_simple_client")

T = TypeVar("T")

SCHEME = "https"


class AsyncHttpClient(Protocol):
    def build_request(self, method: str, url: str) -> httpx.Request: ...
    async def send(self, request: httpx.Request, *, stream: bool = False) -> StreamedResponse: ...
    async def aclose(self) -> None: ...


class DataSource:
    """Represents a target OData API.

    ``DataSource("oda.ft.dk", "/api")`` serves requests from
    ``https://oda.ft.dk/api/``. The source never mutates its own state
    while fetching, so one instance can be used from many tasks.
    """

    def __init__(
        self,
        authority: str,
        base_path: str | None = None,
        *,
        config: OdataClientConfig | None = None,
        client: AsyncHttpClient | None = None,
    ) -> None:
        self._config = config or OdataClientConfig()
        validate_client_config(self._config)

        self._authority = validate_authority(authority)
        self._base_path = base_path or ""
        self._owns_client = client is None
        self._client = client or build_default_client(self._config)
        self._closed = False

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def scheme(self) -> str:
        return SCHEME

    def clone(self) -> "DataSource":
        """Return a source for the same API sharing this source's HTTP client.

        The clone never closes the shared client.
        """

        twin = DataSource(
            self._authority,
            self._base_path,
            config=self._config,
            client=self._client,
        )
        twin._closed = self._closed
        return twin

    def build_uri(self, request: Request) -> str:
        builder = to_path_builder(request).with_base_path(self._base_path)
        return f"{SCHEME}://{self._authority}{builder.build()}"

    def _ensure_open(self) -> None:
        if self._closed:
            raise OdataClientClosedError("DataSource is already closed")

    def prepare_uri(self, request: Request) -> str:
        """Check the source is open and build the URI without sending anything."""

        self._ensure_open()
        return self.build_uri(request)

    async def execute(self, request: Request) -> StreamedResponse:
        """Issue one GET for ``request`` and return the unread response."""

        return await self.dispatch(self.prepare_uri(request))

    async def dispatch(self, uri: str) -> StreamedResponse:
        """Issue one GET for an already prepared ``uri``."""

        self._ensure_open()
        logger.debug("request start uri=%s", uri)
        try:
            http_request = self._client.build_request("GET", uri)
            response = await self._client.send(http_request, stream=True)
        except Exception as exc:
            logger.error(
                "request network error uri=%s error=%s",
                uri,
                exc.__class__.__name__,
            )
            raise OdataTransportError(
                "network/transport error",
                uri=uri,
                cause="network",
            ) from exc
        logger.debug(
            "response received uri=%s http_status=%s",
            uri,
            getattr(response, "status_code", None),
        )
        return response

    async def fetch(
        self,
        request: GetRequest,
        parser: Callable[[Any], T] | None = None,
    ) -> T:
        """Fetch a single resource, mapping its JSON body with ``parser``."""

        builder = as_json_request(request)
        uri = self.prepare_uri(builder)
        response = await self.dispatch(uri)
        return await decode_response(response, parser, uri=uri)

    async def fetch_paged(
        self,
        request: ListRequest,
        parser: Callable[[Any], T] | None = None,
    ) -> Page[T]:
        """Fetch one page of a collection; ``parser`` is applied to each item."""

        builder = as_json_request(request)
        uri = self.prepare_uri(builder)
        response = await self.dispatch(uri)
        return await decode_response(
            response,
            lambda payload: Page.from_payload(payload, parser),
            uri=uri,
        )

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "DataSource":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "SCHEME",
    "AsyncHttpClient",
    "DataSource",
]
