"""Error types raised by the OData client."""

from __future__ import annotations


class OdataError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        uri: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.uri = uri
        self.cause = cause


class OdataUriError(OdataError):
    """Composed path, query or authority is not a valid URI."""


class OdataTransportError(OdataError):
    """Network/transport-level failure."""


class OdataIoError(OdataError):
    """Failure while reading the response body."""


class OdataTextDecodeError(OdataError):
    """Response body is not valid UTF-8."""


class OdataParseError(OdataError):
    """Response body is not valid JSON or has an unexpected shape.

    ``text`` always holds the complete decoded body so the payload that
    failed to parse can be inspected.
    """

    def __init__(
        self,
        message: str,
        *,
        text: str,
        error: Exception,
        http_status: int | None = None,
        uri: str | None = None,
    ) -> None:
        super().__init__(message, http_status=http_status, uri=uri, cause="parse")
        self.text = text
        self.error = error


class OdataHttpStatusError(OdataError):
    """Server answered with an HTTP error status."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int,
        text: str,
        uri: str | None = None,
    ) -> None:
        super().__init__(message, http_status=http_status, uri=uri, cause="http_status")
        self.text = text


class OdataValidationError(OdataError):
    """Invalid input or configuration."""


class OdataClientClosedError(OdataError):
    """Raised when a data source is used after close."""


__all__ = [
    "OdataError",
    "OdataUriError",
    "OdataTransportError",
    "OdataIoError",
    "OdataTextDecodeError",
    "OdataParseError",
    "OdataHttpStatusError",
    "OdataValidationError",
    "OdataClientClosedError",
]
