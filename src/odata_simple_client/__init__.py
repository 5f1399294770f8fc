"""Public package exports for the OData client."""

from .config import OdataClientConfig, TransportConfig
from .core.async_throttling import Quota
from .core.errors import (
    OdataClientClosedError,
    OdataError,
    OdataHttpStatusError,
    OdataIoError,
    OdataParseError,
    OdataTextDecodeError,
    OdataTransportError,
    OdataUriError,
    OdataValidationError,
)
from .core.models import Page
from .core.options import Comparison, Direction, Format, InlineCount
from .datasource import DataSource
from .queries import GetRequest, ListRequest
from .ratelimiting import RateLimitedDataSource

__all__ = [
    "DataSource",
    "RateLimitedDataSource",
    "GetRequest",
    "ListRequest",
    "Page",
    "Quota",
    "Direction",
    "Comparison",
    "Format",
    "InlineCount",
    "OdataClientConfig",
    "TransportConfig",
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
