"""Path-and-query construction for OData resources."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .errors import OdataUriError, OdataValidationError
from .options import Comparison, Direction, Format, InlineCount, QueryOptions, encode_component

# RFC 3986 pchar plus "/" and "?"; "%" only as part of a complete escape.
_PATH_AND_QUERY_RE = re.compile(
    r"/(?:[A-Za-z0-9\-._~!$&'()*+,;=:@/?]|%[0-9A-Fa-f]{2})*"
)
_AUTHORITY_RE = re.compile(
    r"(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})+"
    r"|\[[0-9A-Fa-f:.]+\]"
)
_PORT_RE = re.compile(r":[0-9]{1,5}")


def validate_path_and_query(value: str) -> str:
    if _PATH_AND_QUERY_RE.fullmatch(value) is None:
        raise OdataUriError(f"invalid path and query: {value!r}")
    return value


def validate_authority(value: str) -> str:
    """Validate a ``host[:port]`` authority and return it unchanged."""

    host, port = value, ""
    if not value.endswith("]") and ":" in value:
        host, _, port = value.rpartition(":")
        port = f":{port}"
        if _PORT_RE.fullmatch(port) is None or int(port[1:]) > 65535:
            raise OdataUriError(f"invalid port in authority: {value!r}")
    if _AUTHORITY_RE.fullmatch(host) is None:
        raise OdataUriError(f"invalid authority: {value!r}")
    return value


@dataclass(slots=True, frozen=True)
class PathBuilder:
    """Immutable builder for ``<base_path>/<resource_type>[(<id>)]?<query>``."""

    resource_type: str
    resource_id: int | None = None
    base_path: str = ""
    options: QueryOptions = field(default_factory=QueryOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.resource_type, str) or self.resource_type == "":
            raise OdataValidationError("resource_type must be a non-empty str")
        if self.resource_id is not None:
            if isinstance(self.resource_id, bool) or not isinstance(self.resource_id, int):
                raise OdataValidationError("resource_id must be int")
            if self.resource_id < 0:
                raise OdataValidationError("resource_id must be >= 0")

    def with_id(self, resource_id: int) -> "PathBuilder":
        return replace(self, resource_id=resource_id)

    def with_base_path(self, base_path: str) -> "PathBuilder":
        return replace(self, base_path=base_path)

    def order_by(self, field: str, direction: Direction = Direction.ASCENDING) -> "PathBuilder":
        return replace(self, options=self.options.order_by(field, direction))

    def top(self, count: int) -> "PathBuilder":
        return replace(self, options=self.options.top(count))

    def skip(self, count: int) -> "PathBuilder":
        return replace(self, options=self.options.skip(count))

    def inline_count(self, mode: InlineCount) -> "PathBuilder":
        return replace(self, options=self.options.inline_count(mode))

    def filter(self, field: str, comparison: Comparison, value: str) -> "PathBuilder":
        return replace(self, options=self.options.filter(field, comparison, value))

    def expand(self, fields: Iterable[str]) -> "PathBuilder":
        return replace(self, options=self.options.expand(fields))

    def format(self, kind: Format) -> "PathBuilder":
        return replace(self, options=self.options.format(kind))

    def build(self) -> str:
        suffix = ""
        if self.resource_id is not None:
            suffix = f"({encode_component(str(self.resource_id))})"
        path = (
            f"{self.base_path}/{encode_component(self.resource_type)}{suffix}"
            f"?{self.options.to_query()}"
        )
        return validate_path_and_query(path)


__all__ = [
    "PathBuilder",
    "validate_path_and_query",
    "validate_authority",
]
