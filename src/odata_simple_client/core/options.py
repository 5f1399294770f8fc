"""OData system query options and their canonical serialization."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from urllib.parse import quote

from .errors import OdataValidationError

OPTION_KEYS: frozenset[str] = frozenset(
    {"orderby", "top", "skip", "inlinecount", "filter", "expand", "format"}
)


class Direction(Enum):
    """Sort direction for ``$orderby``. Ascending unless stated otherwise."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class Comparison(Enum):
    """Comparison operators usable in a ``$filter`` expression."""

    EQUAL = "eq"
    NOT_EQUAL = "ne"
    GREATER_THAN = "gt"
    GREATER_OR_EQUAL = "ge"
    LESS_THAN = "lt"
    LESS_OR_EQUAL = "le"


class Format(Enum):
    """Format of the returned data. Fetching always forces ``JSON``."""

    JSON = "json"
    XML = "xml"


class InlineCount(Enum):
    """Whether the server should report the total count on each page."""

    NONE = "none"
    ALL_PAGES = "allpages"


def encode_component(value: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""

    return quote(value, safe="")


def _ensure_count(value: int, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OdataValidationError(f"{name} must be int")
    if value < 0:
        raise OdataValidationError(f"{name} must be >= 0")
    return value


@dataclass(slots=True, frozen=True)
class QueryOptions:
    """Immutable set of query options.

    Values are encoded when they are assigned. ``entries`` is kept sorted
    by key, so two option sets holding the same values compare equal and
    serialize to the same string whatever order they were set in.
    """

    entries: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        normalized = dict(self.entries)
        for key in normalized:
            if key not in OPTION_KEYS:
                raise OdataValidationError(f"unknown query option: {key}")
        object.__setattr__(self, "entries", tuple(sorted(normalized.items())))

    def get(self, key: str) -> str | None:
        for current, value in self.entries:
            if current == key:
                return value
        return None

    def _with(self, key: str, value: str) -> "QueryOptions":
        merged = dict(self.entries)
        merged[key] = value
        return replace(self, entries=tuple(merged.items()))

    def order_by(self, field: str, direction: Direction = Direction.ASCENDING) -> "QueryOptions":
        return self._with("orderby", encode_component(f"{field} {direction.value}"))

    def top(self, count: int) -> "QueryOptions":
        return self._with("top", str(_ensure_count(count, name="top")))

    def skip(self, count: int) -> "QueryOptions":
        return self._with("skip", str(_ensure_count(count, name="skip")))

    def inline_count(self, mode: InlineCount) -> "QueryOptions":
        return self._with("inlinecount", encode_component(mode.value))

    def filter(self, field: str, comparison: Comparison, value: str) -> "QueryOptions":
        # Only one expression is kept; a later call replaces it.
        return self._with("filter", encode_component(f"{field} {comparison.value} {value}"))

    def expand(self, fields: Iterable[str]) -> "QueryOptions":
        if isinstance(fields, str):
            raise TypeError("fields must be an iterable of str, not str")
        encoded = ",".join(encode_component(field) for field in fields)
        current = self.get("expand")
        if current is not None:
            encoded = f"{current},{encoded}"
        return self._with("expand", encoded)

    def format(self, kind: Format) -> "QueryOptions":
        return self._with("format", kind.value)

    def to_query(self) -> str:
        return "&".join(f"${encode_component(key)}={value}" for key, value in self.entries)


__all__ = [
    "OPTION_KEYS",
    "Direction",
    "Comparison",
    "Format",
    "InlineCount",
    "QueryOptions",
    "encode_component",
]
