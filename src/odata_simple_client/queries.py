"""Request descriptors for single resources and collections."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from .core.options import Comparison, Direction, Format, InlineCount
from .core.path import PathBuilder

_RequestT = TypeVar("_RequestT", bound="_Request")


class _Request:
    __slots__ = ("_builder",)

    def __init__(self, builder: PathBuilder) -> None:
        self._builder = builder

    @classmethod
    def _wrap(cls: type[_RequestT], builder: PathBuilder) -> _RequestT:
        request = cls.__new__(cls)
        request._builder = builder
        return request

    def to_path_builder(self) -> PathBuilder:
        return self._builder

    def build(self) -> str:
        return self._builder.build()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._builder == other._builder

    def __hash__(self) -> int:
        return hash((type(self), self._builder))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._builder!r})"


class GetRequest(_Request):
    """Request a single resource: ``<base path>/<resource_type>(<resource_id>)``."""

    __slots__ = ()

    def __init__(self, resource_type: str, resource_id: int) -> None:
        super().__init__(PathBuilder(resource_type, resource_id=resource_id))

    def format(self, kind: Format) -> "GetRequest":
        return self._wrap(self._builder.format(kind))

    def expand(self, fields: Iterable[str]) -> "GetRequest":
        """Expand relations of the returned object, e.g. ``["DokumentAktør"]``."""

        return self._wrap(self._builder.expand(fields))


class ListRequest(_Request):
    """Request a page of a resource collection."""

    __slots__ = ()

    def __init__(self, resource_type: str) -> None:
        super().__init__(PathBuilder(resource_type))

    def format(self, kind: Format) -> "ListRequest":
        return self._wrap(self._builder.format(kind))

    def order_by(self, field: str, direction: Direction = Direction.ASCENDING) -> "ListRequest":
        return self._wrap(self._builder.order_by(field, direction))

    def top(self, count: int) -> "ListRequest":
        """Only retrieve the first ``count`` items."""

        return self._wrap(self._builder.top(count))

    def skip(self, count: int) -> "ListRequest":
        return self._wrap(self._builder.skip(count))

    def inline_count(self, mode: InlineCount) -> "ListRequest":
        """Ask the server to include ``odata.count`` in the page envelope."""

        return self._wrap(self._builder.inline_count(mode))

    def filter(self, field: str, comparison: Comparison, value: str) -> "ListRequest":
        """Filter results with a single ``<field> <op> <value>`` expression.

        Calling this again replaces the previous expression; expressions
        are never combined.
        """

        return self._wrap(self._builder.filter(field, comparison, value))

    def expand(self, fields: Iterable[str]) -> "ListRequest":
        return self._wrap(self._builder.expand(fields))


__all__ = [
    "GetRequest",
    "ListRequest",
]
