"""Core response models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _optional_text(payload: Mapping[str, object], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """One page of a collection response.

    ``next_link`` is exposed as returned by the server; following it is
    left to the caller.
    """

    value: tuple[T, ...] | list[T]
    count: str | None = None
    next_link: str | None = None
    metadata: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.value, tuple):
            return
        object.__setattr__(self, "value", tuple(self.value))

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        parse_item: Callable[[Any], T] | None = None,
    ) -> "Page[T]":
        if not isinstance(payload, Mapping):
            raise TypeError("page payload must be an object")
        if "value" not in payload:
            raise KeyError("value")
        items = payload["value"]
        if not isinstance(items, list):
            raise TypeError("value must be a list")
        if parse_item is not None:
            items = [parse_item(item) for item in items]
        return cls(
            value=tuple(items),
            count=_optional_text(payload, "odata.count"),
            next_link=_optional_text(payload, "odata.nextLink"),
            metadata=_optional_text(payload, "odata.metadata"),
        )


__all__ = [
    "Page",
]
