"""Shared helpers for data source bootstrap."""

from __future__ import annotations

from .config import OdataClientConfig
from .core.errors import OdataValidationError
from .core.options import Format
from .core.path import PathBuilder
from .queries import GetRequest, ListRequest

Request = GetRequest | ListRequest | PathBuilder


def validate_client_config(config: OdataClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise OdataValidationError(str(exc)) from exc


def to_path_builder(request: Request) -> PathBuilder:
    if isinstance(request, PathBuilder):
        return request
    return request.to_path_builder()


def as_json_request(request: Request) -> PathBuilder:
    return to_path_builder(request).format(Format.JSON)


__all__ = [
    "Request",
    "validate_client_config",
    "to_path_builder",
    "as_json_request",
]
