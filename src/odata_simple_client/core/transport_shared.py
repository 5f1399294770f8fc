"""Helpers for building the default HTTP transport."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import OdataClientConfig


def build_default_headers(config: OdataClientConfig) -> Mapping[str, str]:
    return {
        "Accept": config.accept,
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: OdataClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_default_client(config: OdataClientConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=build_default_headers(config),
        timeout=build_default_timeout(config),
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_default_client",
]
