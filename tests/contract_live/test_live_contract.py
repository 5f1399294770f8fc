from __future__ import annotations

import os
import time

import pytest

from odata_simple_client import (
    Comparison,
    DataSource,
    GetRequest,
    InlineCount,
    ListRequest,
    RateLimitedDataSource,
)


pytestmark = pytest.mark.live


def _require_live_flag() -> None:
    if os.getenv("ODATA_RUN_LIVE") != "1":
        pytest.skip("Set ODATA_RUN_LIVE=1 to run live contract tests")


def _live_datasource() -> DataSource:
    return DataSource("oda.ft.dk", "/api")


@pytest.mark.asyncio
async def test_live_fetch_single_dokument():
    _require_live_flag()
    async with _live_datasource() as datasource:
        dokument = await datasource.fetch(GetRequest("Dokument", 24))

    assert dokument["id"] == 24
    assert isinstance(dokument["titel"], str)


@pytest.mark.asyncio
async def test_live_fetch_paged_with_inline_count():
    _require_live_flag()
    async with _live_datasource() as datasource:
        page = await datasource.fetch_paged(
            ListRequest("Dokument").inline_count(InlineCount.ALL_PAGES)
        )

    assert page.count is not None
    assert int(page.count) > 0
    assert len(page.value) > 0


@pytest.mark.asyncio
async def test_live_fetch_paged_with_filter():
    _require_live_flag()
    async with _live_datasource() as datasource:
        page = await datasource.fetch_paged(
            ListRequest("Dokument").filter("id", Comparison.EQUAL, "24")
        )

    assert [item["id"] for item in page.value] == [24]


@pytest.mark.asyncio
async def test_live_rate_limited_fetches_are_spaced():
    _require_live_flag()
    async with RateLimitedDataSource.per_second(_live_datasource(), 1) as datasource:
        started = time.monotonic()
        first = await datasource.fetch(GetRequest("Dokument", 24))
        second = await datasource.fetch(GetRequest("Dokument", 26))

    assert time.monotonic() - started >= 1.0
    assert first["id"] == 24
    assert second["id"] == 26
