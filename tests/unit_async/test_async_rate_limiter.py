from __future__ import annotations

import asyncio

import pytest

from odata_simple_client.core.async_throttling import AsyncRateLimiter, Quota
from tests.shared.transport import FakeClock


@pytest.mark.asyncio
async def test_until_ready_waits_for_next_token():
    clock = FakeClock()
    limiter = AsyncRateLimiter(Quota.per_second(1), clock=clock.now, sleeper=clock.sleep)

    await limiter.until_ready()
    clock.value = 0.25
    await limiter.until_ready()

    assert clock.sleeps == [pytest.approx(0.75)]
    assert clock.now() == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_concurrent_waiters_are_spaced_by_quota():
    clock = FakeClock()
    limiter = AsyncRateLimiter(Quota.per_second(2), clock=clock.now, sleeper=clock.sleep)
    admitted: list[float] = []

    async def admit() -> None:
        await limiter.until_ready()
        admitted.append(clock.now())

    await asyncio.gather(*(admit() for _ in range(4)))

    admitted.sort()
    assert admitted == [0.0, 0.0, pytest.approx(0.5), pytest.approx(1.0)]
    # Any burst + 1 consecutive admissions span at least one replenish interval.
    for earlier, later in zip(admitted, admitted[2:]):
        assert later - earlier >= 0.5 - 1e-9


@pytest.mark.asyncio
async def test_cancelled_waiter_consumes_no_token():
    limiter = AsyncRateLimiter(Quota.with_period(10.0))
    await limiter.until_ready()

    waiter = asyncio.create_task(limiter.until_ready())
    await asyncio.sleep(0)
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    remaining = limiter.try_acquire()
    assert 0.0 < remaining <= 10.0
