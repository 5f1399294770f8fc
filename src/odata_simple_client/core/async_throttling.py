"""Async token-bucket rate limiting."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from .errors import OdataValidationError

logger = logging.getLogger("odata_simple_client")

# Absorbs float rounding in the refill computation.
_TOKEN_EPSILON = 1e-9


@dataclass(slots=True, frozen=True)
class Quota:
    """Burst capacity and the interval after which one unit is replenished."""

    max_burst: int
    replenish_interval_seconds: float

    def __post_init__(self) -> None:
        if isinstance(self.max_burst, bool) or not isinstance(self.max_burst, int):
            raise OdataValidationError("max_burst must be int")
        if self.max_burst < 1:
            raise OdataValidationError("max_burst must be >= 1")
        if self.replenish_interval_seconds <= 0:
            raise OdataValidationError("replenish_interval_seconds must be > 0")

    @classmethod
    def per_second(cls, max_burst: int) -> "Quota":
        return cls.with_period(1.0 / _ensure_positive(max_burst)).allow_burst(max_burst)

    @classmethod
    def per_minute(cls, max_burst: int) -> "Quota":
        return cls.with_period(60.0 / _ensure_positive(max_burst)).allow_burst(max_burst)

    @classmethod
    def with_period(cls, replenish_interval_seconds: float) -> "Quota":
        return cls(max_burst=1, replenish_interval_seconds=replenish_interval_seconds)

    def allow_burst(self, max_burst: int) -> "Quota":
        return replace(self, max_burst=max_burst)


def _ensure_positive(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise OdataValidationError("rate must be a positive int")
    return value


class AsyncRateLimiter:
    """Token bucket shared by any number of concurrent callers.

    The bucket starts full. Waiters are not served in FIFO order; a caller
    that wakes up first takes the next token.
    """

    def __init__(
        self,
        quota: Quota,
        *,
        clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._quota = quota
        self._clock = clock or time.monotonic
        self._sleep = sleeper or asyncio.sleep
        self._lock = threading.Lock()
        self._tokens = float(quota.max_burst)
        self._updated_at = self._clock()

    @property
    def quota(self) -> Quota:
        return self._quota

    def try_acquire(self) -> float:
        """Take one token if available.

        Returns 0.0 on success, otherwise the seconds until a token is due.
        """

        with self._lock:
            now = self._clock()
            elapsed = max(0.0, now - self._updated_at)
            self._tokens = min(
                float(self._quota.max_burst),
                self._tokens + elapsed / self._quota.replenish_interval_seconds,
            )
            self._updated_at = now
            if self._tokens >= 1.0 - _TOKEN_EPSILON:
                self._tokens -= 1.0
                return 0.0
            missing = max(_TOKEN_EPSILON, 1.0 - self._tokens)
            return missing * self._quota.replenish_interval_seconds

    async def until_ready(self) -> None:
        while True:
            wait_seconds = self.try_acquire()
            if wait_seconds <= 0:
                return
            logger.debug("rate limit reached; waiting seconds=%.3f", wait_seconds)
            await self._sleep(wait_seconds)


__all__ = [
    "Quota",
    "AsyncRateLimiter",
]
