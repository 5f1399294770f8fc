from __future__ import annotations

import asyncio
from collections.abc import Sequence

import httpx

Step = httpx.Response | Exception


class FailingStream(httpx.AsyncByteStream):
    """Body stream that breaks after the headers were received."""

    async def __aiter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""  # pragma: no cover


class SequencedHandler:
    """MockTransport handler replaying responses and recording request URLs."""

    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.urls: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.urls)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(str(request.url))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


def make_client(handler: SequencedHandler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.value = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.value

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.value += seconds
        await asyncio.sleep(0)
