"""Rate-limited wrapper around a data source."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

from .client_shared import Request, as_json_request
from .core.async_throttling import AsyncRateLimiter, Quota
from .core.errors import OdataValidationError
from .core.models import Page
from .core.response_parsing import StreamedResponse, decode_response
from .datasource import DataSource
from .queries import GetRequest, ListRequest

T = TypeVar("T")


class RateLimitedDataSource:
    """Data source whose requests are admitted by a token-bucket limiter.

    Clones made with :meth:`clone` share one limiter, so the combined
    request rate of all of them stays within a single quota.
    """

    def __init__(
        self,
        datasource: DataSource,
        quota: Quota | None = None,
        *,
        limiter: AsyncRateLimiter | None = None,
    ) -> None:
        if limiter is None:
            if quota is None:
                raise OdataValidationError("either quota or limiter is required")
            limiter = AsyncRateLimiter(quota)
        elif quota is not None and quota != limiter.quota:
            raise OdataValidationError("quota does not match limiter.quota")
        self._datasource = datasource
        self._limiter = limiter

    @classmethod
    def per_second(cls, datasource: DataSource, per_second: int) -> "RateLimitedDataSource":
        """Allow at most ``per_second`` requests each second, all of them in a burst."""

        return cls(datasource, Quota.per_second(per_second))

    @property
    def datasource(self) -> DataSource:
        return self._datasource

    @property
    def limiter(self) -> AsyncRateLimiter:
        return self._limiter

    def clone(self) -> "RateLimitedDataSource":
        return RateLimitedDataSource(
            self._datasource.clone(),
            limiter=self._limiter,
        )

    async def execute(self, request: Request) -> StreamedResponse:
        return await self._admit_and_dispatch(self._datasource.prepare_uri(request))

    async def _admit_and_dispatch(self, uri: str) -> StreamedResponse:
        # ``uri`` comes from prepare_uri, so closed sources and bad paths spend no token.
        await self._limiter.until_ready()
        return await self._datasource.dispatch(uri)

    async def fetch(
        self,
        request: GetRequest,
        parser: Callable[[Any], T] | None = None,
    ) -> T:
        builder = as_json_request(request)
        uri = self._datasource.prepare_uri(builder)
        response = await self._admit_and_dispatch(uri)
        return await decode_response(response, parser, uri=uri)

    async def fetch_paged(
        self,
        request: ListRequest,
        parser: Callable[[Any], T] | None = None,
    ) -> Page[T]:
        builder = as_json_request(request)
        uri = self._datasource.prepare_uri(builder)
        response = await self._admit_and_dispatch(uri)
        return await decode_response(
            response,
            lambda payload: Page.from_payload(payload, parser),
            uri=uri,
        )

    async def close(self) -> None:
        await self._datasource.close()

    async def __aenter__(self) -> "RateLimitedDataSource":
        await self._datasource.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "RateLimitedDataSource",
]
