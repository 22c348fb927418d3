"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import TypeVar

from .client_shared import resolve_retry_policy, validate_client_config
from .config import BojClientConfig
from .core.async_transport import AsyncHttpxTransport, AsyncTransport
from .core.errors import BojClientClosedError
from .core.retry import RetryPolicy, async_execute_with_retry
from .timeseries.async_service import AsyncTimeSeriesService
from .timeseries.models import DataCodeResponse, DataLayerResponse, MetadataResponse
from .timeseries.queries import DataCodeQuery, DataLayerQuery, MetadataQuery

T = TypeVar("T")


class _GuardedAsyncTimeSeriesService:
    """Guard wrapper to block usage after async client close."""

    def __init__(self, owner: "AsyncBojClient", delegate: AsyncTimeSeriesService) -> None:
        self._owner = owner
        self._delegate = delegate

    async def _run(self, operation: Callable[[], Awaitable[T]]) -> T:
        async def attempt() -> T:
            self._owner._ensure_open()
            return await operation()

        self._owner._ensure_open()
        return await async_execute_with_retry(
            self._owner._retry_policy,
            attempt,
            sleeper=self._owner._sleeper,
        )

    async def get_data_code(self, query: DataCodeQuery) -> DataCodeResponse:
        return await self._run(lambda: self._delegate.get_data_code(query))

    async def get_data_layer(self, query: DataLayerQuery) -> DataLayerResponse:
        return await self._run(lambda: self._delegate.get_data_layer(query))

    async def get_metadata(self, query: MetadataQuery) -> MetadataResponse:
        return await self._run(lambda: self._delegate.get_metadata(query))


class AsyncBojClient:
    """Public async BOJ API client."""

    def __init__(
        self,
        *,
        config: BojClientConfig | None = None,
        transport: AsyncTransport | None = None,
        timeseries_service: AsyncTimeSeriesService | None = None,
        retry_policy: RetryPolicy | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._config = config or BojClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncHttpxTransport(self._config)
        self._retry_policy = resolve_retry_policy(config=self._config, retry_policy=retry_policy)
        self._sleeper = sleeper
        internal_timeseries = timeseries_service or AsyncTimeSeriesService(
            self._transport,
            self._config,
        )
        self._closed = False
        self.timeseries = _GuardedAsyncTimeSeriesService(self, internal_timeseries)

    @property
    def config(self) -> BojClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise BojClientClosedError("AsyncBojClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.aclose()
        self._closed = True

    async def __aenter__(self) -> "AsyncBojClient":
        self._ensure_open()
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
    "AsyncBojClient",
]
