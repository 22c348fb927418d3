"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import TypeVar

from .client_shared import resolve_retry_policy, validate_client_config
from .config import BojClientConfig
from .core.errors import BojClientClosedError
from .core.retry import RetryPolicy, execute_with_retry
from .core.transport import HttpxTransport, SyncTransport
from .timeseries.models import DataCodeResponse, DataLayerResponse, MetadataResponse
from .timeseries.queries import DataCodeQuery, DataLayerQuery, MetadataQuery
from .timeseries.service import TimeSeriesService

T = TypeVar("T")


class _GuardedTimeSeriesService:
    """Retry each call as a unit and block usage after client close."""

    def __init__(self, owner: "BojClient", delegate: TimeSeriesService) -> None:
        self._owner = owner
        self._delegate = delegate

    def _run(self, operation: Callable[[], T]) -> T:
        def attempt() -> T:
            self._owner._ensure_open()
            return operation()

        self._owner._ensure_open()
        return execute_with_retry(self._owner._retry_policy, attempt, sleeper=self._owner._sleeper)

    def get_data_code(self, query: DataCodeQuery) -> DataCodeResponse:
        return self._run(lambda: self._delegate.get_data_code(query))

    def get_data_layer(self, query: DataLayerQuery) -> DataLayerResponse:
        return self._run(lambda: self._delegate.get_data_layer(query))

    def get_metadata(self, query: MetadataQuery) -> MetadataResponse:
        return self._run(lambda: self._delegate.get_metadata(query))


class BojClient:
    """Public BOJ API client."""

    def __init__(
        self,
        *,
        config: BojClientConfig | None = None,
        transport: SyncTransport | None = None,
        timeseries_service: TimeSeriesService | None = None,
        retry_policy: RetryPolicy | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config or BojClientConfig()
        validate_client_config(self._config)

        self._transport = transport or HttpxTransport(self._config)
        self._retry_policy = resolve_retry_policy(config=self._config, retry_policy=retry_policy)
        self._sleeper = sleeper
        internal_timeseries = timeseries_service or TimeSeriesService(self._transport, self._config)
        self._closed = False
        self.timeseries = _GuardedTimeSeriesService(self, internal_timeseries)

    @property
    def config(self) -> BojClientConfig:
        return self._config

    def _ensure_open(self) -> None:
        if self._closed:
            raise BojClientClosedError("BojClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "BojClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "BojClient",
]
