"""Single-attempt request execution for the timeseries endpoints."""

from __future__ import annotations

from ..config import BojClientConfig
from ..core.transport import SyncTransport
from .models import DataCodeResponse, DataLayerResponse, MetadataResponse
from .queries import DataCodeQuery, DataLayerQuery, MetadataQuery
from .service_shared import (
    build_data_code_request,
    build_data_layer_request,
    build_metadata_request,
    finish_data_code,
    finish_data_layer,
    finish_metadata,
)


class TimeSeriesService:
    """Build, send, decode and status-check one request. No retries here."""

    def __init__(self, transport: SyncTransport, config: BojClientConfig) -> None:
        self._transport = transport
        self._config = config

    def get_data_code(self, query: DataCodeQuery) -> DataCodeResponse:
        request = build_data_code_request(self._config, query)
        return finish_data_code(self._config, query, self._transport.send(request))

    def get_data_layer(self, query: DataLayerQuery) -> DataLayerResponse:
        request = build_data_layer_request(self._config, query)
        return finish_data_layer(self._config, query, self._transport.send(request))

    def get_metadata(self, query: MetadataQuery) -> MetadataResponse:
        request = build_metadata_request(self._config, query)
        return finish_metadata(self._config, query, self._transport.send(request))


__all__ = [
    "TimeSeriesService",
]
