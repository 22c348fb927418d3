"""Request building and response handling shared by sync/async services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..config import BojClientConfig
from ..core.models import ResponseMeta
from ..core.transport import HttpRequest, HttpResponse
from ..core.transport_shared import (
    build_default_headers,
    build_url,
    ensure_success_status,
    header_value,
    normalize_response_body,
)
from .decoding import decode_data_code, decode_data_layer, decode_metadata
from .models import DataCodeResponse, DataLayerResponse, MetadataResponse
from .options import CsvEncoding
from .params import build_data_code_params, build_data_layer_params, build_metadata_params
from .queries import DataCodeQuery, DataLayerQuery, MetadataQuery

logger = logging.getLogger("boj_client")

ResponseT = TypeVar("ResponseT")
Decoder = Callable[..., ResponseT]


def _build_request(config: BojClientConfig, endpoint: str, params: list[tuple[str, str]]) -> HttpRequest:
    return HttpRequest(
        url=build_url(config.base_url, endpoint, params),
        headers=dict(build_default_headers(config)),
    )


def build_data_code_request(config: BojClientConfig, query: DataCodeQuery) -> HttpRequest:
    return _build_request(config, query.endpoint, build_data_code_params(query))


def build_data_layer_request(config: BojClientConfig, query: DataLayerQuery) -> HttpRequest:
    return _build_request(config, query.endpoint, build_data_layer_params(query))


def build_metadata_request(config: BojClientConfig, query: MetadataQuery) -> HttpRequest:
    return _build_request(config, query.endpoint, build_metadata_params(query))


def _finish(
    config: BojClientConfig,
    *,
    endpoint: str,
    encoding: CsvEncoding,
    response: HttpResponse,
    decoder: Decoder[ResponseT],
) -> ResponseT:
    body = normalize_response_body(response.headers, response.body)
    decoded = decoder(
        body,
        header_value(response.headers, "content-type"),
        encoding,
        csv_error_json_fallback=config.decode.csv_error_json_fallback,
    )
    meta: ResponseMeta = decoded.meta  # type: ignore[attr-defined]
    if not meta.is_success:
        logger.debug(
            "api error endpoint=%s status=%s message_id=%s http_status=%s",
            endpoint,
            meta.status,
            meta.message_id,
            response.status_code,
        )
    ensure_success_status(meta, http_status=response.status_code)
    logger.info("request success endpoint=%s status=%s", endpoint, meta.status)
    return decoded


def finish_data_code(
    config: BojClientConfig, query: DataCodeQuery, response: HttpResponse
) -> DataCodeResponse:
    return _finish(
        config,
        endpoint=query.endpoint,
        encoding=query.csv_encoding_hint,
        response=response,
        decoder=decode_data_code,
    )


def finish_data_layer(
    config: BojClientConfig, query: DataLayerQuery, response: HttpResponse
) -> DataLayerResponse:
    return _finish(
        config,
        endpoint=query.endpoint,
        encoding=query.csv_encoding_hint,
        response=response,
        decoder=decode_data_layer,
    )


def finish_metadata(
    config: BojClientConfig, query: MetadataQuery, response: HttpResponse
) -> MetadataResponse:
    return _finish(
        config,
        endpoint=query.endpoint,
        encoding=query.csv_encoding_hint,
        response=response,
        decoder=decode_metadata,
    )


__all__ = [
    "build_data_code_request",
    "build_data_layer_request",
    "build_metadata_request",
    "finish_data_code",
    "finish_data_layer",
    "finish_metadata",
]
