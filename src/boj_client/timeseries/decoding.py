"""Pick the JSON or CSV decoder for a response body, with fallbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.errors import BojDecodeError
from ..core.response_parsing import PayloadKind, classify_content_type, looks_like_json
from .csv_parser import decode_data_code_csv, decode_data_layer_csv, decode_metadata_csv
from .models import DataCodeResponse, DataLayerResponse, MetadataResponse
from .options import CsvEncoding
from .parser import decode_data_code_json, decode_data_layer_json, decode_metadata_json

logger = logging.getLogger("boj_client")

ResponseT = TypeVar("ResponseT")


def plan_decoders(
    body: bytes,
    content_type: str | None,
    *,
    csv_error_json_fallback: bool = True,
) -> tuple[PayloadKind, ...]:
    """Return the decoders to try, in order."""

    if looks_like_json(body):
        return (PayloadKind.JSON,)
    kind = classify_content_type(content_type)
    if kind is PayloadKind.JSON:
        return (PayloadKind.JSON,)
    if kind is PayloadKind.CSV:
        # BOJ reports errors as JSON even when CSV was requested.
        if csv_error_json_fallback:
            return (PayloadKind.CSV, PayloadKind.JSON)
        return (PayloadKind.CSV,)
    return (PayloadKind.JSON, PayloadKind.CSV)


def _decode(
    body: bytes,
    content_type: str | None,
    encoding: CsvEncoding,
    *,
    csv_error_json_fallback: bool,
    json_decoder: Callable[[bytes], ResponseT],
    csv_decoder: Callable[[bytes, CsvEncoding], ResponseT],
) -> ResponseT:
    plan = plan_decoders(body, content_type, csv_error_json_fallback=csv_error_json_fallback)
    logger.debug(
        "decode plan formats=%s content_type=%s",
        ",".join(kind.value for kind in plan),
        content_type,
    )
    last_error: BojDecodeError | None = None
    for kind in plan:
        try:
            if kind is PayloadKind.JSON:
                return json_decoder(body)
            return csv_decoder(body, encoding)
        except BojDecodeError as exc:
            logger.debug(
                "decode attempt failed format=%s content_type=%s error=%s",
                kind.value,
                content_type,
                exc.message,
            )
            last_error = exc
    assert last_error is not None
    raise last_error


def decode_data_code(
    body: bytes,
    content_type: str | None,
    encoding: CsvEncoding,
    *,
    csv_error_json_fallback: bool = True,
) -> DataCodeResponse:
    return _decode(
        body,
        content_type,
        encoding,
        csv_error_json_fallback=csv_error_json_fallback,
        json_decoder=decode_data_code_json,
        csv_decoder=decode_data_code_csv,
    )


def decode_data_layer(
    body: bytes,
    content_type: str | None,
    encoding: CsvEncoding,
    *,
    csv_error_json_fallback: bool = True,
) -> DataLayerResponse:
    return _decode(
        body,
        content_type,
        encoding,
        csv_error_json_fallback=csv_error_json_fallback,
        json_decoder=decode_data_layer_json,
        csv_decoder=decode_data_layer_csv,
    )


def decode_metadata(
    body: bytes,
    content_type: str | None,
    encoding: CsvEncoding,
    *,
    csv_error_json_fallback: bool = True,
) -> MetadataResponse:
    return _decode(
        body,
        content_type,
        encoding,
        csv_error_json_fallback=csv_error_json_fallback,
        json_decoder=decode_metadata_json,
        csv_decoder=decode_metadata_csv,
    )


__all__ = [
    "plan_decoders",
    "decode_data_code",
    "decode_data_layer",
    "decode_metadata",
]
