"""Decoders from BOJ JSON payloads into typed response objects."""

from __future__ import annotations

from ..core.canonical import (
    FieldMap,
    normalize_optional,
    parse_optional_uint,
    parse_status,
    scalar_to_text,
    upper_key_map,
)
from ..core.errors import BojDecodeError
from ..core.models import ResponseMeta
from ..core.response_parsing import load_json_object
from .fields import (
    METADATA_KNOWN_FIELDS,
    METADATA_LAYER_FIELDS,
    METADATA_TEXT_FIELDS,
    SERIES_CODE,
    SERIES_KNOWN_FIELDS,
    SERIES_TEXT_FIELDS,
    SURVEY_DATES,
    VALUES,
    build_code_parameter_echo,
    build_layer_parameter_echo,
    require_series_code,
)
from .models import (
    DataCodeResponse,
    DataLayerResponse,
    DataPoint,
    MetadataEntry,
    MetadataResponse,
    TimeSeries,
)


def _meta(root: FieldMap) -> ResponseMeta:
    return ResponseMeta(
        status=parse_status(root.get("STATUS")),
        message_id=root.text("MESSAGEID") or "",
        message=root.text("MESSAGE") or "",
        date=root.text("DATE"),
    )


def _parameter_map(root: FieldMap) -> dict[str, str]:
    raw = root.get("PARAMETER")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise BojDecodeError("PARAMETER must be an object")
    texts = ((key, scalar_to_text(value, field=f"PARAMETER.{key}")) for key, value in raw.items())
    return upper_key_map((key, text) for key, text in texts if text is not None)


def _next_position(root: FieldMap) -> int | None:
    raw = scalar_to_text(root.get("NEXTPOSITION"), field="NEXTPOSITION")
    return parse_optional_uint(raw, field="NEXTPOSITION")


def _resultset(root: FieldMap) -> list[FieldMap]:
    raw = root.get("RESULTSET")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise BojDecodeError("RESULTSET must be an array")
    rows: list[FieldMap] = []
    for item in raw:
        if not isinstance(item, dict):
            raise BojDecodeError("each RESULTSET element must be an object")
        rows.append(FieldMap(item))
    return rows


def _array(container: FieldMap, key: str) -> list[object]:
    raw = container.get(key)
    if raw is None:
        raise BojDecodeError(f"VALUES.{key} is required")
    if not isinstance(raw, list):
        raise BojDecodeError(f"VALUES.{key} must be an array")
    return raw


def _parse_points(row: FieldMap) -> tuple[DataPoint, ...]:
    values_obj = row.get(VALUES)
    if values_obj is None:
        raise BojDecodeError("VALUES object is required in RESULTSET rows")
    if not isinstance(values_obj, dict):
        raise BojDecodeError("VALUES must be an object")

    container = FieldMap(values_obj)
    survey_dates = _array(container, SURVEY_DATES)
    values = _array(container, VALUES)
    if len(survey_dates) != len(values):
        raise BojDecodeError("VALUES.SURVEY_DATES and VALUES.VALUES length mismatch")

    points: list[DataPoint] = []
    for survey_date, value in zip(survey_dates, values):
        date_text = normalize_optional(scalar_to_text(survey_date, field=SURVEY_DATES))
        if date_text is None:
            raise BojDecodeError("SURVEY_DATES entries must not be null or empty")
        points.append(
            DataPoint(
                survey_date=date_text,
                value=normalize_optional(scalar_to_text(value, field=VALUES)),
            )
        )
    return tuple(points)


def _series_from_row(row: FieldMap) -> TimeSeries:
    series_code = require_series_code(scalar_to_text(row.get(SERIES_CODE), field=SERIES_CODE))
    return TimeSeries(
        series_code=series_code,
        points=_parse_points(row),
        extras=row.extras(SERIES_KNOWN_FIELDS),
        **{name: row.text(raw) for name, raw in SERIES_TEXT_FIELDS},
    )


def _metadata_from_row(row: FieldMap) -> MetadataEntry:
    layers = {
        name: parse_optional_uint(scalar_to_text(row.get(raw), field=raw), field=raw)
        for name, raw in METADATA_LAYER_FIELDS
    }
    return MetadataEntry(
        extras=row.extras(METADATA_KNOWN_FIELDS),
        **{name: row.text(raw) for name, raw in METADATA_TEXT_FIELDS},
        **layers,
    )


def decode_data_code_json(body: bytes) -> DataCodeResponse:
    text, payload = load_json_object(body)
    root = FieldMap(payload)
    return DataCodeResponse(
        meta=_meta(root),
        parameter=build_code_parameter_echo(_parameter_map(root)),
        next_position=_next_position(root),
        series=tuple(_series_from_row(row) for row in _resultset(root)),
        raw=text,
    )


def decode_data_layer_json(body: bytes) -> DataLayerResponse:
    text, payload = load_json_object(body)
    root = FieldMap(payload)
    return DataLayerResponse(
        meta=_meta(root),
        parameter=build_layer_parameter_echo(_parameter_map(root)),
        next_position=_next_position(root),
        series=tuple(_series_from_row(row) for row in _resultset(root)),
        raw=text,
    )


def decode_metadata_json(body: bytes) -> MetadataResponse:
    text, payload = load_json_object(body)
    root = FieldMap(payload)
    return MetadataResponse(
        meta=_meta(root),
        db=root.text("DB") or "",
        entries=tuple(_metadata_from_row(row) for row in _resultset(root)),
        raw=text,
    )


__all__ = [
    "decode_data_code_json",
    "decode_data_layer_json",
    "decode_metadata_json",
]
