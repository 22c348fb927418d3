"""Decoders from BOJ CSV payloads into the same models as the JSON decoders.

A BOJ CSV body is a small key/value section (``STATUS``, ``MESSAGEID``,
``PARAMETER`` rows and so on) followed by a data table whose header row starts
with ``SERIES_CODE``. Data tables repeat one row per observation; rows that
agree on every column except ``SURVEY_DATES`` and ``VALUES`` belong to the same
series.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from ..core.canonical import normalize_optional, parse_optional_uint, parse_status
from ..core.errors import BojDecodeError
from ..core.models import ResponseMeta
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
from .options import CsvEncoding

_BOM = "\ufeff"
_META_KEYS = frozenset({"STATUS", "MESSAGEID", "MESSAGE", "DATE"})

Row = list[str]


@dataclass(slots=True)
class CsvPayload:
    """Sections of a CSV body before any typed conversion."""

    meta: dict[str, str] = field(default_factory=dict)
    parameter: dict[str, str] = field(default_factory=dict)
    next_position: str | None = None
    db: str | None = None
    header: Row = field(default_factory=list)
    data_rows: list[Row] = field(default_factory=list)


def decode_csv_text(body: bytes, encoding: CsvEncoding) -> str:
    """Decode a CSV body strictly with the hinted encoding.

    A Shift_JIS-hinted body that is valid UTF-8 and holds a 3- or 4-byte
    UTF-8 sequence is rejected. Two-byte UTF-8 pairs are left to cp932,
    since half-width katakana such as ``C3 BD`` are valid in both.
    """

    if encoding is CsvEncoding.SHIFT_JIS and _has_wide_utf8_sequence(body):
        raise BojDecodeError("Shift_JIS CSV payload is UTF-8 encoded")
    try:
        return body.decode(encoding.value)
    except UnicodeDecodeError as exc:
        raise BojDecodeError(f"invalid {encoding.name} CSV payload: {exc}") from exc


def _has_wide_utf8_sequence(body: bytes) -> bool:
    if body.isascii():
        return False
    try:
        body.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return any(byte >= 0xE0 for byte in body)


def read_csv_rows(text: str) -> list[Row]:
    """Split CSV text into trimmed rows; rows may have any number of cells."""

    rows: list[Row] = []
    try:
        for record in csv.reader(io.StringIO(text, newline="")):
            row = [cell.strip() for cell in record]
            if not rows and row:
                row[0] = row[0].lstrip(_BOM).strip()
            rows.append(row)
    except csv.Error as exc:
        raise BojDecodeError(f"invalid CSV payload: {exc}") from exc
    return rows


def _is_blank(row: Row) -> bool:
    return all(cell == "" for cell in row)


def _cell(row: Row, index: int) -> str:
    return row[index] if index < len(row) else ""


def split_csv_payload(rows: Sequence[Row]) -> CsvPayload:
    payload = CsvPayload()
    for position, row in enumerate(rows):
        if _is_blank(row):
            continue
        key = row[0].upper()
        if key in _META_KEYS:
            payload.meta[key] = _cell(row, 1)
        elif key == "PARAMETER":
            name = _cell(row, 1).upper()
            if name:
                payload.parameter[name] = _cell(row, 2)
        elif key == "NEXTPOSITION":
            payload.next_position = _cell(row, 1)
        elif key == "DB":
            payload.db = _cell(row, 1)
        elif key == SERIES_CODE:
            payload.header = list(row)
            payload.data_rows = [r for r in rows[position + 1 :] if not _is_blank(r)]
            break
    return payload


class _HeaderIndex:
    __slots__ = ("header", "_positions")

    def __init__(self, header: Row) -> None:
        self.header = header
        # Later duplicates win.
        self._positions = {name.upper(): index for index, name in enumerate(header)}

    def find(self, column: str) -> int | None:
        return self._positions.get(column.upper())

    def require(self, column: str) -> int:
        index = self.find(column)
        if index is None:
            raise BojDecodeError(f"{column} column is required in CSV data")
        return index

    def text(self, row: Row, column: str) -> str | None:
        index = self.find(column)
        if index is None:
            return None
        return normalize_optional(_cell(row, index))

    def extras(self, row: Row, known_columns: Sequence[str]) -> dict[str, str | None]:
        known = {column.upper() for column in known_columns}
        return {
            name: normalize_optional(_cell(row, index))
            for index, name in enumerate(self.header)
            if name.upper() not in known
        }


def _meta(payload: CsvPayload) -> ResponseMeta:
    return ResponseMeta(
        status=parse_status(payload.meta.get("STATUS")),
        message_id=payload.meta.get("MESSAGEID", ""),
        message=payload.meta.get("MESSAGE", ""),
        date=normalize_optional(payload.meta.get("DATE")),
    )


def _next_position(payload: CsvPayload) -> int | None:
    return parse_optional_uint(payload.next_position, field="NEXTPOSITION")


def _series_from_group(columns: _HeaderIndex, row: Row, points: list[DataPoint]) -> TimeSeries:
    return TimeSeries(
        series_code=require_series_code(columns.text(row, SERIES_CODE)),
        points=tuple(points),
        extras=columns.extras(row, SERIES_KNOWN_FIELDS),
        **{name: columns.text(row, raw) for name, raw in SERIES_TEXT_FIELDS},
    )


def group_series(payload: CsvPayload) -> tuple[TimeSeries, ...]:
    """Fold observation rows into series, keeping first-seen series order."""

    if not payload.header:
        return ()

    columns = _HeaderIndex(payload.header)
    code_index = columns.require(SERIES_CODE)
    date_index = columns.require(SURVEY_DATES)
    value_index = columns.require(VALUES)
    width = len(payload.header)

    groups: dict[tuple[str, ...], tuple[Row, list[DataPoint]]] = {}
    for row in payload.data_rows:
        if not _cell(row, code_index):
            raise BojDecodeError("SERIES_CODE must not be empty")
        survey_date = normalize_optional(_cell(row, date_index))
        if survey_date is None:
            raise BojDecodeError("SURVEY_DATES must not be empty")
        point = DataPoint(survey_date=survey_date, value=normalize_optional(_cell(row, value_index)))

        key = tuple(
            _cell(row, index) for index in range(width) if index not in (date_index, value_index)
        )
        group = groups.get(key)
        if group is None:
            groups[key] = (row, [point])
        else:
            group[1].append(point)

    return tuple(_series_from_group(columns, row, points) for row, points in groups.values())


def _metadata_entry(columns: _HeaderIndex, row: Row) -> MetadataEntry:
    layers = {
        name: parse_optional_uint(columns.text(row, raw), field=raw)
        for name, raw in METADATA_LAYER_FIELDS
    }
    return MetadataEntry(
        extras=columns.extras(row, METADATA_KNOWN_FIELDS),
        **{name: columns.text(row, raw) for name, raw in METADATA_TEXT_FIELDS},
        **layers,
    )


def _load(body: bytes, encoding: CsvEncoding) -> tuple[str, CsvPayload]:
    text = decode_csv_text(body, encoding)
    return text, split_csv_payload(read_csv_rows(text))


def _decode_series_response(
    body: bytes,
    encoding: CsvEncoding,
    build_echo: Callable[[Mapping[str, str]], object],
) -> dict[str, object]:
    text, payload = _load(body, encoding)
    return {
        "meta": _meta(payload),
        "parameter": build_echo(payload.parameter),
        "next_position": _next_position(payload),
        "series": group_series(payload),
        "raw": text,
    }


def decode_data_code_csv(body: bytes, encoding: CsvEncoding) -> DataCodeResponse:
    fields = _decode_series_response(body, encoding, build_code_parameter_echo)
    return DataCodeResponse(**fields)  # type: ignore[arg-type]


def decode_data_layer_csv(body: bytes, encoding: CsvEncoding) -> DataLayerResponse:
    fields = _decode_series_response(body, encoding, build_layer_parameter_echo)
    return DataLayerResponse(**fields)  # type: ignore[arg-type]


def decode_metadata_csv(body: bytes, encoding: CsvEncoding) -> MetadataResponse:
    text, payload = _load(body, encoding)
    meta = _meta(payload)
    db = normalize_optional(payload.db) or normalize_optional(payload.parameter.get("DB")) or ""
    columns = _HeaderIndex(payload.header)
    return MetadataResponse(
        meta=meta,
        db=db,
        entries=tuple(_metadata_entry(columns, row) for row in payload.data_rows),
        raw=text,
    )


__all__ = [
    "CsvPayload",
    "decode_csv_text",
    "read_csv_rows",
    "split_csv_payload",
    "group_series",
    "decode_data_code_csv",
    "decode_data_layer_csv",
    "decode_metadata_csv",
]
