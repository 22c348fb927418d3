"""Request parameter builders for timeseries endpoints.

Key order is fixed (format, lang, db, frequency, layer, startDate, endDate,
code, startPosition) so that a query always maps to the same URL.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.errors import BojValidationError
from .queries import DataCodeQuery, DataLayerQuery, MetadataQuery

QueryPairs = list[tuple[str, str]]


def _option_pairs(query: DataCodeQuery | DataLayerQuery | MetadataQuery) -> QueryPairs:
    pairs: QueryPairs = []
    if query.format is not None:
        pairs.append(("format", query.format.value))
    if query.lang is not None:
        pairs.append(("lang", query.lang.value))
    pairs.append(("db", query.db))
    return pairs


def build_layer_param(query: DataLayerQuery) -> str:
    return ",".join(query.layer)


def build_data_code_params(query: DataCodeQuery) -> QueryPairs:
    pairs = _option_pairs(query)
    if query.start_date is not None:
        pairs.append(("startDate", query.start_date))
    if query.end_date is not None:
        pairs.append(("endDate", query.end_date))
    pairs.append(("code", ",".join(query.code)))
    if query.start_position is not None:
        pairs.append(("startPosition", str(query.start_position)))
    return pairs


def build_data_layer_params(query: DataLayerQuery) -> QueryPairs:
    pairs = _option_pairs(query)
    pairs.append(("frequency", query.frequency.value))
    pairs.append(("layer", build_layer_param(query)))
    if query.start_date is not None:
        pairs.append(("startDate", query.start_date))
    if query.end_date is not None:
        pairs.append(("endDate", query.end_date))
    if query.start_position is not None:
        pairs.append(("startPosition", str(query.start_position)))
    return pairs


def build_metadata_params(query: MetadataQuery) -> QueryPairs:
    return _option_pairs(query)


def _pairs_to_dict(pairs: Iterable[tuple[str, str]], *, allowed: frozenset[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in pairs:
        if key not in allowed:
            raise BojValidationError(f"unexpected parameter: {key}")
        if key in params:
            raise BojValidationError(f"duplicate parameter: {key}")
        params[key] = value
    return params


def _parse_start_position(value: str | None) -> int | None:
    if value is None:
        return None
    if not (value.isascii() and value.isdigit()):
        raise BojValidationError("STARTPOSITION must be an integer")
    return int(value)


def _require(params: dict[str, str], key: str) -> str:
    try:
        return params[key]
    except KeyError:
        raise BojValidationError(f"{key} is required") from None


_CODE_KEYS = frozenset({"format", "lang", "db", "startDate", "endDate", "code", "startPosition"})
_LAYER_KEYS = frozenset(
    {"format", "lang", "db", "frequency", "layer", "startDate", "endDate", "startPosition"}
)
_METADATA_KEYS = frozenset({"format", "lang", "db"})


def parse_data_code_params(pairs: Iterable[tuple[str, str]]) -> DataCodeQuery:
    """Rebuild a query from ``build_data_code_params`` output."""

    params = _pairs_to_dict(pairs, allowed=_CODE_KEYS)
    return DataCodeQuery(
        db=_require(params, "db"),
        code=_require(params, "code").split(","),
        format=params.get("format"),
        lang=params.get("lang"),
        start_date=params.get("startDate"),
        end_date=params.get("endDate"),
        start_position=_parse_start_position(params.get("startPosition")),
    )


def parse_data_layer_params(pairs: Iterable[tuple[str, str]]) -> DataLayerQuery:
    params = _pairs_to_dict(pairs, allowed=_LAYER_KEYS)
    return DataLayerQuery(
        db=_require(params, "db"),
        frequency=_require(params, "frequency"),
        layer=_require(params, "layer").split(","),
        format=params.get("format"),
        lang=params.get("lang"),
        start_date=params.get("startDate"),
        end_date=params.get("endDate"),
        start_position=_parse_start_position(params.get("startPosition")),
    )


def parse_metadata_params(pairs: Iterable[tuple[str, str]]) -> MetadataQuery:
    params = _pairs_to_dict(pairs, allowed=_METADATA_KEYS)
    return MetadataQuery(
        db=_require(params, "db"),
        format=params.get("format"),
        lang=params.get("lang"),
    )


__all__ = [
    "QueryPairs",
    "build_layer_param",
    "build_data_code_params",
    "build_data_layer_params",
    "build_metadata_params",
    "parse_data_code_params",
    "parse_data_layer_params",
    "parse_metadata_params",
]
