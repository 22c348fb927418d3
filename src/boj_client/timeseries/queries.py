"""Validated query builders for the three BOJ endpoints.

Queries are immutable. Construction validates every field in a fixed order
and raises the first ``BojValidationError``; the ``with_*`` setters return a
new query and go through the same validation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import ClassVar

from .options import CsvEncoding, Format, Frequency, Language
from .validators import (
    validate_code_list,
    validate_date_for_frequency,
    validate_date_generic,
    validate_date_order,
    validate_db,
    validate_layer_list,
    validate_start_position,
)


def _as_str_tuple(values: Sequence[str], *, name: str) -> tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError(f"{name} must be a sequence of str, not str")
    if not isinstance(values, Sequence):
        raise TypeError(f"{name} must be Sequence[str]")
    for value in values:
        if not isinstance(value, str):
            raise TypeError(f"{name} entries must be str")
    return tuple(values)


def _validate_dates(
    start_date: str | None,
    end_date: str | None,
    validate: Callable[[str], None],
) -> None:
    if start_date is not None:
        validate(start_date)
    if end_date is not None:
        validate(end_date)
    if start_date is not None and end_date is not None:
        validate_date_order(start_date, end_date)


def _normalize_common(query: object, *, db: str) -> None:
    validate_db(db)
    object.__setattr__(query, "db", db.upper())


@dataclass(slots=True, frozen=True)
class DataCodeQuery:
    """``getDataCode`` query: up to 1250 series codes from one database."""

    endpoint: ClassVar[str] = "/api/v1/getDataCode"

    db: str
    code: Sequence[str]
    format: Format | None = None
    lang: Language | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_position: int | None = None

    def __post_init__(self) -> None:
        _normalize_common(self, db=self.db)
        codes = _as_str_tuple(self.code, name="code")
        validate_code_list(codes)
        object.__setattr__(self, "code", codes)
        if self.format is not None:
            object.__setattr__(self, "format", Format.parse(self.format))
        if self.lang is not None:
            object.__setattr__(self, "lang", Language.parse(self.lang))
        _validate_dates(self.start_date, self.end_date, validate_date_generic)
        if self.start_position is not None:
            validate_start_position(self.start_position)

    @property
    def csv_encoding_hint(self) -> CsvEncoding:
        return CsvEncoding.for_language(self.lang)

    def with_codes(self, codes: Sequence[str]) -> "DataCodeQuery":
        return replace(self, code=codes)

    def with_format(self, format: Format | str) -> "DataCodeQuery":
        return replace(self, format=format)

    def with_lang(self, lang: Language | str) -> "DataCodeQuery":
        return replace(self, lang=lang)

    def with_start_date(self, value: str) -> "DataCodeQuery":
        return replace(self, start_date=value)

    def with_end_date(self, value: str) -> "DataCodeQuery":
        return replace(self, end_date=value)

    def with_start_position(self, value: int) -> "DataCodeQuery":
        return replace(self, start_position=value)


@dataclass(slots=True, frozen=True)
class DataLayerQuery:
    """``getDataLayer`` query: one frequency and a 1 to 5 level layer path.

    Dates are checked against the frequency, e.g. ``Q`` accepts ``YYYY01`` to
    ``YYYY04`` and ``CY``/``FY`` accept ``YYYY`` only.
    """

    endpoint: ClassVar[str] = "/api/v1/getDataLayer"

    db: str
    frequency: Frequency
    layer: Sequence[str]
    format: Format | None = None
    lang: Language | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_position: int | None = None

    def __post_init__(self) -> None:
        _normalize_common(self, db=self.db)
        frequency = Frequency.parse(self.frequency)
        object.__setattr__(self, "frequency", frequency)
        layers = _as_str_tuple(self.layer, name="layer")
        validate_layer_list(layers)
        object.__setattr__(self, "layer", layers)
        if self.format is not None:
            object.__setattr__(self, "format", Format.parse(self.format))
        if self.lang is not None:
            object.__setattr__(self, "lang", Language.parse(self.lang))
        _validate_dates(
            self.start_date,
            self.end_date,
            lambda value: validate_date_for_frequency(value, frequency),
        )
        if self.start_position is not None:
            validate_start_position(self.start_position)

    @property
    def csv_encoding_hint(self) -> CsvEncoding:
        return CsvEncoding.for_language(self.lang)

    def with_format(self, format: Format | str) -> "DataLayerQuery":
        return replace(self, format=format)

    def with_lang(self, lang: Language | str) -> "DataLayerQuery":
        return replace(self, lang=lang)

    def with_start_date(self, value: str) -> "DataLayerQuery":
        return replace(self, start_date=value)

    def with_end_date(self, value: str) -> "DataLayerQuery":
        return replace(self, end_date=value)

    def with_start_position(self, value: int) -> "DataLayerQuery":
        return replace(self, start_position=value)


@dataclass(slots=True, frozen=True)
class MetadataQuery:
    endpoint: ClassVar[str] = "/api/v1/getMetadata"

    db: str
    format: Format | None = None
    lang: Language | None = None

    def __post_init__(self) -> None:
        _normalize_common(self, db=self.db)
        if self.format is not None:
            object.__setattr__(self, "format", Format.parse(self.format))
        if self.lang is not None:
            object.__setattr__(self, "lang", Language.parse(self.lang))

    @property
    def csv_encoding_hint(self) -> CsvEncoding:
        return CsvEncoding.for_language(self.lang)

    def with_format(self, format: Format | str) -> "MetadataQuery":
        return replace(self, format=format)

    def with_lang(self, lang: Language | str) -> "MetadataQuery":
        return replace(self, lang=lang)


__all__ = [
    "DataCodeQuery",
    "DataLayerQuery",
    "MetadataQuery",
]
