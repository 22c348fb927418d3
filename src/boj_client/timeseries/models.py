"""Timeseries domain and response models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..core.models import ResponseMeta


def _coerce_dict(instance: object, name: str) -> None:
    value = getattr(instance, name)
    if not isinstance(value, dict):
        object.__setattr__(instance, name, dict(value))


def _coerce_tuple(instance: object, name: str) -> None:
    value = getattr(instance, name)
    if not isinstance(value, tuple):
        object.__setattr__(instance, name, tuple(value))


@dataclass(slots=True, frozen=True)
class DataPoint:
    """One observation. ``value`` is None when BOJ marks it missing."""

    survey_date: str
    value: str | None


@dataclass(slots=True, frozen=True)
class CodeParameterEcho:
    format: str | None = None
    lang: str | None = None
    db: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_position: int | None = None
    extras: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _coerce_dict(self, "extras")


@dataclass(slots=True, frozen=True)
class LayerParameterEcho:
    format: str | None = None
    lang: str | None = None
    db: str | None = None
    frequency: str | None = None
    layer1: int | None = None
    layer2: int | None = None
    layer3: int | None = None
    layer4: int | None = None
    layer5: int | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_position: int | None = None
    extras: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _coerce_dict(self, "extras")


@dataclass(slots=True, frozen=True)
class TimeSeries:
    """One series from getDataCode or getDataLayer, points in source order."""

    series_code: str
    name_ja: str | None = None
    name_en: str | None = None
    unit_ja: str | None = None
    unit_en: str | None = None
    frequency: str | None = None
    category_ja: str | None = None
    category_en: str | None = None
    last_update: str | None = None
    points: tuple[DataPoint, ...] | list[DataPoint] = ()
    extras: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.series_code:
            raise ValueError("series_code must not be empty")
        _coerce_tuple(self, "points")
        _coerce_dict(self, "extras")


@dataclass(slots=True, frozen=True)
class MetadataEntry:
    series_code: str | None = None
    name_ja: str | None = None
    name_en: str | None = None
    unit_ja: str | None = None
    unit_en: str | None = None
    frequency: str | None = None
    category_ja: str | None = None
    category_en: str | None = None
    layer1: int | None = None
    layer2: int | None = None
    layer3: int | None = None
    layer4: int | None = None
    layer5: int | None = None
    start_of_series: str | None = None
    end_of_series: str | None = None
    last_update: str | None = None
    notes_ja: str | None = None
    notes_en: str | None = None
    extras: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _coerce_dict(self, "extras")


@dataclass(slots=True, frozen=True)
class DataCodeResponse:
    meta: ResponseMeta
    parameter: CodeParameterEcho
    next_position: int | None
    series: tuple[TimeSeries, ...] | list[TimeSeries]
    raw: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        _coerce_tuple(self, "series")


@dataclass(slots=True, frozen=True)
class DataLayerResponse:
    meta: ResponseMeta
    parameter: LayerParameterEcho
    next_position: int | None
    series: tuple[TimeSeries, ...] | list[TimeSeries]
    raw: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        _coerce_tuple(self, "series")


@dataclass(slots=True, frozen=True)
class MetadataResponse:
    meta: ResponseMeta
    db: str
    entries: tuple[MetadataEntry, ...] | list[MetadataEntry]
    raw: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        _coerce_tuple(self, "entries")


__all__ = [
    "DataPoint",
    "CodeParameterEcho",
    "LayerParameterEcho",
    "TimeSeries",
    "MetadataEntry",
    "DataCodeResponse",
    "DataLayerResponse",
    "MetadataResponse",
]
