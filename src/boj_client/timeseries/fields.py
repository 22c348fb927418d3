"""BOJ field names and the echoed-parameter builders shared by both decoders."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..core.canonical import normalize_optional, parse_optional_uint
from ..core.errors import BojDecodeError
from .models import CodeParameterEcho, LayerParameterEcho

SERIES_CODE = "SERIES_CODE"
SURVEY_DATES = "SURVEY_DATES"
VALUES = "VALUES"

# (model attribute, BOJ field) for text attributes shared by series rows.
SERIES_TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("name_ja", "NAME_OF_TIME_SERIES_J"),
    ("name_en", "NAME_OF_TIME_SERIES"),
    ("unit_ja", "UNIT_J"),
    ("unit_en", "UNIT"),
    ("frequency", "FREQUENCY"),
    ("category_ja", "CATEGORY_J"),
    ("category_en", "CATEGORY"),
    ("last_update", "LAST_UPDATE"),
)

METADATA_TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("series_code", SERIES_CODE),
    ("name_ja", "NAME_OF_TIME_SERIES_J"),
    ("name_en", "NAME_OF_TIME_SERIES"),
    ("unit_ja", "UNIT_J"),
    ("unit_en", "UNIT"),
    ("frequency", "FREQUENCY"),
    ("category_ja", "CATEGORY_J"),
    ("category_en", "CATEGORY"),
    ("start_of_series", "START_OF_THE_TIME_SERIES"),
    ("end_of_series", "END_OF_THE_TIME_SERIES"),
    ("last_update", "LAST_UPDATE"),
    ("notes_ja", "NOTES_J"),
    ("notes_en", "NOTES"),
)

METADATA_LAYER_FIELDS: tuple[tuple[str, str], ...] = tuple(
    (f"layer{level}", f"LAYER{level}") for level in range(1, 6)
)

SERIES_KNOWN_FIELDS: tuple[str, ...] = (
    SERIES_CODE,
    *(raw for _, raw in SERIES_TEXT_FIELDS),
    SURVEY_DATES,
    VALUES,
)

METADATA_KNOWN_FIELDS: tuple[str, ...] = (
    *(raw for _, raw in METADATA_TEXT_FIELDS),
    *(raw for _, raw in METADATA_LAYER_FIELDS),
)

_CODE_ECHO_TEXT = (
    ("format", "FORMAT"),
    ("lang", "LANG"),
    ("db", "DB"),
    ("start_date", "STARTDATE"),
    ("end_date", "ENDDATE"),
)
_LAYER_ECHO_TEXT = (*_CODE_ECHO_TEXT, ("frequency", "FREQUENCY"))


def _echo_layer(value: str | None, *, field: str) -> int | None:
    # BOJ may echo the wildcard back as given.
    if normalize_optional(value) == "*":
        return None
    return parse_optional_uint(value, field=field)


def _build_echo(
    params: Mapping[str, str],
    *,
    text_fields: tuple[tuple[str, str], ...],
    int_fields: tuple[tuple[str, str, Callable[..., int | None]], ...],
) -> dict[str, object]:
    known = {raw for _, raw in text_fields} | {raw for _, raw, _ in int_fields}
    kwargs: dict[str, object] = {
        name: normalize_optional(params.get(raw)) for name, raw in text_fields
    }
    for name, raw, parse in int_fields:
        kwargs[name] = parse(params.get(raw), field=raw)
    extras: dict[str, str] = {}
    for key, value in params.items():
        if key in known:
            continue
        text = normalize_optional(value)
        if text is not None:
            extras[key] = text
    kwargs["extras"] = extras
    return kwargs


def build_code_parameter_echo(params: Mapping[str, str]) -> CodeParameterEcho:
    """Build the code echo from parameters keyed by upper-cased name."""

    kwargs = _build_echo(
        params,
        text_fields=_CODE_ECHO_TEXT,
        int_fields=(("start_position", "STARTPOSITION", parse_optional_uint),),
    )
    return CodeParameterEcho(**kwargs)  # type: ignore[arg-type]


def build_layer_parameter_echo(params: Mapping[str, str]) -> LayerParameterEcho:
    kwargs = _build_echo(
        params,
        text_fields=_LAYER_ECHO_TEXT,
        int_fields=(
            *((name, raw, _echo_layer) for name, raw in METADATA_LAYER_FIELDS),
            ("start_position", "STARTPOSITION", parse_optional_uint),
        ),
    )
    return LayerParameterEcho(**kwargs)  # type: ignore[arg-type]


def require_series_code(value: str | None) -> str:
    code = normalize_optional(value)
    if code is None:
        raise BojDecodeError("SERIES_CODE must not be empty")
    return code


__all__ = [
    "SERIES_CODE",
    "SURVEY_DATES",
    "VALUES",
    "SERIES_TEXT_FIELDS",
    "METADATA_TEXT_FIELDS",
    "METADATA_LAYER_FIELDS",
    "SERIES_KNOWN_FIELDS",
    "METADATA_KNOWN_FIELDS",
    "build_code_parameter_echo",
    "build_layer_parameter_echo",
    "require_series_code",
]
