"""Input validation for BOJ request parameters.

Only character-set and shape rules are enforced here. Unknown database codes
are accepted so new BOJ databases work without a client release.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.canonical import UINT32_MAX
from ..core.errors import BojValidationError
from .options import Frequency

MAX_CODES_PER_REQUEST = 1250
MAX_LAYER_DEPTH = 5
LAYER_WILDCARD = "*"
MIN_YEAR = 1850
MAX_YEAR = 2050

_FORBIDDEN_CHARS = frozenset('<>!|\\;\'"')

# (label, min suffix, max suffix) for YYYYXX frequencies; None means YYYY only.
_FREQUENCY_DATE_RULES: dict[Frequency, tuple[str, int, int] | None] = {
    Frequency.CY: None,
    Frequency.FY: None,
    Frequency.CH: ("CH/FH", 1, 2),
    Frequency.FH: ("CH/FH", 1, 2),
    Frequency.Q: ("Q", 1, 4),
    Frequency.M: ("M/W/D", 1, 12),
    Frequency.W: ("M/W/D", 1, 12),
    Frequency.D: ("M/W/D", 1, 12),
}


def validate_identifier(name: str, value: str) -> None:
    if not isinstance(value, str) or value.strip() == "":
        raise BojValidationError(f"{name} is required")
    if not value.isascii():
        raise BojValidationError(f"{name} must use ASCII characters only")
    if any(ch in _FORBIDDEN_CHARS for ch in value):
        raise BojValidationError(f"{name} contains forbidden character")


def validate_db(value: str) -> None:
    validate_identifier("DB", value)
    if "," in value:
        raise BojValidationError("DB must not include comma")


def validate_code(value: str) -> None:
    validate_identifier("CODE", value)
    if "," in value:
        raise BojValidationError(
            "CODE must be passed as separate items, not comma-containing strings"
        )


def validate_code_list(values: Sequence[str]) -> None:
    if len(values) == 0:
        raise BojValidationError("CODE is required")
    if len(values) > MAX_CODES_PER_REQUEST:
        raise BojValidationError(
            f"CODE must contain {MAX_CODES_PER_REQUEST} or fewer series codes"
        )
    for value in values:
        validate_code(value)


def validate_layer_token(value: str) -> None:
    validate_identifier("LAYER", value)
    if value == LAYER_WILDCARD:
        return
    if not value.isdigit() or not 0 < int(value) <= UINT32_MAX:
        raise BojValidationError("LAYER value must be '*' or a positive integer")


def validate_layer_list(values: Sequence[str]) -> None:
    if len(values) == 0:
        raise BojValidationError("LAYER is required")
    if len(values) > MAX_LAYER_DEPTH:
        raise BojValidationError(f"LAYER accepts 1 to {MAX_LAYER_DEPTH} levels only")
    for value in values:
        validate_layer_token(value)


def _ensure_numeric(value: str) -> None:
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise BojValidationError("date must be numeric")


def _validate_year(value: str) -> None:
    year = int(value[:4])
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise BojValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")


def _validate_yyyyxx(value: str, *, low: int, high: int, label: str) -> None:
    if len(value) != 6:
        raise BojValidationError(f"date format for {label} must be YYYYXX")
    _validate_year(value)
    suffix = int(value[4:])
    if not low <= suffix <= high:
        raise BojValidationError(
            f"date suffix for {label} must be between {low:02d} and {high:02d}"
        )


def validate_date_generic(value: str) -> None:
    _ensure_numeric(value)
    if len(value) == 4:
        _validate_year(value)
        return
    if len(value) == 6:
        _validate_year(value)
        if not 1 <= int(value[4:]) <= 12:
            raise BojValidationError("date suffix must be between 01 and 12")
        return
    raise BojValidationError("date format must be YYYY or YYYYXX (XX=01..12)")


def validate_date_for_frequency(value: str, frequency: Frequency) -> None:
    _ensure_numeric(value)
    rule = _FREQUENCY_DATE_RULES[frequency]
    if rule is None:
        if len(value) != 4:
            raise BojValidationError("date format for CY/FY must be YYYY")
        _validate_year(value)
        return
    label, low, high = rule
    _validate_yyyyxx(value, low=low, high=high, label=label)


def validate_date_order(start: str, end: str) -> None:
    if len(start) != len(end):
        raise BojValidationError("STARTDATE and ENDDATE formats must match")
    if start > end:
        raise BojValidationError("STARTDATE must be earlier than or equal to ENDDATE")


def validate_start_position(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BojValidationError("STARTPOSITION must be an integer")
    if value < 1:
        raise BojValidationError("STARTPOSITION must be >= 1")
    if value > UINT32_MAX:
        raise BojValidationError(f"STARTPOSITION must be <= {UINT32_MAX}")


__all__ = [
    "MAX_CODES_PER_REQUEST",
    "MAX_LAYER_DEPTH",
    "LAYER_WILDCARD",
    "validate_identifier",
    "validate_db",
    "validate_code",
    "validate_code_list",
    "validate_layer_token",
    "validate_layer_list",
    "validate_date_generic",
    "validate_date_for_frequency",
    "validate_date_order",
    "validate_start_position",
]
