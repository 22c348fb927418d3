"""Payload sniffing and JSON loading shared by all endpoints."""

from __future__ import annotations

import json
from enum import Enum

from .errors import BojDecodeError

_JSON_WHITESPACE = b" \t\r\n"


class PayloadKind(Enum):
    JSON = "json"
    CSV = "csv"
    UNKNOWN = "unknown"


def looks_like_json(body: bytes) -> bool:
    """True when the first non-whitespace byte opens a JSON object or array."""

    stripped = body.lstrip(_JSON_WHITESPACE)
    return stripped[:1] in (b"{", b"[")


def classify_content_type(content_type: str | None) -> PayloadKind:
    if not content_type:
        return PayloadKind.UNKNOWN
    lowered = content_type.lower()
    if "json" in lowered:
        return PayloadKind.JSON
    if "csv" in lowered:
        return PayloadKind.CSV
    return PayloadKind.UNKNOWN


def load_json_object(body: bytes) -> tuple[str, dict[str, object]]:
    """Decode a JSON payload into ``(text, top-level object)``.

    Numbers are kept as their literal text so that values survive unchanged,
    e.g. ``1.50`` stays ``"1.50"``.
    """

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BojDecodeError(f"invalid UTF-8 JSON payload: {exc}") from exc

    try:
        payload = json.loads(text, parse_int=str, parse_float=str, parse_constant=str)
    except json.JSONDecodeError as exc:
        raise BojDecodeError(f"invalid JSON payload: {exc}") from exc

    if not isinstance(payload, dict):
        raise BojDecodeError("top-level JSON object is required")
    return text, payload


__all__ = [
    "PayloadKind",
    "looks_like_json",
    "classify_content_type",
    "load_json_object",
]
