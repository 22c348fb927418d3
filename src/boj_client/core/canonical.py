"""Field canonicalization shared by the JSON and CSV decoders."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .errors import BojDecodeError

UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFF_FFFF


class FieldMap:
    """Case-insensitive read-only view over a decoded JSON object.

    Keys are indexed once by their upper-cased form. When two keys differ only
    by case the first one wins.
    """

    __slots__ = ("_source", "_index")

    def __init__(self, source: Mapping[str, object]) -> None:
        self._source = source
        index: dict[str, str] = {}
        for key in source:
            index.setdefault(key.upper(), key)
        self._index = index

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._source)

    def get(self, key: str) -> object | None:
        original = self._index.get(key.upper())
        if original is None:
            return None
        return self._source[original]

    def text(self, key: str) -> str | None:
        """Scalar field as text; blank means absent."""

        return normalize_optional(scalar_to_text(self.get(key), field=key))

    def extras(self, known_keys: Iterable[str]) -> dict[str, str | None]:
        known = {key.upper() for key in known_keys}
        return {
            key: normalize_optional(scalar_to_text(value, field=key))
            for key, value in self._source.items()
            if key.upper() not in known
        }


def scalar_to_text(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, dict)):
        raise BojDecodeError(f"{field} must be a scalar, not a nested array/object")
    raise BojDecodeError(f"{field} has unsupported type {type(value).__name__}")


def normalize_optional(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    if text == "":
        return None
    return text


def parse_optional_uint(value: str | None, *, field: str, maximum: int = UINT32_MAX) -> int | None:
    text = normalize_optional(value)
    if text is None or text.lower() == "null":
        return None
    if not (text.isascii() and text.isdigit()):
        raise BojDecodeError(f"{field} is not a valid integer: {text!r}")
    number = int(text)
    if number > maximum:
        raise BojDecodeError(f"{field} is out of range: {text}")
    return number


def parse_status(value: object) -> int:
    if value is None:
        raise BojDecodeError("STATUS not found")
    text = scalar_to_text(value, field="STATUS")
    status = parse_optional_uint(text, field="STATUS", maximum=UINT16_MAX)
    if status is None:
        raise BojDecodeError("STATUS must not be empty")
    return status


def upper_key_map(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collect echoed parameters keyed by upper-cased name; the last one wins."""

    return {key.strip().upper(): value for key, value in pairs if key.strip()}


__all__ = [
    "UINT16_MAX",
    "UINT32_MAX",
    "FieldMap",
    "scalar_to_text",
    "normalize_optional",
    "parse_optional_uint",
    "parse_status",
    "upper_key_map",
]
