"""Request option enums."""

from __future__ import annotations

from enum import Enum

from ..core.errors import BojValidationError


class _QueryOption(str, Enum):
    @classmethod
    def parse(cls, value: "str | _QueryOption"):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for member in cls:
                if member.value.upper() == text.upper():
                    return member
        raise BojValidationError(f"unsupported {cls.__name__.lower()}: {value!r}")

    def __str__(self) -> str:
        return self.value


class Format(_QueryOption):
    JSON = "json"
    CSV = "csv"


class Language(_QueryOption):
    JP = "jp"
    EN = "en"


class Frequency(_QueryOption):
    CY = "CY"
    FY = "FY"
    CH = "CH"
    FH = "FH"
    Q = "Q"
    M = "M"
    W = "W"
    D = "D"


class CsvEncoding(Enum):
    """Character encoding expected for CSV payloads."""

    SHIFT_JIS = "cp932"
    UTF8 = "utf-8"

    @classmethod
    def for_language(cls, lang: Language | None) -> "CsvEncoding":
        if lang is Language.EN:
            return cls.UTF8
        return cls.SHIFT_JIS


__all__ = [
    "Format",
    "Language",
    "Frequency",
    "CsvEncoding",
]
