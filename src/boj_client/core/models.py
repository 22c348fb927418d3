"""Core response models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ResponseMeta:
    """BOJ response envelope. ``status`` 200 is the only success value."""

    status: int
    message_id: str
    message: str
    date: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == 200


__all__ = [
    "ResponseMeta",
]
