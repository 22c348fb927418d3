"""Error types and retry classification inputs."""

from __future__ import annotations


class BojError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status


class BojValidationError(BojError):
    """Invalid input rejected before any request is sent."""


class BojDecodeError(BojError):
    """Response payload does not match the documented JSON/CSV shape."""


class BojTransportError(BojError):
    """Network/transport-level failure."""


class BojClientClosedError(BojError):
    """Raised when client is used after close."""


class BojApiError(BojError):
    """BOJ reported STATUS != 200 in a successfully decoded response."""

    def __init__(
        self,
        status: int,
        message_id: str,
        message: str,
        *,
        http_status: int | None = None,
    ) -> None:
        super().__init__(
            f"BOJ API error status={status} message_id={message_id} message={message}",
            http_status=http_status,
        )
        self.status = status
        self.message_id = message_id
        self.api_message = message


__all__ = [
    "BojError",
    "BojValidationError",
    "BojDecodeError",
    "BojTransportError",
    "BojClientClosedError",
    "BojApiError",
]
