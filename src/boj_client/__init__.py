"""Public package exports for the BOJ statistics API client."""

from .async_client import AsyncBojClient
from .client import BojClient
from .config import BojClientConfig
from .core.errors import (
    BojApiError,
    BojClientClosedError,
    BojDecodeError,
    BojError,
    BojTransportError,
    BojValidationError,
)

__all__ = [
    "BojClient",
    "AsyncBojClient",
    "BojClientConfig",
    "BojError",
    "BojValidationError",
    "BojDecodeError",
    "BojTransportError",
    "BojApiError",
    "BojClientClosedError",
]
