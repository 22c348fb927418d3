"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import BojClientConfig
from .core.errors import BojValidationError
from .core.retry import RetryPolicy


def validate_client_config(config: BojClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise BojValidationError(str(exc)) from exc


def resolve_retry_policy(
    *,
    config: BojClientConfig,
    retry_policy: RetryPolicy | None,
) -> RetryPolicy:
    if retry_policy is not None:
        return retry_policy
    return config.retry.to_policy()


__all__ = [
    "validate_client_config",
    "resolve_retry_policy",
]
