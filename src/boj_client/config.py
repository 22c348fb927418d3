"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from .core.retry import RetryPolicy

DEFAULT_BASE_URL = "https://www.stat-search.boj.or.jp"


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings."""

    max_retries: int = 2
    initial_backoff_seconds: float = 0.2
    max_backoff_seconds: float | None = None

    def validate(self) -> None:
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError("retry.max_retries must be int")
        if self.max_retries < 0:
            raise ValueError("retry.max_retries must be >= 0")
        if self.initial_backoff_seconds < 0:
            raise ValueError("retry.initial_backoff_seconds must be >= 0")
        if self.max_backoff_seconds is not None and self.max_backoff_seconds < 0:
            raise ValueError("retry.max_backoff_seconds must be >= 0")

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            initial_backoff_seconds=self.initial_backoff_seconds,
            max_backoff_seconds=self.max_backoff_seconds,
        )


@dataclass(slots=True, frozen=True)
class DecodeConfig:
    """Response decoding settings.

    csv_error_json_fallback: when the response declares CSV but CSV decoding
    fails, try JSON next. BOJ reports errors as JSON even for ``format=csv``.
    """

    csv_error_json_fallback: bool = True

    def validate(self) -> None:
        if not isinstance(self.csv_error_json_fallback, bool):
            raise ValueError("decode.csv_error_json_fallback must be bool")


@dataclass(slots=True, frozen=True)
class BojClientConfig:
    """Runtime configuration for BOJ client."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = "boj-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    decode: DecodeConfig = field(default_factory=DecodeConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BojClientConfig":
        """Build a config from ``BOJ_*`` environment variables.

        Recognized: BOJ_BASE_URL, BOJ_TIMEOUT_MS, BOJ_RETRY_MAX,
        BOJ_RETRY_BACKOFF_MS. Unset variables keep their defaults.
        """

        env = os.environ if environ is None else environ
        config = cls()

        base_url = env.get("BOJ_BASE_URL")
        if base_url is not None:
            config = replace(config, base_url=base_url)

        timeout_ms = env.get("BOJ_TIMEOUT_MS")
        if timeout_ms is not None:
            timeout_seconds = _parse_env_int("BOJ_TIMEOUT_MS", timeout_ms) / 1000.0
            config = replace(
                config,
                transport=replace(
                    config.transport,
                    timeout_read_seconds=timeout_seconds,
                    timeout_write_seconds=timeout_seconds,
                ),
            )

        retry = config.retry
        retry_max = env.get("BOJ_RETRY_MAX")
        if retry_max is not None:
            retry = replace(retry, max_retries=_parse_env_int("BOJ_RETRY_MAX", retry_max))
        backoff_ms = env.get("BOJ_RETRY_BACKOFF_MS")
        if backoff_ms is not None:
            retry = replace(
                retry,
                initial_backoff_seconds=_parse_env_int("BOJ_RETRY_BACKOFF_MS", backoff_ms) / 1000.0,
            )
        return replace(config, retry=retry)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        self.transport.validate()
        self.retry.validate()
        self.decode.validate()


def _parse_env_int(name: str, value: str) -> int:
    text = value.strip()
    if not text.isdigit():
        raise ValueError(f"{name} must be a non-negative integer")
    return int(text)


__all__ = [
    "DEFAULT_BASE_URL",
    "TransportConfig",
    "RetryConfig",
    "DecodeConfig",
    "BojClientConfig",
]
