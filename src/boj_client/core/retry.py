"""Retry helpers."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from .errors import BojApiError, BojError, BojTransportError

logger = logging.getLogger("boj_client")

T = TypeVar("T")

_RETRYABLE_API_STATUSES = frozenset({500, 503})


def is_retryable_api_status(status: int | None) -> bool:
    return status in _RETRYABLE_API_STATUSES


def should_retry(error: BaseException) -> bool:
    """Return True when a retry could plausibly succeed.

    Transport failures are always retried. API errors are retried only for
    transient server faults (500/503). Validation and decode errors describe a
    defect in the request or payload and are never retried.
    """

    if isinstance(error, BojTransportError):
        return True
    if isinstance(error, BojApiError):
        return is_retryable_api_status(error.status)
    return False


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    max_retries: int = 2
    initial_backoff_seconds: float = 0.2
    max_backoff_seconds: float | None = None

    def delay_for_attempt(self, retry_index: int) -> float:
        """Exponential backoff without jitter.

        retry_index: 0-based retry index.
        """

        try:
            delay = self.initial_backoff_seconds * float(2**retry_index)
        except OverflowError:
            delay = float("inf") if self.initial_backoff_seconds > 0 else 0.0
        if self.max_backoff_seconds is not None:
            delay = min(delay, self.max_backoff_seconds)
        return min(delay, sys.float_info.max)


def execute_with_retry(
    policy: RetryPolicy,
    operation: Callable[[], T],
    *,
    sleeper: Callable[[float], None] | None = None,
) -> T:
    sleep = sleeper or time.sleep
    retry_index = 0
    while True:
        try:
            return operation()
        except BojError as exc:
            if retry_index >= policy.max_retries or not should_retry(exc):
                _log_give_up(exc, attempt=retry_index + 1)
                raise
            delay = policy.delay_for_attempt(retry_index)
            _log_retry(exc, attempt=retry_index + 1, delay=delay)
            sleep(delay)
            retry_index += 1


async def async_execute_with_retry(
    policy: RetryPolicy,
    operation: Callable[[], Awaitable[T]],
    *,
    sleeper: Callable[[float], Awaitable[None]] | None = None,
) -> T:
    sleep = sleeper or asyncio.sleep
    retry_index = 0
    while True:
        try:
            return await operation()
        except BojError as exc:
            if retry_index >= policy.max_retries or not should_retry(exc):
                _log_give_up(exc, attempt=retry_index + 1)
                raise
            delay = policy.delay_for_attempt(retry_index)
            _log_retry(exc, attempt=retry_index + 1, delay=delay)
            await sleep(delay)
            retry_index += 1


def _log_retry(exc: BojError, *, attempt: int, delay: float) -> None:
    logger.warning(
        "request failed; retrying attempt=%s delay=%.3f error=%s",
        attempt,
        delay,
        exc.__class__.__name__,
    )


def _log_give_up(exc: BojError, *, attempt: int) -> None:
    logger.error(
        "request failed; giving up attempt=%s error=%s retryable=%s",
        attempt,
        exc.__class__.__name__,
        should_retry(exc),
    )


__all__ = [
    "RetryPolicy",
    "is_retryable_api_status",
    "should_retry",
    "execute_with_retry",
    "async_execute_with_retry",
]
