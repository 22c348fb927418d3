from __future__ import annotations

import logging
import sys

import pytest

from boj_client.core.errors import (
    BojApiError,
    BojDecodeError,
    BojError,
    BojTransportError,
    BojValidationError,
)
from boj_client.core.retry import (
    RetryPolicy,
    execute_with_retry,
    is_retryable_api_status,
    should_retry,
)


class _Flaky:
    """Raise the given errors in order, then return ``result``."""

    def __init__(self, errors: list[BojError], result: str = "ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (BojTransportError("down"), True),
        (BojApiError(500, "M181090S", "boom"), True),
        (BojApiError(503, "M181091S", "busy"), True),
        (BojApiError(400, "M181005E", "bad"), False),
        (BojApiError(404, "X", "missing"), False),
        (BojValidationError("bad"), False),
        (BojDecodeError("bad"), False),
        (RuntimeError("other"), False),
    ],
    ids=["transport", "api-500", "api-503", "api-400", "api-404", "validation", "decode", "other"],
)
def test_should_retry(error: BaseException, expected: bool):
    assert should_retry(error) is expected


def test_is_retryable_api_status():
    assert is_retryable_api_status(500)
    assert is_retryable_api_status(503)
    assert not is_retryable_api_status(200)
    assert not is_retryable_api_status(None)


def test_delay_doubles_per_attempt():
    policy = RetryPolicy(initial_backoff_seconds=0.5)
    assert [policy.delay_for_attempt(n) for n in range(4)] == [0.5, 1.0, 2.0, 4.0]


def test_delay_is_capped_by_max_backoff():
    policy = RetryPolicy(initial_backoff_seconds=1.0, max_backoff_seconds=3.0)
    assert [policy.delay_for_attempt(n) for n in range(4)] == [1.0, 2.0, 3.0, 3.0]


def test_delay_saturates_instead_of_overflowing():
    policy = RetryPolicy(initial_backoff_seconds=1.0)
    assert policy.delay_for_attempt(5000) == sys.float_info.max
    assert RetryPolicy(initial_backoff_seconds=0.0).delay_for_attempt(5000) == 0.0


def test_transport_error_succeeds_on_third_attempt():
    policy = RetryPolicy(max_retries=2, initial_backoff_seconds=0.001)
    operation = _Flaky([BojTransportError("down"), BojTransportError("down")])
    sleeps: list[float] = []

    assert execute_with_retry(policy, operation, sleeper=sleeps.append) == "ok"
    assert operation.calls == 3
    assert sleeps == [0.001, 0.002]


def test_transport_error_exhausts_retries():
    policy = RetryPolicy(max_retries=2, initial_backoff_seconds=0.001)
    operation = _Flaky([BojTransportError("down")] * 3)

    with pytest.raises(BojTransportError):
        execute_with_retry(policy, operation, sleeper=lambda _: None)
    assert operation.calls == 3


@pytest.mark.parametrize(
    "error",
    [BojValidationError("bad"), BojDecodeError("bad"), BojApiError(400, "M181005E", "bad")],
    ids=["validation", "decode", "api-400"],
)
def test_non_retryable_errors_fail_after_one_attempt(error: BojError):
    policy = RetryPolicy(max_retries=5, initial_backoff_seconds=0.001)
    operation = _Flaky([error])
    sleeps: list[float] = []

    with pytest.raises(type(error)):
        execute_with_retry(policy, operation, sleeper=sleeps.append)
    assert operation.calls == 1
    assert sleeps == []


def test_api_500_is_retried_then_succeeds():
    policy = RetryPolicy(max_retries=1, initial_backoff_seconds=0.0)
    operation = _Flaky([BojApiError(500, "M181090S", "boom")])
    assert execute_with_retry(policy, operation, sleeper=lambda _: None) == "ok"
    assert operation.calls == 2


def test_zero_retries_runs_once():
    operation = _Flaky([BojTransportError("down")])
    with pytest.raises(BojTransportError):
        execute_with_retry(RetryPolicy(max_retries=0), operation, sleeper=lambda _: None)
    assert operation.calls == 1


def test_non_boj_errors_propagate_without_retry():
    calls = []

    def operation() -> str:
        calls.append(1)
        raise KeyError("bug")

    with pytest.raises(KeyError):
        execute_with_retry(RetryPolicy(max_retries=3), operation, sleeper=lambda _: None)
    assert len(calls) == 1


def test_retry_logging(caplog):
    policy = RetryPolicy(max_retries=1, initial_backoff_seconds=0.0)
    operation = _Flaky([BojTransportError("down"), BojTransportError("down")])

    with caplog.at_level(logging.WARNING, logger="boj_client"):
        with pytest.raises(BojTransportError):
            execute_with_retry(policy, operation, sleeper=lambda _: None)

    messages = [record.getMessage() for record in caplog.records]
    assert any("retrying attempt=1" in message for message in messages)
    assert any("giving up attempt=2" in message for message in messages)
