from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from boj_client.config import (
    DEFAULT_BASE_URL,
    BojClientConfig,
    DecodeConfig,
    RetryConfig,
    TransportConfig,
)


def test_config_validate_rejects_empty_base_url():
    cfg = BojClientConfig(base_url="")
    with pytest.raises(ValueError):
        cfg.validate()


def test_config_is_immutable():
    cfg = BojClientConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.retry = RetryConfig(max_retries=10)  # type: ignore[misc]


def test_config_defaults():
    cfg = BojClientConfig()
    cfg.validate()
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.retry.max_retries == 2
    assert cfg.decode.csv_error_json_fallback is True


@pytest.mark.parametrize(
    ("section", "field", "value"),
    [
        ("retry", "max_retries", -1),
        ("retry", "max_retries", 1.5),
        ("retry", "max_retries", True),
        ("retry", "initial_backoff_seconds", -0.1),
        ("retry", "max_backoff_seconds", -1.0),
        ("decode", "csv_error_json_fallback", "yes"),
        ("transport", "timeout_connect_seconds", 0.0),
        ("transport", "timeout_read_seconds", 0.0),
        ("transport", "timeout_write_seconds", -1.0),
        ("transport", "timeout_pool_seconds", 0.0),
    ],
)
def test_config_validate_rejects_invalid_values(section, field, value):
    kwargs = {field: value}
    cfg = BojClientConfig(
        retry=RetryConfig(**kwargs) if section == "retry" else RetryConfig(),
        decode=DecodeConfig(**kwargs) if section == "decode" else DecodeConfig(),
        transport=TransportConfig(**kwargs) if section == "transport" else TransportConfig(),
    )
    with pytest.raises(ValueError, match=f"{section}.{field}"):
        cfg.validate()


def test_retry_config_builds_policy():
    policy = RetryConfig(max_retries=4, initial_backoff_seconds=0.5, max_backoff_seconds=None).to_policy()
    assert policy.max_retries == 4
    assert policy.initial_backoff_seconds == 0.5
    assert policy.max_backoff_seconds is None


def test_default_retry_backoff_is_uncapped():
    policy = RetryConfig(initial_backoff_seconds=1.0).to_policy()
    assert policy.max_backoff_seconds is None
    assert [policy.delay_for_attempt(n) for n in (0, 5, 10)] == [1.0, 32.0, 1024.0]


def test_from_env_reads_boj_variables():
    cfg = BojClientConfig.from_env(
        {
            "BOJ_BASE_URL": "http://localhost:8080",
            "BOJ_TIMEOUT_MS": "1500",
            "BOJ_RETRY_MAX": "5",
            "BOJ_RETRY_BACKOFF_MS": "250",
        }
    )
    assert cfg.base_url == "http://localhost:8080"
    assert cfg.transport.timeout_read_seconds == 1.5
    assert cfg.transport.timeout_write_seconds == 1.5
    assert cfg.retry.max_retries == 5
    assert cfg.retry.initial_backoff_seconds == 0.25


def test_from_env_keeps_defaults_for_unset_variables():
    assert BojClientConfig.from_env({}) == BojClientConfig()


@pytest.mark.parametrize("name", ["BOJ_TIMEOUT_MS", "BOJ_RETRY_MAX", "BOJ_RETRY_BACKOFF_MS"])
def test_from_env_rejects_non_integer_values(name: str):
    with pytest.raises(ValueError, match=name):
        BojClientConfig.from_env({name: "abc"})


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("BOJ_RETRY_MAX", "0")
    assert BojClientConfig.from_env().retry.max_retries == 0
