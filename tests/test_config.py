from __future__ import annotations

import pytest

from config import (
    DEFAULT_ADMIN_USER_IDS,
    DEFAULT_API_BASE_URL,
    ConfigError,
    load_app_config,
)

ENV_KEYS = (
    "SPEECH_TRACKER_API_URL",
    "SPEECH_TRACKER_API_TIMEOUT",
    "SPEECH_TRACKER_ADMIN_IDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_secrets() -> None:
    config = load_app_config({})

    assert config.api.base_url == DEFAULT_API_BASE_URL
    assert config.api.timeout_seconds == 10.0
    assert config.auth.admin_user_ids == DEFAULT_ADMIN_USER_IDS
    assert config.log_level == "INFO"


def test_secrets_are_read_and_trailing_slash_stripped() -> None:
    config = load_app_config(
        {
            "api": {"base_url": "https://tracker.example.org/", "timeout_seconds": 3},
            "auth": {"admin_user_ids": [1, 5]},
            "logging": {"level": "debug"},
        }
    )

    assert config.api.base_url == "https://tracker.example.org"
    assert config.api.timeout_seconds == 3.0
    assert config.auth.admin_user_ids == (1, 5)
    assert config.log_level == "DEBUG"


def test_environment_is_used_when_secrets_are_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SPEECH_TRACKER_API_URL", "http://backend:9000")
    monkeypatch.setenv("SPEECH_TRACKER_ADMIN_IDS", "1, 7")

    config = load_app_config({"api": {"base_url": "  "}})

    assert config.api.base_url == "http://backend:9000"
    assert config.auth.admin_user_ids == (1, 7)


@pytest.mark.parametrize(
    "secrets",
    [
        {"api": {"base_url": "ftp://tracker"}},
        {"api": {"timeout_seconds": "soon"}},
        {"api": {"timeout_seconds": 0}},
        {"auth": {"admin_user_ids": ["one"]}},
        {"auth": {"admin_user_ids": 1}},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_invalid_values_raise_config_error(secrets) -> None:
    with pytest.raises(ConfigError):
        load_app_config(secrets)
