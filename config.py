"""Central configuration and secret validation for the Toddler Speech Tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

import streamlit as st
from streamlit.errors import StreamlitSecretNotFoundError

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_API_TIMEOUT_SECONDS = 10.0
DEFAULT_ADMIN_USER_IDS: tuple[int, ...] = (1,)
DEFAULT_LOG_LEVEL = "INFO"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    """Missing or invalid configuration."""


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for the speech tracker backend."""

    base_url: str
    timeout_seconds: float


@dataclass(frozen=True)
class AuthConfig:
    """Fallback admin detection for identities without an explicit role."""

    admin_user_ids: tuple[int, ...]


@dataclass(frozen=True)
class AppConfig:
    """App-wide configuration values."""

    api: ApiConfig
    auth: AuthConfig
    log_level: str


def _section(secrets: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw_value = secrets.get(name, {})
    return raw_value if isinstance(raw_value, Mapping) else {}


def _read_secret_or_env(
    secrets_section: Mapping[str, Any],
    key: str,
    env_key: str,
) -> str | None:
    secret_value = secrets_section.get(key)
    if isinstance(secret_value, (int, float)) and not isinstance(secret_value, bool):
        return str(secret_value)
    if isinstance(secret_value, str) and secret_value.strip():
        return secret_value.strip()

    env_value = os.getenv(env_key)
    if isinstance(env_value, str) and env_value.strip():
        return env_value.strip()
    return None


def _load_api_config(secrets: Mapping[str, Any]) -> ApiConfig:
    api_section = _section(secrets, "api")

    base_url = (
        _read_secret_or_env(api_section, "base_url", "SPEECH_TRACKER_API_URL")
        or DEFAULT_API_BASE_URL
    ).rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError(
            f"Invalid api.base_url '{base_url}'. Expected an http:// or https:// URL."
        )

    timeout_raw = _read_secret_or_env(
        api_section,
        "timeout_seconds",
        "SPEECH_TRACKER_API_TIMEOUT",
    )
    try:
        timeout_seconds = (
            float(timeout_raw)
            if timeout_raw is not None
            else DEFAULT_API_TIMEOUT_SECONDS
        )
    except ValueError as exc:
        raise ConfigError(
            f"Invalid api.timeout_seconds '{timeout_raw}'. Expected a number."
        ) from exc
    if timeout_seconds <= 0:
        raise ConfigError("api.timeout_seconds must be greater than 0.")

    return ApiConfig(base_url=base_url, timeout_seconds=timeout_seconds)


def _parse_admin_ids(raw_value: Any) -> tuple[int, ...]:
    if isinstance(raw_value, str):
        items: list[Any] = [item for item in raw_value.split(",") if item.strip()]
    elif isinstance(raw_value, (list, tuple)):
        items = list(raw_value)
    else:
        raise ConfigError("auth.admin_user_ids must be a list of user ids.")

    admin_ids: list[int] = []
    for item in items:
        try:
            admin_ids.append(int(str(item).strip()))
        except ValueError as exc:
            raise ConfigError(
                f"auth.admin_user_ids contains a non-numeric id: '{item}'."
            ) from exc
    return tuple(admin_ids)


def _load_auth_config(secrets: Mapping[str, Any]) -> AuthConfig:
    auth_section = _section(secrets, "auth")
    raw_ids = auth_section.get("admin_user_ids")
    if raw_ids is None:
        raw_ids = os.getenv("SPEECH_TRACKER_ADMIN_IDS")
    if raw_ids is None:
        return AuthConfig(admin_user_ids=DEFAULT_ADMIN_USER_IDS)
    return AuthConfig(admin_user_ids=_parse_admin_ids(raw_ids))


def _load_log_level(secrets: Mapping[str, Any]) -> str:
    logging_section = _section(secrets, "logging")
    level = (
        _read_secret_or_env(logging_section, "level", "LOG_LEVEL") or DEFAULT_LOG_LEVEL
    ).upper()
    if level not in _VALID_LOG_LEVELS:
        allowed = ", ".join(sorted(_VALID_LOG_LEVELS))
        raise ConfigError(f"Invalid logging.level '{level}'. Allowed: {allowed}.")
    return level


def load_app_config(secrets: Mapping[str, Any]) -> AppConfig:
    """Build the app configuration from a secrets mapping plus environment."""
    return AppConfig(
        api=_load_api_config(secrets),
        auth=_load_auth_config(secrets),
        log_level=_load_log_level(secrets),
    )


def _streamlit_secrets() -> Mapping[str, Any]:
    try:
        return {key: st.secrets[key] for key in st.secrets.keys()}
    except (FileNotFoundError, StreamlitSecretNotFoundError):
        # No secrets.toml: environment variables and defaults apply.
        return {}


@st.cache_resource(show_spinner=False)
def get_app_config() -> AppConfig:
    """Load and validate the app configuration from ``st.secrets``."""
    return load_app_config(_streamlit_secrets())


def validate_config_or_stop() -> AppConfig:
    """Validate the configuration and stop the UI with a clear message on errors."""
    try:
        return get_app_config()
    except ConfigError as exc:
        st.error(
            f"Configuration error: {exc}\n\n"
            "Please update .streamlit/secrets.toml or the environment variables "
            "as documented in the README."
        )
        st.stop()
