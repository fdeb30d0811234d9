"""Application settings read from Streamlit secrets with embedded defaults."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import streamlit as st

from lib.title_store import TITLE_CONFIG_PATH

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "dljackson1277@gmail.com"
DEFAULT_EMAIL_RELAY_URL = "https://api.web3forms.com/submit"
DEFAULT_REQUEST_TIMEOUT: Optional[float] = None
DEFAULT_AUTH_DELAY_SECONDS = 1.0
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

SECRETS_SECTION = "scholarship"
FLAT_SECRET_PREFIX = "scholarship_"


@dataclass(frozen=True)
class AppSettings:
    """Values that differ between deployments of the application form."""

    admin_email: str = DEFAULT_ADMIN_EMAIL
    email_relay_url: str = DEFAULT_EMAIL_RELAY_URL
    email_relay_access_key: str = ""
    title_config_path: Path = TITLE_CONFIG_PATH
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT
    auth_delay_seconds: float = DEFAULT_AUTH_DELAY_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL


def _secrets_dict(name: str) -> Dict[str, Any]:
    """Return a mapping stored under ``name`` in Streamlit secrets."""

    try:
        value = st.secrets.get(name, {})  # type: ignore[arg-type]
    except Exception:  # pragma: no cover - no secrets.toml available
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def _flat_secret(key: str) -> Optional[Any]:
    """Return ``scholarship_<key>`` from the top level of the secrets."""

    try:
        return st.secrets.get(f"{FLAT_SECRET_PREFIX}{key}")
    except Exception:  # pragma: no cover - no secrets.toml available
        return None


def _as_float(value: Any, default: Optional[float]) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def settings_from_mapping(values: Mapping[str, Any]) -> AppSettings:
    """Build settings from a plain mapping, ignoring blank values."""

    def pick(key: str, default: Any) -> Any:
        value = values.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        return value.strip() if isinstance(value, str) else value

    return AppSettings(
        admin_email=str(pick("admin_email", DEFAULT_ADMIN_EMAIL)),
        email_relay_url=str(pick("email_relay_url", DEFAULT_EMAIL_RELAY_URL)),
        email_relay_access_key=str(pick("email_relay_access_key", "")),
        title_config_path=Path(pick("title_config_path", TITLE_CONFIG_PATH)),
        request_timeout=_as_float(
            pick("request_timeout", DEFAULT_REQUEST_TIMEOUT), DEFAULT_REQUEST_TIMEOUT
        ),
        auth_delay_seconds=_as_float(
            pick("auth_delay_seconds", DEFAULT_AUTH_DELAY_SECONDS),
            DEFAULT_AUTH_DELAY_SECONDS,
        ),
        log_level=str(pick("log_level", DEFAULT_LOG_LEVEL)).upper(),
    )


def load_settings() -> AppSettings:
    """Return settings from the ``[scholarship]`` secrets table."""

    values = _secrets_dict(SECRETS_SECTION)
    if not values:
        for key in AppSettings.__dataclass_fields__:
            flat_value = _flat_secret(key)
            if flat_value is not None:
                values[key] = flat_value

    settings = settings_from_mapping(values)
    if not settings.email_relay_access_key:
        logger.warning("Email relay access key is not configured; notifications will fail.")
    return settings


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging once for the Streamlit process."""

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("lib").setLevel(numeric_level)
