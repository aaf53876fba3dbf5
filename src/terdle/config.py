"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://localhost:9000/"
DEFAULT_LOG_FILE = "logs/terdle.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Client configuration."""

    api_base_url: str = DEFAULT_API_BASE_URL
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def normalize_base_url(url: str) -> str:
    """Ensure the base URL ends with one slash so paths can be appended."""
    return url.strip().rstrip("/") + "/"


def _coerce_timeout(value: str | None) -> float:
    if value is None:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from `env`, or from `.env` plus the process environment."""
    if env is None:
        load_dotenv()
        env = os.environ
    base_url = env.get("TERDLE_API_BASE_URL") or env.get("API_BASE_URL") or DEFAULT_API_BASE_URL
    return Settings(
        api_base_url=normalize_base_url(base_url),
        log_file=env.get("TERDLE_LOG_FILE") or DEFAULT_LOG_FILE,
        log_level=(env.get("TERDLE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        request_timeout=_coerce_timeout(env.get("TERDLE_REQUEST_TIMEOUT")),
    )
