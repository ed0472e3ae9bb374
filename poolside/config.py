"""Configuration helpers for the Poolside Stat Tracker."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_TRACKERS = 16
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

ENV_API_URL = "POOLSIDE_API_URL"
ENV_API_TOKEN = "POOLSIDE_API_TOKEN"
ENV_HTTP_TIMEOUT = "POOLSIDE_HTTP_TIMEOUT"
ENV_HOST = "POOLSIDE_HOST"
ENV_PORT = "POOLSIDE_PORT"
ENV_LOG_LEVEL = "POOLSIDE_LOG_LEVEL"
ENV_MAX_TRACKERS = "POOLSIDE_MAX_TRACKERS"


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings for the API client and the web server."""

    api_url: str = DEFAULT_API_URL
    api_token: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    max_trackers: int = DEFAULT_MAX_TRACKERS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Read settings from the environment, falling back to defaults.

        Raises:
            ValueError: If a numeric setting cannot be parsed or is out of range.
        """

        env = os.environ if environ is None else environ
        timeout = _parse_float(env.get(ENV_HTTP_TIMEOUT), DEFAULT_HTTP_TIMEOUT_SECONDS, ENV_HTTP_TIMEOUT)
        if timeout <= 0:
            raise ValueError(f"{ENV_HTTP_TIMEOUT} must be positive")
        port = _parse_int(env.get(ENV_PORT), DEFAULT_PORT, ENV_PORT)
        max_trackers = _parse_int(env.get(ENV_MAX_TRACKERS), DEFAULT_MAX_TRACKERS, ENV_MAX_TRACKERS)
        if max_trackers < 1:
            raise ValueError(f"{ENV_MAX_TRACKERS} must be at least 1")
        token = (env.get(ENV_API_TOKEN) or "").strip() or None
        return cls(
            api_url=(env.get(ENV_API_URL) or DEFAULT_API_URL).rstrip("/"),
            api_token=token,
            http_timeout=timeout,
            host=env.get(ENV_HOST) or DEFAULT_HOST,
            port=port,
            log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
            max_trackers=max_trackers,
        )


def _parse_float(raw: Optional[str], default: float, name: str) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _parse_int(raw: Optional[str], default: int, name: str) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging once for the application entry point."""

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


__all__ = ["AppConfig", "configure_logging", "DEFAULT_API_URL", "DEFAULT_MAX_TRACKERS", "LOG_FORMAT"]
