"""Central configuration for experiments_refresh."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .models.refresh_config import RefreshConfig

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MINUTES = 60
DEFAULT_STATE_FILE = "/app/data/fetch_state.json"


def _read_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default


def _read_float(name: str, default: float) -> float:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except Exception:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default


@dataclass
class Settings:
    """Configuration settings for experiments_refresh.

    All settings are loaded from environment variables with sensible defaults.
    """

    REFRESH_INTERVAL_MINUTES: int
    EXPERIMENTS_URL: str | None
    STATE_FILE: str
    FETCH_TIMEOUT_S: float
    POLL_INTERVAL_S: float

    def refresh_config(self) -> RefreshConfig:
        return RefreshConfig(minimum_interval_minutes=self.REFRESH_INTERVAL_MINUTES)


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to their defaults. A zero or
        negative refresh interval is kept as-is and means "always fetch".
    """
    interval = _read_int("REFRESH_INTERVAL_MINUTES", DEFAULT_INTERVAL_MINUTES)
    url = (os.environ.get("EXPERIMENTS_URL") or "").strip() or None
    state_file = os.environ.get("STATE_FILE") or DEFAULT_STATE_FILE
    timeout = _read_float("FETCH_TIMEOUT_S", 10.0)
    poll = _read_float("POLL_INTERVAL_S", 60.0)
    if poll <= 0:
        poll = 60.0

    return Settings(
        REFRESH_INTERVAL_MINUTES=interval,
        EXPERIMENTS_URL=url,
        STATE_FILE=state_file,
        FETCH_TIMEOUT_S=timeout,
        POLL_INTERVAL_S=poll,
    )


settings = _read_settings()


def validate_settings() -> None:
    """Log warnings for configuration that will make the service a no-op."""
    if settings.EXPERIMENTS_URL is None:
        logger.warning("EXPERIMENTS_URL is not set; fetches will only be logged.")
    if settings.REFRESH_INTERVAL_MINUTES <= 0:
        logger.warning(
            "REFRESH_INTERVAL_MINUTES=%s; every check will trigger a fetch.",
            settings.REFRESH_INTERVAL_MINUTES,
        )


# Exported constants
REFRESH_INTERVAL_MINUTES: int = settings.REFRESH_INTERVAL_MINUTES
EXPERIMENTS_URL: str | None = settings.EXPERIMENTS_URL
STATE_FILE: str = settings.STATE_FILE
FETCH_TIMEOUT_S: float = settings.FETCH_TIMEOUT_S
POLL_INTERVAL_S: float = settings.POLL_INTERVAL_S
