"""Persisted fetch state (last fetch timestamp, preview mode flag)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Protocol

from .models.fetch_state import FetchState

logger = logging.getLogger(__name__)


class PersistedState(Protocol):
    """Storage the scheduler reads from and writes the last fetch time to."""

    def read_last_fetch_timestamp(self) -> int: ...

    def write_last_fetch_timestamp(self, timestamp_ms: int) -> None: ...

    def read_preview_mode_enabled(self) -> bool: ...


class MemoryStateStore:
    """Non-durable store, useful for one-shot runs and tests."""

    def __init__(self, state: FetchState | None = None) -> None:
        self.state = state or FetchState()

    def read_last_fetch_timestamp(self) -> int:
        return self.state.last_fetch_ms

    def write_last_fetch_timestamp(self, timestamp_ms: int) -> None:
        self.state.last_fetch_ms = timestamp_ms

    def read_preview_mode_enabled(self) -> bool:
        return self.state.preview_mode

    def set_preview_mode_enabled(self, enabled: bool) -> None:
        self.state.preview_mode = enabled


class JsonStateStore:
    """Fetch state persisted as a small JSON document.

    The file is read on first access and rewritten in full on every change,
    so the last write wins. A missing or unreadable file yields the defaults
    (never fetched, preview off).
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = Lock()
        self._state: FetchState | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load_state(self) -> FetchState:
        """Load persisted state from disk."""
        state = FetchState()
        try:
            if self._path.exists():
                data = json.loads(self._path.read_text())
                if isinstance(data, dict):
                    state = FetchState.from_dict(data)
                    logger.info("Loaded fetch state from %s", self._path)
                else:
                    logger.warning("Ignoring malformed fetch state in %s", self._path)
        except Exception:
            logger.exception("Failed to load fetch state")
        self._state = state
        return state

    def _current(self) -> FetchState:
        if self._state is None:
            return self.load_state()
        return self._state

    def _save_state(self) -> None:
        """Persist the current state to disk."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._current().to_dict(), indent=2))
        except Exception:
            logger.exception("Failed to save fetch state")

    def read_last_fetch_timestamp(self) -> int:
        with self._lock:
            return self._current().last_fetch_ms

    def write_last_fetch_timestamp(self, timestamp_ms: int) -> None:
        with self._lock:
            self._current().last_fetch_ms = int(timestamp_ms)
            self._save_state()

    def read_preview_mode_enabled(self) -> bool:
        with self._lock:
            return self._current().preview_mode

    def set_preview_mode_enabled(self, enabled: bool) -> None:
        """Toggle the preview collection. Not used by the scheduler itself."""
        with self._lock:
            self._current().preview_mode = bool(enabled)
            self._save_state()
