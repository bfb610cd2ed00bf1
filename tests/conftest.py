"""Shared test fixtures and dummy collaborators."""

from __future__ import annotations

import pytest


class DummyTrigger:
    """Counts fetch triggers instead of hitting the network."""

    def __init__(self) -> None:
        self.calls = 0

    @property
    def is_fetching(self) -> bool:
        return self.calls > 0

    def trigger_fetch(self) -> None:
        self.calls += 1

    def reset(self) -> None:
        self.calls = 0


class DummyState:
    """In-memory persisted state that records every timestamp write."""

    def __init__(self, last_fetch_ms: int = 0, preview: bool = False) -> None:
        self.last_fetch_ms = last_fetch_ms
        self.preview = preview
        self.writes: list[int] = []

    @property
    def captured(self) -> int | None:
        return self.writes[-1] if self.writes else None

    def read_last_fetch_timestamp(self) -> int:
        return self.last_fetch_ms

    def write_last_fetch_timestamp(self, timestamp_ms: int) -> None:
        self.writes.append(timestamp_ms)

    def read_preview_mode_enabled(self) -> bool:
        return self.preview


class DummyResponse:
    """Dummy HTTP response for testing."""

    def __init__(self, data: object, status: int = 200, text: str = "") -> None:
        self._data = data
        self.status_code = status
        self.text = text or str(data)
        self.ok = 200 <= status < 300

    def json(self) -> object:
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


@pytest.fixture
def trigger() -> DummyTrigger:
    return DummyTrigger()


@pytest.fixture
def state() -> DummyState:
    return DummyState()
