"""Refresh interval configuration."""

from __future__ import annotations

from dataclasses import dataclass

ONE_MINUTE_MS = 60 * 1000
ONE_HOUR_MS = 60 * ONE_MINUTE_MS


@dataclass(frozen=True)
class RefreshConfig:
    """Minimum time between two triggered experiment fetches."""

    minimum_interval_minutes: int = 60

    @property
    def interval_ms(self) -> int:
        return self.minimum_interval_minutes * ONE_MINUTE_MS
