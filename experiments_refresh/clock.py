"""Clock abstraction so the scheduler can be driven with explicit timestamps."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Wall-clock milliseconds since the epoch."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock:
    """Manually advanced clock for tests and replays."""

    def __init__(self, now_ms: int = 0) -> None:
        self.value = now_ms

    def now_ms(self) -> int:
        return self.value

    def advance(self, ms: int) -> int:
        self.value += ms
        return self.value
