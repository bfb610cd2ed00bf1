"""Decide whether an experiments fetch is due and record when it happened."""

from __future__ import annotations

import logging
from threading import Lock

from .clock import Clock, SystemClock
from .models.refresh_config import RefreshConfig
from .store import PersistedState
from .trigger import FetchTrigger

logger = logging.getLogger(__name__)


class FetchScheduler:
    """Throttle experiment fetches to at most one per refresh interval.

    With preview mode on, every call fetches and the recorded timestamp is
    pinned to 0, so the interval check resumes immediately once preview mode
    is turned off. Errors from the trigger or the store are not caught.
    """

    def __init__(
        self,
        trigger: FetchTrigger,
        state: PersistedState,
        clock: Clock | None = None,
    ) -> None:
        self.trigger = trigger
        self.state = state
        self.clock = clock or SystemClock()
        self._lock = Lock()

    def maybe_fetch(self, config: RefreshConfig, now_ms: int | None = None) -> bool:
        """Trigger a fetch if one is due. Returns True when a fetch was triggered."""
        with self._lock:
            if self.state.read_preview_mode_enabled():
                logger.info("Preview mode enabled; fetching experiments")
                self.trigger.trigger_fetch()
                self.state.write_last_fetch_timestamp(0)
                return True

            if now_ms is None:
                now_ms = self.clock.now_ms()
            last_ms = self.state.read_last_fetch_timestamp()
            elapsed = now_ms - last_ms
            # Inclusive: a fetch exactly one interval later is due.
            if elapsed < config.interval_ms:
                logger.debug(
                    "Skipping experiments fetch (elapsed=%sms, interval=%sms)",
                    elapsed,
                    config.interval_ms,
                )
                return False

            logger.info("Fetching experiments (elapsed=%sms)", elapsed)
            self.trigger.trigger_fetch()
            self.state.write_last_fetch_timestamp(now_ms)
            return True


def maybe_fetch_experiments(
    trigger: FetchTrigger,
    state: PersistedState,
    config: RefreshConfig,
    now_ms: int | None = None,
    clock: Clock | None = None,
) -> bool:
    """One-off check with a throwaway scheduler.

    Each call gets its own lock, so concurrent callers sharing `state` must
    serialize themselves; keep a `FetchScheduler` around instead when calls
    can overlap.
    """
    return FetchScheduler(trigger, state, clock).maybe_fetch(config, now_ms)
