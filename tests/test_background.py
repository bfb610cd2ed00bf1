import asyncio

import pytest

from experiments_refresh import background
from experiments_refresh.clock import FixedClock
from experiments_refresh.models.refresh_config import ONE_HOUR_MS, RefreshConfig
from experiments_refresh.runtime import Runtime
from experiments_refresh.scheduler import FetchScheduler
from experiments_refresh.store import MemoryStateStore


def _runtime(trigger, clock, poll_interval_s: float = 0.01) -> Runtime:
    scheduler = FetchScheduler(trigger, MemoryStateStore(), clock)
    return Runtime(
        scheduler=scheduler, config=RefreshConfig(60), poll_interval_s=poll_interval_s
    )


@pytest.mark.asyncio
async def test_run_once_uses_scheduler(trigger) -> None:
    clock = FixedClock(ONE_HOUR_MS)
    runtime = _runtime(trigger, clock)

    assert await background.run_once(runtime) is True
    assert await background.run_once(runtime) is False
    assert trigger.calls == 1


@pytest.mark.asyncio
async def test_loop_throttles_repeated_checks(trigger) -> None:
    runtime = _runtime(trigger, FixedClock(ONE_HOUR_MS))

    task = background.ensure_started(runtime)
    await asyncio.sleep(0.1)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert trigger.calls == 1


@pytest.mark.asyncio
async def test_ensure_started_is_idempotent(trigger) -> None:
    runtime = _runtime(trigger, FixedClock(0), poll_interval_s=60)

    first = background.ensure_started(runtime)
    second = background.ensure_started(runtime)
    assert first is second

    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first


@pytest.mark.asyncio
async def test_loop_survives_trigger_errors(caplog) -> None:
    class FlakyTrigger:
        def __init__(self) -> None:
            self.calls = 0

        def trigger_fetch(self) -> None:
            self.calls += 1
            if self.calls == 1:
                raise RuntimeError("boom")

    flaky = FlakyTrigger()
    runtime = _runtime(flaky, FixedClock(ONE_HOUR_MS))

    task = background.ensure_started(runtime)
    await asyncio.sleep(0.1)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert flaky.calls == 2
    assert "Experiments refresh loop error" in caplog.text
