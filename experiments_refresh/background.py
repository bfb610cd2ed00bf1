"""Background refresh loop (started once per Runtime)."""
from __future__ import annotations

import asyncio
import logging
import time

from .runtime import Runtime

logger = logging.getLogger(__name__)

_TASK_REFRESH = "experiments_refresh"


def ensure_started(runtime: Runtime) -> asyncio.Task:
    task = runtime.tasks.get(_TASK_REFRESH)
    if isinstance(task, asyncio.Task) and not task.done():
        return task
    task = asyncio.create_task(_refresh_loop(runtime))
    runtime.tasks[_TASK_REFRESH] = task
    return task


async def run_once(runtime: Runtime) -> bool:
    return await asyncio.to_thread(runtime.scheduler.maybe_fetch, runtime.config)


async def _refresh_loop(runtime: Runtime) -> None:
    interval = runtime.poll_interval_s
    logger.info(
        "Starting experiments refresh loop (interval=%ss, minimum=%smin)",
        interval,
        runtime.config.minimum_interval_minutes,
    )
    while True:
        try:
            start = time.monotonic()
            await run_once(runtime)
            elapsed = time.monotonic() - start
            await asyncio.sleep(max(0.0, interval - elapsed))
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Experiments refresh loop error")
            await asyncio.sleep(interval)
