"""Entrypoint for running the experiments refresh service.

This module wires up the store, trigger and scheduler and runs the polling loop.
"""

from __future__ import annotations

import asyncio
import logging

from . import config
from .background import ensure_started
from .logger import setup_logging
from .models.refresh_config import RefreshConfig
from .runtime import STARTUP_TIME, Runtime
from .scheduler import FetchScheduler
from .store import JsonStateStore
from .trigger import HttpFetchTrigger

logger = logging.getLogger(__name__)


def build_runtime() -> Runtime:
    store = JsonStateStore(config.STATE_FILE)
    store.load_state()
    trigger = HttpFetchTrigger(config.EXPERIMENTS_URL, timeout_s=config.FETCH_TIMEOUT_S)
    scheduler = FetchScheduler(trigger, store)
    return Runtime(
        scheduler=scheduler,
        config=RefreshConfig(config.REFRESH_INTERVAL_MINUTES),
        poll_interval_s=config.POLL_INTERVAL_S,
    )


async def _serve(runtime: Runtime) -> None:
    await ensure_started(runtime)


def run() -> None:
    setup_logging()
    config.validate_settings()
    logger.info(
        "Starting experiments_refresh at %s", STARTUP_TIME.strftime("%Y-%m-%d %H:%M:%S")
    )
    runtime = build_runtime()
    try:
        asyncio.run(_serve(runtime))
    except KeyboardInterrupt:
        logger.info("Stopping experiments_refresh")
    trigger = runtime.scheduler.trigger
    if isinstance(trigger, HttpFetchTrigger):
        trigger.join(timeout=config.FETCH_TIMEOUT_S)


if __name__ == "__main__":
    run()
