"""Fetch triggers invoked when the scheduler decides a refresh is due."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "experiments-refresh/0.1"


class FetchError(RuntimeError):
    """Raised by a synchronous experiments fetch that did not succeed."""


class FetchTrigger(Protocol):
    def trigger_fetch(self) -> None: ...


class CallbackFetchTrigger:
    """Adapt a zero-argument callable to the trigger interface."""

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    def trigger_fetch(self) -> None:
        self._callback()


class HttpFetchTrigger:
    """Request the experiments endpoint in the background.

    `trigger_fetch` returns immediately; the request runs on a daemon thread
    and its outcome is only logged. Use `fetch_now` to wait for the result.
    """

    def __init__(self, url: str | None, timeout_s: float = 10.0) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.last_payload: Any = None
        self._threads: list[threading.Thread] = []

    def fetch_now(self) -> Any:
        if not self.url:
            raise FetchError("EXPERIMENTS_URL is not configured")
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        try:
            resp = requests.get(self.url, headers=headers, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise FetchError(f"Experiments request failed: {exc}") from exc
        if not resp.ok:
            snippet = resp.text[:200].replace("\n", " ")
            raise FetchError(f"Experiments HTTP {resp.status_code}: {snippet}")
        try:
            self.last_payload = resp.json()
        except ValueError as exc:
            raise FetchError("Experiments response is not JSON") from exc
        return self.last_payload

    def _run(self) -> None:
        try:
            self.fetch_now()
            logger.info("Fetched experiments from %s", self.url)
        except FetchError as exc:
            logger.warning("Experiments fetch failed: %s", exc)
        except Exception:
            logger.exception("Unexpected error fetching experiments")

    def trigger_fetch(self) -> None:
        if not self.url:
            logger.info("Experiments fetch due but EXPERIMENTS_URL is not set")
            return
        self._threads = [t for t in self._threads if t.is_alive()]
        thread = threading.Thread(
            target=self._run, name="experiments-fetch", daemon=True
        )
        self._threads.append(thread)
        thread.start()

    def join(self, timeout: float | None = None) -> None:
        """Wait for in-flight background fetches (used on shutdown and in tests)."""
        for thread in list(self._threads):
            thread.join(timeout)
