"""Persisted fetch bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _as_bool(value: object) -> bool:
    """Read a stored flag; anything unrecognised means off."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return False


@dataclass
class FetchState:
    last_fetch_ms: int = 0
    preview_mode: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"last_fetch_ms": self.last_fetch_ms, "preview_mode": self.preview_mode}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FetchState":
        try:
            last = int(data.get("last_fetch_ms", 0) or 0)
        except Exception:
            last = 0
        return cls(last_fetch_ms=last, preview_mode=_as_bool(data.get("preview_mode")))
