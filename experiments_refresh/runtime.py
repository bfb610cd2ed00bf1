"""Runtime objects shared by the entrypoint and the background loop."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .models.refresh_config import RefreshConfig
from .scheduler import FetchScheduler

# Track startup time (module import time).
STARTUP_TIME = datetime.now()


@dataclass
class Runtime:
    scheduler: FetchScheduler
    config: RefreshConfig
    poll_interval_s: float = 60.0
    tasks: dict[str, object] = field(default_factory=dict)
