"""Structured event emission and timing for encode calls."""

from __future__ import annotations

import json
import os
import sys
import time
from datetime import datetime, timezone
from typing import Any, TextIO

EVENTS_ENV_VAR = "TOON_EVENTS"


class Timer:
    """Simple context-manager timer for measuring duration_ms."""

    def __init__(self) -> None:
        self.start: float = 0
        self.elapsed_ms: int = 0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed_ms = int((time.perf_counter() - self.start) * 1000)


class EventEmitter:
    """Emits NDJSON lifecycle events to stderr."""

    def __init__(self, enabled: bool = False, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self.stream = stream

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "EventEmitter":
        """Enable emission when ``TOON_EVENTS`` is ``true``/``1``/``yes``."""
        env = os.environ if environ is None else environ
        flag = env.get(EVENTS_ENV_VAR, "").strip().lower()
        return cls(enabled=flag in {"1", "true", "yes"})

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        payload = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data or {},
        }
        stream = self.stream or sys.stderr
        stream.write(json.dumps(payload) + "\n")
        stream.flush()
