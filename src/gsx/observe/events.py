"""Structured event emission and trace support."""

from __future__ import annotations

import json
import sys
import time
from datetime import datetime, timezone
from typing import Any


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
    """Emits NDJSON lifecycle events (sheet loads, writes, warnings) to stderr."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        payload = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data or {},
        }
        sys.stderr.write(json.dumps(payload, default=str) + "\n")
        sys.stderr.flush()


class TraceRecorder:
    """Records trace entries, e.g. every call made against a remote store."""

    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []
        self._start = time.perf_counter()

    def record(self, category: str, data: dict[str, Any]) -> None:
        elapsed = int((time.perf_counter() - self._start) * 1000)
        self.entries.append({
            "category": category,
            "timestamp_ms": elapsed,
            **data,
        })

    def count(self, category: str, op: str | None = None) -> int:
        return sum(
            1 for e in self.entries
            if e["category"] == category and (op is None or e.get("op") == op)
        )
