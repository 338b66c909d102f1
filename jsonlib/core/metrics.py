from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Dict

from prometheus_client import Counter as PromCounter

CAPTURE_EVENTS = (
    "marker_seen",
    "bound",
    "dropped",
    "entry_skipped",
)

_PROM_CAPTURE_EVENTS = PromCounter(
    "jsonlib_capture_events_total",
    "Custom JSON capture lifecycle events",
    ["event"],
)


class CaptureMetrics:
    def __init__(self):
        self._lock = Lock()
        self._counters: Counter = Counter()

    def increment(self, event: str, value: int = 1) -> None:
        if not event or value <= 0:
            return
        with self._lock:
            self._counters[event] += int(value)
        _PROM_CAPTURE_EVENTS.labels(event=event).inc(value)

    def get(self, event: str) -> int:
        with self._lock:
            return self._counters.get(event, 0)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {e: self._counters.get(e, 0) for e in CAPTURE_EVENTS} | {
                k: v for k, v in self._counters.items() if k not in CAPTURE_EVENTS
            }

    def reset(self) -> None:
        """
        Test helper: clears the in-process counters.
        The prometheus counter is process-wide and keeps counting.
        """
        with self._lock:
            self._counters.clear()
