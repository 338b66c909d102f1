from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Optional

from jsonlib.core.metrics import CaptureMetrics
from jsonlib.core.store.store import CustomFieldStore

from .config import CaptureConfig
from .errors import ModScopeUnavailableError
from .pending import PendingCapture
from .types import CapturedBatch

log = logging.getLogger("jsonlib.capture")


class CaptureSession:
    """
    Owns everything one loading pipeline writes to: the config, the field
    store, the metrics and one PendingCapture per loading thread.

    Two threads loading through the same session never see each other's
    pending batch; they do share the store.
    """

    def __init__(
        self,
        config: Optional[CaptureConfig] = None,
        *,
        store: Optional[CustomFieldStore] = None,
        metrics: Optional[CaptureMetrics] = None,
    ):
        self.config = config or CaptureConfig()
        self.store = store if store is not None else CustomFieldStore()
        self.metrics = metrics if metrics is not None else CaptureMetrics()
        self._local = threading.local()
        self._seq = itertools.count(1)
        self._seq_lock = threading.Lock()

    @property
    def pending(self) -> PendingCapture:
        buf = getattr(self._local, "pending", None)
        if buf is None:
            buf = PendingCapture()
            self._local.pending = buf
        return buf

    def next_seq(self) -> int:
        with self._seq_lock:
            return next(self._seq)

    def composite_key(self, scope: str, name: str) -> str:
        return self.config.composite_key(scope, name)

    def read_scope(self, accessor: Callable[[], Any]) -> str:
        try:
            scope = accessor()
        except Exception as e:
            raise ModScopeUnavailableError(f"Cannot read the active mod scope: {e}") from e

        # mods are objects in some hosts; accept anything carrying a name
        if not isinstance(scope, str):
            scope = getattr(scope, "name", None)
        if not isinstance(scope, str) or not scope:
            raise ModScopeUnavailableError(
                f"Active mod scope must be a non-empty string, got {scope!r}"
            )
        return scope

    def stage(self, batch: CapturedBatch) -> None:
        dropped = self.pending.replace(batch)
        self.metrics.increment("marker_seen")
        if dropped is not None:
            self.metrics.increment("dropped")
            log.debug(
                "capture.dropped seq=%s scope=%s fields=%s replaced_by=%s",
                dropped.seq,
                dropped.scope,
                sorted(dropped.entries.keys()),
                batch.seq,
            )
        log.debug(
            "capture.pending seq=%s scope=%s fields=%s skipped=%s",
            batch.seq,
            batch.scope,
            sorted(batch.entries.keys()),
            batch.skipped,
        )

    def bind(self, batch: CapturedBatch, name: str) -> str:
        key = self.composite_key(batch.scope, name)
        self.store.merge(key, batch.entries)
        self.metrics.increment("bound")
        log.debug("capture.bound seq=%s key=%s fields=%s", batch.seq, key, len(batch.entries))
        return key

    def bind_pending(self, name: str) -> Optional[str]:
        batch = self.pending.consume()
        if batch is None:
            return None
        return self.bind(batch, name)

    def reset(self) -> None:
        """Test helper: forget the calling thread's pending batch, every bucket and counter."""
        self.pending.clear()
        self.store.clear()
        self.metrics.reset()


_DEFAULT_SESSION = CaptureSession()


def get_default_session() -> CaptureSession:
    return _DEFAULT_SESSION
