from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import CapturedBatch


@dataclass
class PendingCapture:
    """
    Single-slot buffer between a parse and the next identity lookup.

    replace() never merges: a batch that was not consumed yet is handed
    back to the caller and is gone from the buffer.
    """
    batch: Optional[CapturedBatch] = None
    pending: bool = False

    @property
    def scope(self) -> Optional[str]:
        return self.batch.scope if self.batch is not None else None

    @property
    def is_pending(self) -> bool:
        return self.pending

    def replace(self, batch: CapturedBatch) -> Optional[CapturedBatch]:
        dropped = self.batch if self.pending else None
        self.batch = batch
        self.pending = True
        return dropped

    def consume(self) -> Optional[CapturedBatch]:
        if not self.pending:
            return None
        batch = self.batch
        self.clear()
        return batch

    def clear(self) -> None:
        self.batch = None
        self.pending = False
