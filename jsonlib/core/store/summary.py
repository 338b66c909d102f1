from __future__ import annotations

import json
import logging
from typing import Optional

from jsonlib.core.capture.session import CaptureSession, get_default_session

log = logging.getLogger("jsonlib.summary")


def log_summary(session: Optional[CaptureSession] = None, *, logger: Optional[logging.Logger] = None) -> int:
    """Log one line per bound entity with its captured fields. Returns the number of keys."""
    s = session or get_default_session()
    out = logger or log

    snapshot = s.store.snapshot()
    for key in sorted(snapshot.keys()):
        out.info(
            "Custom JSON for key: %s with values: %s",
            key,
            json.dumps(snapshot[key], sort_keys=True, separators=(",", ":"), default=str),
        )

    out.info("Custom JSON summary keys=%s metrics=%s", len(snapshot), s.metrics.snapshot())
    return len(snapshot)
