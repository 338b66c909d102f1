from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ValueKind = Literal["string", "integer", "float", "boolean", "raw", "null"]


def value_kind(value: Any) -> ValueKind:
    # bool before int: True is an int in Python, never in JSON
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    return "raw"


class CapturedBatch(BaseModel):
    """
    One marker's worth of captured fields, tagged with the mod scope that
    was active when the marker was parsed.

    `seq` increases per session so logs can tell batches apart.
    """
    model_config = ConfigDict(frozen=True)

    scope: str
    entries: Dict[str, Any] = Field(default_factory=dict)
    seq: int = 0
    skipped: int = 0


class CaptureToken(CapturedBatch):
    """Handle returned by the explicit two-phase API; bind it with CaptureSession.bind()."""

    source: Optional[str] = None
