"""
Read side of the custom JSON fields.

Every function takes the entity id as the composite key used when the
fields were bound ("<mod>-<name>", e.g. "alpha-turret1"), or a bare
internal name plus `scope=`.

A missing entity, a missing field and a type mismatch all read as None.
Values are never coerced: an integer field is not a float, a boolean is
not an integer. Reads have no side effects: nothing is counted or
logged. Call these only after the host has finished loading the
content in question.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from jsonlib.core.capture.session import CaptureSession, get_default_session
from jsonlib.core.capture.types import ValueKind, value_kind


def _session(session: Optional[CaptureSession]) -> CaptureSession:
    return session or get_default_session()


def resolve_key(entity_id: str, *, scope: Optional[str] = None, session: Optional[CaptureSession] = None) -> str:
    if scope is None:
        return entity_id
    return _session(session).composite_key(scope, entity_id)


def get(
    entity_id: str,
    field_name: str,
    *,
    scope: Optional[str] = None,
    session: Optional[CaptureSession] = None,
) -> Any:
    s = _session(session)
    return s.store.lookup(resolve_key(entity_id, scope=scope, session=s), field_name)


def _get_typed(kind: ValueKind, entity_id: str, field_name: str, **kw: Any) -> Any:
    value = get(entity_id, field_name, **kw)
    if value is None or value_kind(value) != kind:
        return None
    return value


def get_string(entity_id: str, field_name: str, **kw: Any) -> Optional[str]:
    return _get_typed("string", entity_id, field_name, **kw)


def get_integer(entity_id: str, field_name: str, **kw: Any) -> Optional[int]:
    return _get_typed("integer", entity_id, field_name, **kw)


def get_float(entity_id: str, field_name: str, **kw: Any) -> Optional[float]:
    return _get_typed("float", entity_id, field_name, **kw)


def get_boolean(entity_id: str, field_name: str, **kw: Any) -> Optional[bool]:
    return _get_typed("boolean", entity_id, field_name, **kw)


def get_raw(entity_id: str, field_name: str, **kw: Any) -> Any:
    """Any value as captured; use this for object and array fields."""
    return get(entity_id, field_name, **kw)


def get_fields(
    entity_id: str,
    *,
    scope: Optional[str] = None,
    session: Optional[CaptureSession] = None,
) -> Optional[Dict[str, Any]]:
    s = _session(session)
    return s.store.bucket(resolve_key(entity_id, scope=scope, session=s))
