from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import HookInstallError
from .session import CaptureSession, get_default_session
from .types import CaptureToken

log = logging.getLogger("jsonlib.capture")


def extract_entries(marker: Any) -> Tuple[Dict[str, Any], int]:
    """Turn a marker value into (entries, skipped_count).

    Object markers contribute every key. Array markers contribute
    {"name": ..., "value": ...} items and single-key objects. Anything
    else is skipped, never raised.
    """
    entries: Dict[str, Any] = {}
    skipped = 0

    if isinstance(marker, Mapping):
        for name, value in marker.items():
            if not isinstance(name, str) or not name:
                skipped += 1
                continue
            entries[name] = copy.deepcopy(value)
        return entries, skipped

    if isinstance(marker, list):
        for item in marker:
            if isinstance(item, Mapping) and isinstance(item.get("name"), str) and "value" in item:
                if item["name"]:
                    entries[item["name"]] = copy.deepcopy(item["value"])
                    continue
            elif isinstance(item, Mapping) and len(item) == 1:
                (name, value), = item.items()
                if isinstance(name, str) and name:
                    entries[name] = copy.deepcopy(value)
                    continue
            skipped += 1
        return entries, skipped

    # scalar marker: nothing to capture, the entity still gets an (empty) bucket
    return entries, 1


class ParseIntercept:
    """
    Stands in for the host's deserializer.

    Every call is forwarded to the real deserializer with the same
    arguments and its result is returned as is. When the node carries the
    marker field, the marker's children are staged in the session's
    PendingCapture first, tagged with the active mod scope.
    """

    def __init__(
        self,
        deserializer: Callable[..., Any],
        scope_accessor: Callable[[], Any],
        session: Optional[CaptureSession] = None,
    ):
        if not callable(deserializer):
            raise HookInstallError(f"Host deserializer is not callable: {deserializer!r}")
        if not callable(scope_accessor):
            raise HookInstallError(f"Mod scope accessor is not callable: {scope_accessor!r}")
        self.deserializer = deserializer
        self.scope_accessor = scope_accessor
        self.session = session or get_default_session()

    @property
    def marker_field(self) -> str:
        return self.session.config.marker_field

    def has_marker(self, node: Any) -> bool:
        return isinstance(node, Mapping) and self.marker_field in node

    def capture(self, node: Any) -> Optional[CaptureToken]:
        """Read the marker without touching the pending buffer."""
        if not self.has_marker(node):
            return None

        scope = self.session.read_scope(self.scope_accessor)
        entries, skipped = extract_entries(node[self.marker_field])
        if skipped:
            self.session.metrics.increment("entry_skipped", skipped)
            log.debug("capture.skipped scope=%s count=%s", scope, skipped)

        return CaptureToken(
            scope=scope,
            entries=entries,
            seq=self.session.next_seq(),
            skipped=skipped,
            source=node.get("name") if isinstance(node.get("name"), str) else None,
        )

    def __call__(self, node: Any, *args: Any, **kwargs: Any) -> Any:
        token = self.capture(node)
        if token is not None:
            self.session.stage(token)
        return self.deserializer(node, *args, **kwargs)

    def intercept_with_token(self, node: Any, *args: Any, **kwargs: Any) -> Tuple[Any, Optional[CaptureToken]]:
        """Two-phase variant: the caller binds the token itself once the entity name is known."""
        token = self.capture(node)
        return self.deserializer(node, *args, **kwargs), token
