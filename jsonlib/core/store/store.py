from __future__ import annotations

import copy
import logging
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

log = logging.getLogger("jsonlib.store")

_MISSING = object()


class CustomFieldStore:
    """Composite key -> captured field bucket.

    Buckets are created on first bind and only ever grow or have fields
    overwritten; nothing is removed while a session is running.
    Reads hand out copies so callers cannot mutate stored values.
    """

    def __init__(self):
        self._lock = Lock()
        self._buckets: Dict[str, Dict[str, Any]] = {}

    def merge(self, key: str, entries: Mapping[str, Any]) -> int:
        """Fetch-or-create the bucket for `key` and set every entry on it.

        Returns the number of fields that replaced an existing value.
        """
        overwritten = 0
        with self._lock:
            bucket = self._buckets.setdefault(key, {})
            for name, value in entries.items():
                if name in bucket:
                    overwritten += 1
                bucket[name] = copy.deepcopy(value)
        if overwritten:
            log.debug("store.merge key=%s overwritten=%s", key, overwritten)
        return overwritten

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._buckets

    def lookup(self, key: str, field_name: str, default: Any = None) -> Any:
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                return default
            value = bucket.get(field_name, _MISSING)
            if value is _MISSING:
                return default
            return copy.deepcopy(value)

    def contains(self, key: str, field_name: str) -> bool:
        with self._lock:
            bucket = self._buckets.get(key)
            return bucket is not None and field_name in bucket

    def bucket(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            bucket = self._buckets.get(key)
            return copy.deepcopy(bucket) if bucket is not None else None

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._buckets.keys())

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._buckets)

    def clear(self) -> None:
        """Test helper: drops every bucket."""
        with self._lock:
            self._buckets.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
