from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

log = logging.getLogger("jsonlib.host")


@dataclass
class Content:
    name: str
    content_type: str
    mod: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    requirements: List[Optional["Content"]] = field(default_factory=list)
    research: Optional["Content"] = None


class ContentLoader:
    """Name -> content map.

    Mod content is registered under "<mod>-<name>"; base content (mod=None)
    under its bare name.
    """

    def __init__(self, base: Optional[Iterable[Content]] = None):
        self._by_name: Dict[str, Content] = {}
        for c in base or []:
            self.register(c)

    def register(self, content: Content) -> None:
        if content.name in self._by_name:
            log.debug("content.override name=%s mod=%s", content.name, content.mod)
        self._by_name[content.name] = content

    def get_by_name(self, name: str) -> Optional[Content]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return sorted(self._by_name.keys())

    def __len__(self) -> int:
        return len(self._by_name)
