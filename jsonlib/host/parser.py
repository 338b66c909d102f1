from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .content import Content, ContentLoader

log = logging.getLogger("jsonlib.host")

# The only fields this host understands; everything else in a definition is dropped.
STANDARD_FIELDS = ("type", "description", "health", "size", "localizedName")


class ModNotLoadingError(RuntimeError):
    pass


@dataclass(frozen=True)
class ParseFailure:
    mod: str
    name: str
    message: str


def read_content(node: Any, content_type: str = "block") -> Content:
    """Default deserializer: keep the standard fields, ignore the rest."""
    if not isinstance(node, dict):
        raise ValueError(f"Content definition must be a JSON object, got {type(node).__name__}")
    fields = {k: node[k] for k in STANDARD_FIELDS if k in node}
    return Content(name="", content_type=str(node.get("type", content_type)), fields=fields)


class ContentParser:
    """
    Minimal content parser used to drive the capture hooks end to end.

    For each definition it runs the deserializer on the root node, then
    resolves the content's own name (to find content it overrides), then
    every name it references under "requirements" and "research".
    """

    def __init__(
        self,
        loader: ContentLoader,
        deserializer: Optional[Callable[..., Content]] = None,
    ):
        self.loader = loader
        self.deserializer = deserializer or read_content
        self._current_mod: Optional[str] = None
        self.failures: List[ParseFailure] = []

    @property
    def current_mod(self) -> str:
        if self._current_mod is None:
            raise ModNotLoadingError("No mod is being loaded")
        return self._current_mod

    @contextmanager
    def loading(self, mod: str) -> Iterator[None]:
        previous = self._current_mod
        self._current_mod = mod
        try:
            yield
        finally:
            self._current_mod = previous

    def _locate(self, name: str) -> Optional[Content]:
        found = self.loader.get_by_name(name)
        if found is None and self._current_mod is not None:
            found = self.loader.get_by_name(f"{self._current_mod}-{name}")
        return found

    def parse(
        self,
        mod: str,
        name: str,
        definition: Union[str, Dict[str, Any]],
        content_type: str = "block",
    ) -> Content:
        node = json.loads(definition) if isinstance(definition, str) else definition

        with self.loading(mod):
            content = self.deserializer(node, content_type)

            existing = self._locate(name)
            if existing is not None:
                log.debug("content.overrides name=%s existing=%s", name, existing.name)

            content.name = f"{mod}-{name}"
            content.mod = mod
            content.requirements = [self._locate(str(r)) for r in node.get("requirements", []) or []]
            research = node.get("research")
            if isinstance(research, str):
                content.research = self._locate(research)

            self.loader.register(content)
        return content

    def parse_safe(self, mod: str, name: str, definition: Union[str, Dict[str, Any]], content_type: str = "block") -> Optional[Content]:
        """Like parse(), but a broken definition is recorded in `failures` instead of raised.

        A definition whose deserializer fails never reaches its own name
        lookup, so a marker it carried stays pending and binds to whatever
        name the next definition looks up first, even in another mod.
        """
        try:
            return self.parse(mod, name, definition, content_type)
        except (ValueError, TypeError, KeyError) as e:
            log.warning("Failed to parse %s/%s: %s", mod, name, e)
            self.failures.append(ParseFailure(mod=mod, name=name, message=str(e)))
            return None
