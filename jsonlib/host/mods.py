from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError

from .parser import ContentParser

log = logging.getLogger("jsonlib.host")


class ModManifest(BaseModel):
    name: str
    version: str = "0.0.0"
    description: Optional[str] = None


@dataclass(frozen=True)
class ContentFile:
    content_type: str
    name: str
    path: Path


@dataclass
class LoadedMod:
    manifest: ModManifest
    root: Path
    files: List[ContentFile] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.manifest.name


class ModRegistry:
    """
    Finds mods under:
      <mods_root>/<mod>/mod.json
      <mods_root>/<mod>/content/<content_type>/<name>.json

    and feeds their files to a ContentParser, mods in name order. A mod
    with a broken or duplicate manifest is skipped with a warning.
    """

    def __init__(self, mods_root: str | Path):
        self.mods_root = Path(mods_root)
        self._mods: Dict[str, LoadedMod] = {}
        self.warnings: List[Dict[str, Any]] = []

    def discover(self) -> Tuple[List[LoadedMod], List[Dict[str, Any]]]:
        self._mods.clear()
        self.warnings = []

        if not self.mods_root.exists():
            self._warn("mods.root_missing", f"No mods directory at {self.mods_root}", self.mods_root)
            return [], self.warnings

        for mod_dir in sorted(p for p in self.mods_root.iterdir() if p.is_dir()):
            manifest_path = mod_dir / "mod.json"
            if not manifest_path.exists():
                continue
            try:
                manifest = ModManifest(**json.loads(manifest_path.read_text(encoding="utf-8")))
            except (OSError, ValueError, TypeError, ValidationError) as e:
                self._warn("mods.bad_manifest", f"Invalid mod.json in {mod_dir.name}: {e}", mod_dir)
                continue

            if manifest.name in self._mods:
                self._warn("mods.duplicate", f"Duplicate mod name: {manifest.name} ({mod_dir})", mod_dir)
                continue

            self._mods[manifest.name] = LoadedMod(
                manifest=manifest,
                root=mod_dir,
                files=self._content_files(mod_dir),
            )

        return [self._mods[n] for n in sorted(self._mods)], self.warnings

    def get(self, name: str) -> Optional[LoadedMod]:
        return self._mods.get(name)

    def load_all(
        self,
        parser: ContentParser,
        *,
        on_load_complete: Optional[Callable[[], None]] = None,
    ) -> int:
        mods, _ = self.discover()
        loaded = 0
        for mod in mods:
            for cf in mod.files:
                try:
                    text = cf.path.read_text(encoding="utf-8")
                except OSError as e:
                    self._warn("mods.unreadable", f"Cannot read {cf.path}: {e}", mod.root)
                    continue
                if parser.parse_safe(mod.name, cf.name, text, cf.content_type) is not None:
                    loaded += 1
            log.info("Loaded mod %s version=%s files=%s", mod.name, mod.manifest.version, len(mod.files))

        if on_load_complete is not None:
            on_load_complete()
        return loaded

    # --- internals ---

    def _content_files(self, mod_dir: Path) -> List[ContentFile]:
        content_root = mod_dir / "content"
        if not content_root.exists():
            return []
        out: List[ContentFile] = []
        for type_dir in sorted(p for p in content_root.iterdir() if p.is_dir()):
            for f in sorted(type_dir.glob("*.json")):
                out.append(ContentFile(content_type=type_dir.name, name=f.stem, path=f))
        return out

    def _warn(self, code: str, message: str, path: Path) -> None:
        log.warning("%s", message)
        self.warnings.append({"code": code, "message": message, "data": {"path": str(path)}})
