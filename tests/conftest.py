import json
from pathlib import Path

import pytest

from jsonlib.core.capture import CaptureSession, get_default_session, install
from jsonlib.host import Content, ContentLoader, ContentParser


@pytest.fixture()
def session():
    return CaptureSession()


@pytest.fixture(autouse=True)
def _reset_default_session():
    # tests that go through the module-level API must not see each other's buckets
    get_default_session().reset()
    yield
    get_default_session().reset()


@pytest.fixture()
def loader():
    return ContentLoader(base=[
        Content(name="copper", content_type="item"),
        Content(name="lead", content_type="item"),
        Content(name="duo", content_type="block"),
    ])


@pytest.fixture()
def parser(loader):
    return ContentParser(loader)


@pytest.fixture()
def hooks(parser, loader, session):
    installed = install(parser, loader, session)
    yield installed
    installed.uninstall()


@pytest.fixture()
def write_mod(tmp_path: Path):
    """
    write_mod("alpha", {"block/turret1": {...}}) -> mod dir
    """
    root = tmp_path / "mods"
    root.mkdir(exist_ok=True)

    def _write(name, content, *, version="1.0.0", dirname=None):
        mod_dir = root / (dirname or name)
        mod_dir.mkdir(parents=True, exist_ok=True)
        (mod_dir / "mod.json").write_text(
            json.dumps({"name": name, "version": version}),
            encoding="utf-8",
        )
        for key, definition in content.items():
            ctype, cname = key.split("/", 1)
            d = mod_dir / "content" / ctype
            d.mkdir(parents=True, exist_ok=True)
            (d / f"{cname}.json").write_text(json.dumps(definition), encoding="utf-8")
        return mod_dir

    _write.root = root
    return _write
