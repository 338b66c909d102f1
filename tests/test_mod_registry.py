from jsonlib.core.store.query import get_boolean, get_integer, get_string
from jsonlib.host import ModRegistry


def test_discover_lists_mods_in_name_order(write_mod):
    write_mod("zeta", {}, dirname="a_zeta")
    write_mod("alpha", {"block/turret1": {}, "item/plate": {}})
    write_mod("beta", {})

    reg = ModRegistry(write_mod.root)
    mods, warnings = reg.discover()

    assert [m.name for m in mods] == ["alpha", "beta", "zeta"]
    assert [(f.content_type, f.name) for f in reg.get("alpha").files] == [("block", "turret1"), ("item", "plate")]
    assert warnings == []


def test_broken_and_missing_mods_are_warnings(write_mod, tmp_path):
    write_mod("alpha", {})
    bad = write_mod.root / "broken"
    bad.mkdir()
    (bad / "mod.json").write_text("{not json", encoding="utf-8")
    (write_mod.root / "no_manifest").mkdir()

    mods, warnings = ModRegistry(write_mod.root).discover()

    assert [m.name for m in mods] == ["alpha"]
    assert [w["code"] for w in warnings] == ["mods.bad_manifest"]

    _, warnings = ModRegistry(tmp_path / "nope").discover()
    assert warnings[0]["code"] == "mods.root_missing"


def test_duplicate_mod_names_keep_the_first(write_mod):
    write_mod("alpha", {}, dirname="a1")
    write_mod("alpha", {}, dirname="a2")

    reg = ModRegistry(write_mod.root)
    mods, warnings = reg.discover()

    assert [m.name for m in mods] == ["alpha"]
    assert reg.get("alpha").root.name == "a1"
    assert warnings[0]["code"] == "mods.duplicate"


def test_load_all_captures_fields_per_mod(write_mod, hooks, parser, session):
    write_mod("alpha", {
        "block/turret1": {"type": "turret", "requirements": ["copper"], "customJson": {"power": 500}},
        "block/wall": {"type": "wall", "health": 80},
        "item/plate": {"type": "item", "customJson": {"label": "Plate", "fuel": False}},
    })
    write_mod("beta", {
        "block/turret1": {"type": "turret", "research": "alpha-turret1", "customJson": {"power": 9}},
        "block/broken": "[1, 2",
    })

    completed = []
    reg = ModRegistry(write_mod.root)
    loaded = reg.load_all(parser, on_load_complete=lambda: completed.append(True))

    assert loaded == 4
    assert completed == [True]
    assert [f.name for f in parser.failures] == ["broken"]

    assert get_integer("alpha-turret1", "power", session=session) == 500
    assert get_integer("beta-turret1", "power", session=session) == 9
    assert get_string("alpha-plate", "label", session=session) == "Plate"
    assert get_boolean("alpha-plate", "fuel", session=session) is False
    assert get_integer("alpha-wall", "power", session=session) is None
    assert parser.loader.get_by_name("beta-turret1").research.name == "alpha-turret1"
