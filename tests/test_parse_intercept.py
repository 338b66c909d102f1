import pytest

from jsonlib.core.capture import ModScopeUnavailableError, ParseIntercept, extract_entries
from jsonlib.core.capture.errors import HookInstallError


class _Recorder:
    def __init__(self, result="parsed", exc=None):
        self.calls = []
        self.result = result
        self.exc = exc

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.result


def test_node_without_marker_passes_through_without_side_effects(session):
    host = _Recorder()
    scope_calls = []
    pi = ParseIntercept(host, lambda: scope_calls.append(1) or "alpha", session=session)

    node = {"type": "wall", "health": 10}
    assert pi(node, "block", strict=True) == "parsed"

    assert host.calls == [((node, "block"), {"strict": True})]
    assert scope_calls == []
    assert not session.pending.is_pending
    assert session.metrics.get("marker_seen") == 0


def test_marker_is_staged_and_host_result_returned_unchanged(session):
    result = object()
    host = _Recorder(result=result)
    pi = ParseIntercept(host, lambda: "alpha", session=session)

    node = {"type": "turret", "customJson": {"tier": 3, "label": "alpha"}}
    assert pi(node) is result

    assert session.pending.is_pending
    batch = session.pending.batch
    assert batch.scope == "alpha"
    assert batch.entries == {"tier": 3, "label": "alpha"}
    # host still sees the marker; dropping unknown fields is its business
    assert host.calls[0][0][0] is node


def test_non_mapping_nodes_are_not_inspected(session):
    host = _Recorder()
    pi = ParseIntercept(host, lambda: "alpha", session=session)

    pi(["customJson"])
    pi("customJson")
    pi(None)

    assert not session.pending.is_pending
    assert len(host.calls) == 3


def test_scope_failure_is_fatal_and_host_is_not_called(session):
    host = _Recorder()

    def broken_scope():
        raise RuntimeError("parser not ready")

    pi = ParseIntercept(host, broken_scope, session=session)

    with pytest.raises(ModScopeUnavailableError) as ei:
        pi({"customJson": {"a": 1}})

    assert "parser not ready" in str(ei.value)
    assert host.calls == []
    assert not session.pending.is_pending


@pytest.mark.parametrize("scope", ["", None, 42])
def test_empty_or_non_string_scope_is_rejected(session, scope):
    pi = ParseIntercept(_Recorder(), lambda: scope, session=session)
    with pytest.raises(ModScopeUnavailableError):
        pi({"customJson": {"a": 1}})


def test_scope_object_with_name_is_accepted(session):
    class LoadedMod:
        name = "alpha"

    pi = ParseIntercept(_Recorder(), lambda: LoadedMod(), session=session)
    pi({"customJson": {"a": 1}})
    assert session.pending.scope == "alpha"


def test_capture_survives_a_failing_delegate(session):
    host = _Recorder(exc=ValueError("bad health"))
    pi = ParseIntercept(host, lambda: "alpha", session=session)

    with pytest.raises(ValueError):
        pi({"customJson": {"tier": 1}, "health": "x"})

    assert session.pending.is_pending
    assert session.pending.batch.entries == {"tier": 1}


def test_captured_values_are_copied(session):
    pi = ParseIntercept(_Recorder(), lambda: "alpha", session=session)
    node = {"customJson": {"recipe": {"in": ["copper"]}}}
    pi(node)

    node["customJson"]["recipe"]["in"].append("lead")
    assert session.pending.batch.entries["recipe"] == {"in": ["copper"]}


def test_custom_marker_field(session):
    from jsonlib.core.capture import CaptureConfig, CaptureSession

    s = CaptureSession(CaptureConfig(marker_field="extra"))
    pi = ParseIntercept(_Recorder(), lambda: "alpha", session=s)

    pi({"customJson": {"a": 1}})
    assert not s.pending.is_pending

    pi({"extra": {"a": 1}})
    assert s.pending.batch.entries == {"a": 1}


def test_non_callable_hooks_are_rejected(session):
    with pytest.raises(HookInstallError):
        ParseIntercept("not callable", lambda: "alpha", session=session)
    with pytest.raises(HookInstallError):
        ParseIntercept(_Recorder(), "alpha", session=session)


def test_extract_entries_object():
    entries, skipped = extract_entries({"tier": 3, "flag": True, "nested": {"a": [1, 2]}})
    assert entries == {"tier": 3, "flag": True, "nested": {"a": [1, 2]}}
    assert skipped == 0


def test_extract_entries_array_is_permissive():
    marker = [
        {"name": "tier", "value": 3},
        {"label": "alpha"},
        {"name": "", "value": 1},
        {"a": 1, "b": 2},
        7,
        "loose",
    ]
    entries, skipped = extract_entries(marker)
    assert entries == {"tier": 3, "label": "alpha"}
    assert skipped == 4


def test_extract_entries_scalar_marker_is_empty():
    assert extract_entries(5) == ({}, 1)
    assert extract_entries(None) == ({}, 1)


def test_malformed_entries_are_counted(session):
    pi = ParseIntercept(_Recorder(), lambda: "alpha", session=session)
    pi({"customJson": [{"name": "ok", "value": 1}, 3]})

    assert session.pending.batch.entries == {"ok": 1}
    assert session.metrics.get("entry_skipped") == 1
