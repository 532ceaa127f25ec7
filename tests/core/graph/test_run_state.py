# tests/core/graph/test_run_state.py
"""
Testes do RunState e do BuildContext.

Os testes asseguram que:
- a tabela guarda no máximo um valor por id
- re-produção substitui o valor anterior por inteiro
- ids ausentes levantam KeyError
- eventos de log carregam run_id, builder, nível e campos extras
- o BuildContext registra logs em nome do builder
"""

import pytest

try:
    from artifact_graph.core.graph.context import BuildContext, RunState
    from artifact_graph.core.graph.types import Artifact, UniqueArtifact
except Exception as e:  # noqa: BLE001
    RunState = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing run state. Implement:\n"
            "- src/artifact_graph/core/graph/context.py (RunState, BuildContext)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _unique(artifact_id, text):
    return UniqueArtifact(id=artifact_id, artifact=Artifact(parts=[{"type": "text", "text": text}]))


def test_table_set_get_has():
    _require_imports()
    state = RunState()
    a = _unique("A", "first")

    state.set_artifact(a)

    assert state.has_artifact("A")
    assert not state.has_artifact("B")
    assert state.get_artifact("A") is a


def test_reproduction_replaces_previous_value():
    _require_imports()
    state = RunState()
    state.set_artifact(_unique("A", "old"))
    new = _unique("A", "new")

    state.set_artifact(new)

    assert state.get_artifact("A") is new
    assert state.artifact_ids() == ["A"]


def test_missing_artifact_raises_key_error():
    _require_imports()
    with pytest.raises(KeyError):
        RunState().get_artifact("nope")


def test_record_produced_tracks_emission_order():
    _require_imports()
    state = RunState()
    state.record_produced(_unique("B", "b"))
    state.record_produced(_unique("A", "a"))

    assert [p.parts[0]["text"] for p in state.produced] == ["b", "a"]
    assert state.has_artifact("A") and state.has_artifact("B")


def test_structured_log_event():
    _require_imports()
    state = RunState(run_id="run-1")

    state.log(builder="Step 1", level="INFO", message="hello", foo=1)

    (ev,) = state.events
    assert ev["run_id"] == "run-1"
    assert ev["builder"] == "Step 1"
    assert ev["level"] == "INFO"
    assert ev["message"] == "hello"
    assert ev["foo"] == 1
    assert "timestamp" in ev


def test_run_ids_are_generated_and_distinct():
    _require_imports()
    assert RunState().run_id.startswith("run-")
    assert RunState().run_id != RunState().run_id


def test_build_context_logs_as_builder(empty_task):
    _require_imports()
    state = RunState()
    ctx = BuildContext(task=empty_task(), history=None, inputs={}, builder="Step 2", state=state)

    ctx.log("DEBUG", "computing", value=3)

    assert state.events[0]["builder"] == "Step 2"
    assert state.events[0]["value"] == 3


def test_build_context_without_state_does_not_log(empty_task):
    _require_imports()
    ctx = BuildContext(task=empty_task(), history=None, inputs={})
    ctx.log("INFO", "ignored")
