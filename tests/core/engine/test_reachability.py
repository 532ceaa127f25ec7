# tests/core/engine/test_reachability.py
"""
Testes da análise de alcançabilidade de artefatos.

Os testes asseguram que:
- ids consumidos sem produtor são inalcançáveis
- dependentes transitivos de ids inalcançáveis também são
- grafos completamente produtíveis retornam vazio
- a construção do grafo falha com a lista completa de ids
"""

import pytest

try:
    from artifact_graph.core.engine.engine import ArtifactGraph
    from artifact_graph.core.engine.reachability import (
        UnreachableArtifactsError,
        check_reachability,
        find_unreachable,
    )
except Exception as e:
    find_unreachable = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing reachability. Implement:
- src/artifact_graph/core/engine/reachability.py (find_unreachable)
Import error: {_IMPORT_ERR}
""")


def test_missing_producer_makes_input_and_output_unreachable(DummyBuilder):
    """B1(X) -> {Y} sem produtor de X: {X, Y} são inalcançáveis."""
    _require_imports()
    assert set(find_unreachable([DummyBuilder("B1", ["X"], ["Y"])])) == {"X", "Y"}


def test_fully_producible_graph(DummyBuilder):
    _require_imports()
    builders = [
        DummyBuilder("b3", ["B"], ["C"]),
        DummyBuilder("b1", [], ["A"]),
        DummyBuilder("b2", ["A"], ["B"]),
    ]
    assert find_unreachable(builders) == []


def test_transitive_unreachability(DummyBuilder):
    _require_imports()
    builders = [
        DummyBuilder("ok", [], ["A"]),
        DummyBuilder("broken", ["A", "MISSING"], ["B"]),
        DummyBuilder("downstream", ["B"], ["C"]),
        DummyBuilder("side", ["A"], ["D"]),
    ]
    assert set(find_unreachable(builders)) == {"MISSING", "B", "C"}


def test_cycle_is_unreachable(DummyBuilder):
    """Builders em ciclo nunca disparam a partir do conjunto vazio."""
    _require_imports()
    builders = [DummyBuilder("a", ["B"], ["A"]), DummyBuilder("b", ["A"], ["B"])]
    assert set(find_unreachable(builders)) == {"A", "B"}


def test_check_reachability_lists_all_ids(DummyBuilder):
    _require_imports()
    with pytest.raises(UnreachableArtifactsError) as exc_info:
        check_reachability([DummyBuilder("B1", ["X"], ["Y"])])

    assert set(exc_info.value.artifact_ids) == {"X", "Y"}
    assert str(exc_info.value).startswith("Unreachable artifact(s):")


def test_graph_construction_fails_when_unreachable(DummyBuilder, materializers):
    """
    Verifica que o ArtifactGraph falha na construção quando o builder de
    step2 depende de step1 e ninguém produz step1.
    """
    _require_imports()
    with pytest.raises(UnreachableArtifactsError, match=r"Unreachable artifact\(s\):"):
        ArtifactGraph(
            artifacts=materializers("step1", "step2"),
            builders=[DummyBuilder("step2", ["step1"], ["step2"])],
        )
