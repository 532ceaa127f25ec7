# src/artifact_graph/core/engine/reachability.py
"""
Validação de alcançabilidade dos artefatos de um grafo.

Um id de artefato é alcançável quando pode ser produzido compondo
builders a partir daqueles que não exigem entradas. A análise é
puramente estrutural: usa apenas as entradas/saídas declaradas e ignora
artefatos fornecidos em runs específicas.

Invariantes:
    - O universo é a união de todas as entradas e saídas declaradas
    - Ids consumidos mas sem produtor são inalcançáveis, assim como tudo
      que depende deles transitivamente
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set

from artifact_graph.core.graph.builder import ArtifactBuilder


class UnreachableArtifactsError(ValueError):
    """
    Exceção levantada na construção de um grafo que nunca pode completar.

    Carrega a lista completa de ids inalcançáveis em `artifact_ids`.
    """

    def __init__(self, artifact_ids: Sequence[str]):
        self.artifact_ids = list(artifact_ids)
        super().__init__(f"Unreachable artifact(s): {', '.join(self.artifact_ids)}")


def find_unreachable(builders: Iterable[ArtifactBuilder]) -> List[str]:
    """
    Retorna os ids citados pelos builders que não podem ser produzidos
    a partir do conjunto vazio, na ordem da primeira menção.
    """
    builder_list = list(builders)

    universe: List[str] = []
    for b in builder_list:
        for artifact_id in list(b.outputs()) + list(b.inputs()):
            if artifact_id not in universe:
                universe.append(artifact_id)

    reachable: Set[str] = set()
    remaining = list(builder_list)

    advanced = True
    while advanced:
        advanced = False
        for b in list(remaining):
            if all(i in reachable for i in b.inputs()):
                reachable.update(b.outputs())
                remaining.remove(b)
                advanced = True

    return [artifact_id for artifact_id in universe if artifact_id not in reachable]


def check_reachability(builders: Iterable[ArtifactBuilder]) -> None:
    """Falha com `UnreachableArtifactsError` se algum id for inalcançável."""
    unreachable = find_unreachable(builders)
    if unreachable:
        raise UnreachableArtifactsError(unreachable)
