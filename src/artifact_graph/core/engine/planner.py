# src/artifact_graph/core/engine/planner.py
"""
Planejador de execução do grafo de artefatos.

Este módulo deriva as dependências entre builders a partir dos artefatos
que cada um declara consumir e produzir, e agrupa os builders em batches
ordenados: todo builder aparece em um batch posterior aos produtores de
suas entradas, e builders do mesmo batch não dependem entre si.

Exemplo:
    B1: ()        -> A, B
    B2: (A)       -> C, D
    B3: (B)       -> E
    B4: (A, B, C) -> F

    plan_batches([B1, B2, B3, B4]) == [[B1], [B2, B3], [B4]]

Decisões arquiteturais:
    - Agrupamento topológico no estilo de Kahn, um batch por rodada
    - Empates são resolvidos pela ordem de registro dos builders
    - Entradas sem produtor são tratadas como externas (sem aresta);
      a validação delas é responsabilidade de `reachability`
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Cada builder aparece exatamente uma vez no plano
    - A mesma entrada sempre produz o mesmo plano

Limites explícitos:
    - Não executa builders
    - Não interage com RunState
    - Não decide skip nem condições
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set

from artifact_graph.core.graph.builder import ArtifactBuilder


class DuplicateProducerError(ValueError):
    """
    Exceção levantada quando dois builders declaram a mesma saída.

    Cada id de artefato deve ter no máximo um produtor; caso contrário o
    valor vivo de um id numa run seria ambíguo.
    """

    def __init__(self, artifact_id: str, builders: Sequence[str] = ()):
        self.artifact_id = artifact_id
        self.builders = list(builders)
        super().__init__(f'Duplicate builders detected for artifact "{artifact_id}"')


class CycleDetectedError(ValueError):
    """
    Exceção levantada quando as dependências entre builders formam um ciclo.

    Nenhuma ordem válida pode ser produzida; nenhuma execução parcial é
    iniciada.
    """

    def __init__(self, builders: Sequence[str] = ()):
        self.builders = list(builders)
        names = ", ".join(self.builders)
        super().__init__(f"Cyclic dependency detected among builders: {names}")


def build_producer_map(builders: Iterable[ArtifactBuilder]) -> Dict[str, ArtifactBuilder]:
    """Mapeia cada id de artefato ao builder que o produz."""
    producers: Dict[str, ArtifactBuilder] = {}
    for builder in builders:
        for artifact_id in builder.outputs():
            current = producers.get(artifact_id)
            if current is not None and current is not builder:
                raise DuplicateProducerError(artifact_id, [current.name, builder.name])
            producers[artifact_id] = builder
    return producers


def plan_batches(builders: Iterable[ArtifactBuilder]) -> List[List[ArtifactBuilder]]:
    """
    Agrupa builders em batches ordenados respeitando produtor -> consumidor.

    Args:
        builders: builders a planejar, na ordem de registro.

    Returns:
        List[List[ArtifactBuilder]]: batches em ordem de execução; dentro de
        cada batch, a ordem de registro é preservada.

    Raises:
        DuplicateProducerError: se dois builders produzirem o mesmo id.
        CycleDetectedError: se houver ciclo entre os builders.
    """
    builder_list = list(builders)
    producers = build_producer_map(builder_list)

    # dependências diretas por índice de registro
    deps: Dict[int, Set[int]] = {}
    index_of = {id(b): i for i, b in enumerate(builder_list)}
    for i, builder in enumerate(builder_list):
        required: Set[int] = set()
        for artifact_id in builder.inputs():
            producer = producers.get(artifact_id)
            # um builder nunca depende de si mesmo
            if producer is not None and producer is not builder:
                required.add(index_of[id(producer)])
        deps[i] = required

    batches: List[List[ArtifactBuilder]] = []
    scheduled: Set[int] = set()

    while len(scheduled) < len(builder_list):
        ready = [
            i for i in range(len(builder_list))
            if i not in scheduled and deps[i] <= scheduled
        ]
        if not ready:
            remaining = [b.name for i, b in enumerate(builder_list) if i not in scheduled]
            raise CycleDetectedError(remaining)

        batches.append([builder_list[i] for i in ready])
        scheduled.update(ready)

    return batches
