# src/artifact_graph/core/engine/__init__.py
"""
Engine do Artifact Graph.

Este pacote contém a implementação responsável por **validar**, **planejar**
e **executar** grafos de artefatos.

Componentes principais:
    - planner      → mapa de produtores e agrupamento em batches (Kahn)
    - reachability → ids que nunca podem ser produzidos a partir do vazio
    - engine       → `ArtifactGraph`: skip, condições, invocação e marcação

Princípios fundamentais:
    - Planejamento e execução são responsabilidades separadas
    - O plano é determinístico para o mesmo grafo
    - Nenhuma decisão silenciosa: skips são registrados no event log

Invariantes:
    - Builders só executam após os produtores de suas entradas
    - Cada builder é executado no máximo uma vez por run

Limites explícitos:
    - Não persiste resultados
    - Não faz retry nem impõe timeout
"""

from .engine import ArtifactGraph, RunPhase
from .planner import CycleDetectedError, DuplicateProducerError, build_producer_map, plan_batches
from .reachability import UnreachableArtifactsError, check_reachability, find_unreachable

__all__ = [
    "ArtifactGraph",
    "CycleDetectedError",
    "DuplicateProducerError",
    "RunPhase",
    "UnreachableArtifactsError",
    "build_producer_map",
    "check_reachability",
    "find_unreachable",
    "plan_batches",
]
