# src/artifact_graph/__init__.py
"""
Artifact Graph — orquestração de builders declarativos sobre artefatos tipados.

Builders declaram os artefatos que consomem e produzem; o grafo resultante é
validado na construção (produtores únicos, alcançabilidade), planejado em
batches paralelizáveis e executado como um fluxo assíncrono de eventos de
progresso e artefatos.

Princípios centrais:
    - O grafo é derivado das declarações de entrada/saída dos builders
    - O plano é determinístico para o mesmo conjunto de builders
    - Trabalho já concluído é pulado: reenviar os artefatos emitidos retoma a run
    - Builders opcionais são habilitados por condições sobre artefatos produzidos

Arquitetura em alto nível:
    - core.graph   → tipos, builders, condições, RunState
    - core.engine  → planner, reachability e `ArtifactGraph`
    - core.config  → carregamento e merge de configuração
    - agent        → adapter de estados de task do protocolo de agentes

Limites explícitos:
    - Não persiste estado entre runs
    - Não distribui execução entre processos ou máquinas
    - Não implementa o transporte de rede do protocolo
"""

from .agent import stream_task
from .core.config import EngineSettings, load_config, resolve_engine_settings
from .core.engine import (
    ArtifactGraph,
    CycleDetectedError,
    DuplicateProducerError,
    UnreachableArtifactsError,
    find_unreachable,
    plan_batches,
)
from .core.errors import GraphErrorPayload, exception_to_error
from .core.exceptions import (
    GraphException,
    InvalidBuildUpdate,
    MissingBuilderInput,
    MissingConditionInput,
    UndeclaredOutput,
)
from .core.graph import (
    ARTIFACT_ID_METADATA_KEY,
    Artifact,
    ArtifactBuilder,
    ArtifactSchemaError,
    BuildContext,
    Condition,
    DuplicateBuilderNameError,
    Message,
    ProgressEvent,
    RunState,
    Task,
    TaskState,
    TaskStatus,
    UniqueArtifact,
    UnknownArtifactError,
    data_artifact,
    define_builder,
    define_condition,
    parts_artifact,
)

__all__ = [
    "ARTIFACT_ID_METADATA_KEY",
    "Artifact",
    "ArtifactBuilder",
    "ArtifactGraph",
    "ArtifactSchemaError",
    "BuildContext",
    "Condition",
    "CycleDetectedError",
    "DuplicateBuilderNameError",
    "DuplicateProducerError",
    "EngineSettings",
    "GraphErrorPayload",
    "GraphException",
    "InvalidBuildUpdate",
    "Message",
    "MissingBuilderInput",
    "MissingConditionInput",
    "ProgressEvent",
    "RunState",
    "Task",
    "TaskState",
    "TaskStatus",
    "UndeclaredOutput",
    "UniqueArtifact",
    "UnknownArtifactError",
    "UnreachableArtifactsError",
    "data_artifact",
    "define_builder",
    "define_condition",
    "exception_to_error",
    "find_unreachable",
    "load_config",
    "parts_artifact",
    "plan_batches",
    "resolve_engine_settings",
    "stream_task",
]
