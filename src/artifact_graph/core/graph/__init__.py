# src/artifact_graph/core/graph/__init__.py
"""
# Graph Core — Artifact Graph

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
que compõem um grafo de artefatos.

Um grafo é modelado como um conjunto de builders que declaram os artefatos
que consomem e produzem, onde:
- as dependências entre builders são derivadas dessas declarações
- a execução é coordenada exclusivamente pelo Engine
- o estado de uma run vive apenas no `RunState`

## Componentes

- **types**: modelo de dados do protocolo (`Artifact`, `Task`, `ProgressEvent`, ...)
  e `UniqueArtifact`
- **artifacts**: fábricas `data_artifact` / `parts_artifact`
- **builder**: `ArtifactBuilder` (Protocol), `BuilderSpec`, `define_builder`
- **condition**: `Condition`, `define_condition`
- **context**: `RunState`, `BuildContext`
- **registry**: `BuilderRegistry`, `check_artifact_kinds`

## Limites Explícitos

- Não planeja execução (ver `core.engine.planner`)
- Não executa builders
"""

from .artifacts import ArtifactSchemaError, data_artifact, parts_artifact
from .builder import ArtifactBuilder, BuilderSpec, define_builder
from .condition import Condition, define_condition
from .context import BuildContext, RunState
from .registry import BuilderRegistry, DuplicateBuilderNameError, UnknownArtifactError, check_artifact_kinds
from .types import (
    ARTIFACT_ID_METADATA_KEY,
    Artifact,
    BuildUpdate,
    Message,
    ProgressEvent,
    RunUpdate,
    Task,
    TaskState,
    TaskStatus,
    UniqueArtifact,
)

__all__ = [
    "ARTIFACT_ID_METADATA_KEY",
    "Artifact",
    "ArtifactBuilder",
    "ArtifactSchemaError",
    "BuildContext",
    "BuildUpdate",
    "BuilderRegistry",
    "BuilderSpec",
    "Condition",
    "DuplicateBuilderNameError",
    "Message",
    "ProgressEvent",
    "RunState",
    "RunUpdate",
    "Task",
    "TaskState",
    "TaskStatus",
    "UniqueArtifact",
    "UnknownArtifactError",
    "check_artifact_kinds",
    "data_artifact",
    "define_builder",
    "define_condition",
    "parts_artifact",
]
