# src/artifact_graph/core/graph/context.py
"""
Estado mutável de uma run e contexto entregue aos builders.

Este módulo define:
    - RunState     → tabela de artefatos (id -> UniqueArtifact) e event log de uma run
    - BuildContext → visão restrita entregue a um builder (task, histórico, inputs)

O RunState é o único estado mutável do Engine. Ele existe apenas durante
uma invocação de `ArtifactGraph.run`; persistência entre runs é
responsabilidade do chamador, que reenvia os artefatos já produzidos
(`RunState.produced`) na próxima task.

Invariantes:
    - No máximo um valor vivo por id de artefato
    - Reprodução de um id substitui o valor anterior por inteiro
    - Logs sempre incluem `run_id` e `builder`
    - O BuildContext expõe exatamente os inputs declarados pelo builder

Limites explícitos:
    - Não executa builders
    - Não planeja execução
    - Não persiste dados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from .types import Artifact, Message, Task, UniqueArtifact


@dataclass
class RunState:
    """
    Estado de uma run do grafo.

    Campos:
    - run_id: identificador da execução (gerado quando omitido)
    - events: log estruturado de eventos da run
    - produced: artefatos (já marcados com o id do grafo) emitidos nesta run,
      na ordem de emissão
    - _artifacts: tabela de artefatos disponíveis (pré-existentes + produzidos)
    """
    run_id: str = field(default_factory=lambda: f"run-{uuid4().hex[:12]}")
    events: List[Dict[str, Any]] = field(default_factory=list)
    produced: List[Artifact] = field(default_factory=list)

    _artifacts: Dict[str, UniqueArtifact] = field(default_factory=dict, repr=False)

    # -----------------------------
    # Artifact table
    # -----------------------------
    def set_artifact(self, artifact: UniqueArtifact) -> None:
        self._artifacts[artifact.id] = artifact

    def has_artifact(self, artifact_id: str) -> bool:
        return artifact_id in self._artifacts

    def get_artifact(self, artifact_id: str) -> UniqueArtifact:
        if artifact_id not in self._artifacts:
            raise KeyError(artifact_id)
        return self._artifacts[artifact_id]

    def artifact_ids(self) -> List[str]:
        return list(self._artifacts)

    def record_produced(self, artifact: UniqueArtifact) -> None:
        self.set_artifact(artifact)
        self.produced.append(artifact.artifact)

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, builder: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "builder": builder,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)


@dataclass(frozen=True)
class BuildContext:
    """Contexto de invocação de um builder."""
    task: Task
    history: Optional[List[Message]]
    inputs: Mapping[str, UniqueArtifact]
    builder: str = ""
    state: Optional[RunState] = field(default=None, repr=False, compare=False)

    def log(self, level: str, message: str, **extra: Any) -> None:
        if self.state is not None:
            self.state.log(builder=self.builder, level=level, message=message, **extra)
