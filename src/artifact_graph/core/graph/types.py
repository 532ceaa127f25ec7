# src/artifact_graph/core/graph/types.py
"""
Tipos canônicos trocados entre builders, Engine e o chamador.

Este módulo define o subconjunto do modelo de dados do protocolo de agentes
(task, mensagens, artefatos e atualizações de status) falado pelo Engine,
além do `UniqueArtifact`, a forma identificada de um artefato dentro de
uma run.

Componentes principais:
    - Artifact        → payload opaco produzido ou recebido (parts + metadata)
    - Message         → mensagem do histórico ou de progresso
    - TaskState       → enum de estados de task do protocolo
    - TaskStatus      → estado atual da task
    - Task            → descritor da task em execução
    - ProgressEvent   → atualização de progresso/status repassada ao chamador
    - UniqueArtifact  → artefato associado a um `id` do conjunto fechado

Um builder produz uma sequência de `BuildUpdate`, a união fechada
`ProgressEvent | UniqueArtifact`. O Engine produz para o chamador
`RunUpdate`, a união `ProgressEvent | Artifact`.

Invariantes:
    - Artifact, Message, ProgressEvent e UniqueArtifact são imutáveis
    - Enriquecimento de metadata cria uma nova instância (dataclasses.replace)
    - Tipos não dependem de engine, planner ou adapters
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union


# Chave de metadata usada para reconhecer artefatos produzidos pelo grafo.
ARTIFACT_ID_METADATA_KEY = "artifactGraph.id"


class TaskState(str, Enum):
    """
    Estados de uma task no protocolo de agentes.

    Os valores são strings para facilitar serialização e comparação com
    payloads recebidos do transporte.
    """
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Artifact:
    """
    Artefato do protocolo: conteúdo opaco para o Engine.

    `parts` segue o formato do protocolo (ex.: ``{"type": "text", "text": "..."}``
    ou ``{"type": "data", "data": {...}}``). O Engine lê e escreve apenas
    `metadata`.
    """
    parts: List[Dict[str, Any]] = field(default_factory=list)
    name: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def graph_id(self) -> Optional[str]:
        return (self.metadata or {}).get(ARTIFACT_ID_METADATA_KEY)

    def tagged(self, artifact_id: str) -> "Artifact":
        """Retorna uma NOVA instância com o id do grafo gravado em metadata."""
        metadata = dict(self.metadata or {})
        metadata[ARTIFACT_ID_METADATA_KEY] = artifact_id
        return replace(self, metadata=metadata)


@dataclass(frozen=True)
class Message:
    role: str
    parts: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def agent_text(cls, text: str) -> "Message":
        return cls(role="agent", parts=[{"type": "text", "text": text}])

    def text(self) -> str:
        """Concatena as parts textuais da mensagem."""
        return "".join(p.get("text", "") for p in self.parts if p.get("type") == "text")


@dataclass
class TaskStatus:
    state: TaskState
    message: Optional[Message] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


@dataclass
class Task:
    """
    Descritor da task em execução.

    A task pertence ao chamador: o Engine apenas lê `artifacts` no início
    da run. Adapters (ex.: `stream_task`) podem acrescentar os artefatos
    emitidos para que uma nova invocação retome o trabalho.
    """
    id: str
    status: TaskStatus = field(default_factory=lambda: TaskStatus(state=TaskState.SUBMITTED))
    artifacts: List[Artifact] = field(default_factory=list)
    history: List[Message] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProgressEvent:
    """Atualização de progresso/status repassada sem alteração ao chamador."""
    state: TaskState
    message: Optional[Message] = None
    final: bool = False

    @classmethod
    def working(cls, text: str) -> "ProgressEvent":
        return cls(state=TaskState.WORKING, message=Message.agent_text(text))


@dataclass(frozen=True)
class UniqueArtifact:
    """
    Artefato associado a um `id` do conjunto fechado de artefatos do grafo.

    Subclasses geradas por `data_artifact` / `parts_artifact` adicionam
    acesso tipado ao conteúdo; o Engine depende apenas de `id` e `artifact`.
    """
    id: str
    artifact: Artifact


BuildUpdate = Union[ProgressEvent, UniqueArtifact]
RunUpdate = Union[ProgressEvent, Artifact]
