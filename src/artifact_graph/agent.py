# src/artifact_graph/agent.py
"""
Adapter de task do protocolo de agentes sobre um `ArtifactGraph`.

`stream_task` traduz uma run nos estados de task do protocolo:

    WORKING → (eventos e artefatos da run) → COMPLETED | FAILED

Diferenças em relação a `ArtifactGraph.run`:
    - cada artefato emitido é registrado em `task.artifacts` (substituindo
      um artefato anterior com o mesmo id do grafo), de modo que invocar
      `stream_task` de novo com a mesma task retoma a partir do que já foi
      produzido
    - falhas não são propagadas: viram um evento final FAILED cujo
      `message` carrega o `GraphErrorPayload` serializado

O transporte (HTTP, SSE, push) permanece fora deste pacote.
"""

from __future__ import annotations

from typing import AsyncIterator, List, Optional

from artifact_graph.core.engine.engine import ArtifactGraph
from artifact_graph.core.errors import exception_to_error
from artifact_graph.core.graph.context import RunState
from artifact_graph.core.graph.types import (
    Artifact,
    Message,
    ProgressEvent,
    RunUpdate,
    Task,
    TaskState,
    TaskStatus,
)


def _remember(task: Task, artifact: Artifact) -> None:
    for i, existing in enumerate(task.artifacts):
        if existing.graph_id == artifact.graph_id:
            task.artifacts[i] = artifact
            return
    task.artifacts.append(artifact)


async def stream_task(
    graph: ArtifactGraph,
    task: Task,
    *,
    history: Optional[List[Message]] = None,
    verbose: Optional[bool] = None,
    state: Optional[RunState] = None,
) -> AsyncIterator[RunUpdate]:
    """Executa o grafo para `task` e atualiza `task.status` e `task.artifacts`."""
    if history is None:
        history = task.history or None

    task.status = TaskStatus(state=TaskState.WORKING)
    yield ProgressEvent(state=TaskState.WORKING)

    try:
        async for update in graph.run(task=task, history=history, verbose=verbose, state=state):
            if isinstance(update, Artifact):
                _remember(task, update)
            yield update
    except Exception as exc:
        error = exception_to_error(exc)
        message = Message(
            role="agent",
            parts=[
                {"type": "text", "text": error.message},
                {"type": "data", "data": error.to_dict()},
            ],
        )
        task.status = TaskStatus(state=TaskState.FAILED, message=message)
        yield ProgressEvent(state=TaskState.FAILED, message=message, final=True)
        return

    task.status = TaskStatus(state=TaskState.COMPLETED)
    yield ProgressEvent(state=TaskState.COMPLETED, final=True)
