"""
Artifact Graph — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros serializáveis do Artifact Graph.
Erros são tratados como parte do contrato operacional e devem ser:

- explícitos
- serializáveis
- acionáveis

O Engine propaga exceções ao chamador sem conversão. A conversão para
payload acontece apenas em adapters (ex.: `artifact_graph.agent`), que
precisam reportar falhas como dados.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from artifact_graph.core.engine.planner import CycleDetectedError, DuplicateProducerError
from artifact_graph.core.engine.reachability import UnreachableArtifactsError
from artifact_graph.core.exceptions import (
    GraphException,
    InvalidBuildUpdate,
    MissingBuilderInput,
    MissingConditionInput,
    UndeclaredOutput,
)
from artifact_graph.core.graph.registry import DuplicateBuilderNameError, UnknownArtifactError


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphErrorPayload:
    """
    Payload canônico de erro do Artifact Graph.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Construção do grafo
GRAPH_DUPLICATE_PRODUCER = "GRAPH_DUPLICATE_PRODUCER"
GRAPH_DUPLICATE_BUILDER_NAME = "GRAPH_DUPLICATE_BUILDER_NAME"
GRAPH_UNKNOWN_ARTIFACT = "GRAPH_UNKNOWN_ARTIFACT"
GRAPH_UNREACHABLE_ARTIFACTS = "GRAPH_UNREACHABLE_ARTIFACTS"

# Planejamento
PLAN_CYCLE_DETECTED = "PLAN_CYCLE_DETECTED"

# Run
RUN_MISSING_CONDITION_INPUT = "RUN_MISSING_CONDITION_INPUT"
RUN_MISSING_BUILDER_INPUT = "RUN_MISSING_BUILDER_INPUT"
RUN_INVALID_BUILD_UPDATE = "RUN_INVALID_BUILD_UPDATE"
RUN_UNDECLARED_OUTPUT = "RUN_UNDECLARED_OUTPUT"
BUILDER_EXECUTION_ERROR = "BUILDER_EXECUTION_ERROR"


_RUN_EXCEPTION_CODES = {
    MissingConditionInput: RUN_MISSING_CONDITION_INPUT,
    MissingBuilderInput: RUN_MISSING_BUILDER_INPUT,
    InvalidBuildUpdate: RUN_INVALID_BUILD_UPDATE,
    UndeclaredOutput: RUN_UNDECLARED_OUTPUT,
}


def exception_to_error(exc: BaseException) -> GraphErrorPayload:
    """Converte exceções em GraphErrorPayload (serializável, acionável).

    Regras:
    - GraphException: já vem com message/details/hint.
    - Erros estruturais (planner/reachability/registry): código estável + ids envolvidos.
    - Outras exceções: falha do próprio builder, sem expor stack trace.
    """
    if isinstance(exc, GraphException):
        return GraphErrorPayload(
            type=_RUN_EXCEPTION_CODES.get(type(exc), BUILDER_EXECUTION_ERROR),
            message=exc.message,
            details=dict(exc.details),
            hint=exc.hint,
        )

    if isinstance(exc, CycleDetectedError):
        return GraphErrorPayload(
            type=PLAN_CYCLE_DETECTED,
            message=str(exc),
            details={"builders": list(exc.builders)},
            hint="Remova a dependência circular entre os builders listados.",
        )

    if isinstance(exc, DuplicateProducerError):
        return GraphErrorPayload(
            type=GRAPH_DUPLICATE_PRODUCER,
            message=str(exc),
            details={"artifact_id": exc.artifact_id, "builders": list(exc.builders)},
            hint="Cada artefato deve ter exatamente um builder produtor.",
        )

    if isinstance(exc, UnreachableArtifactsError):
        return GraphErrorPayload(
            type=GRAPH_UNREACHABLE_ARTIFACTS,
            message=str(exc),
            details={"artifact_ids": list(exc.artifact_ids)},
            hint="Registre builders que produzam os artefatos listados a partir de entradas vazias.",
        )

    if isinstance(exc, DuplicateBuilderNameError):
        return GraphErrorPayload(
            type=GRAPH_DUPLICATE_BUILDER_NAME,
            message=str(exc),
            details={},
        )

    if isinstance(exc, UnknownArtifactError):
        return GraphErrorPayload(
            type=GRAPH_UNKNOWN_ARTIFACT,
            message=str(exc),
            details={"artifact_ids": list(exc.artifact_ids)},
            hint="Declare um materializador para cada artefato referenciado.",
        )

    return GraphErrorPayload(
        type=BUILDER_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante execução do builder",
        details={"exception_class": exc.__class__.__name__},
        hint="Reexecute a task: artefatos já emitidos são reaproveitados automaticamente.",
    )
