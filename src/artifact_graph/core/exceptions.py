"""
Artifact Graph — Exceções de execução (v1)

Este módulo define as exceções tipadas levantadas pelo Engine durante
uma run do grafo de artefatos.

Objetivo:
- Abortar a run com contexto suficiente para diagnóstico (builder, artifact_id)
- Facilitar o mapeamento determinístico para GraphErrorPayload
- Evitar RuntimeError genéricos em violações de invariantes da run

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Erros de construção e planejamento do grafo vivem junto aos módulos
  que os detectam (planner, reachability, registry).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class GraphException(Exception):
    """Base class para exceções de run do Artifact Graph.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Resolução de artefatos
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class MissingConditionInput(GraphException):
    """Input exigido por uma condição não está presente na tabela da run."""


@dataclass(frozen=True, eq=False)
class MissingBuilderInput(GraphException):
    """Input declarado por um builder não está presente na tabela da run."""


# ---------------------------------------------------------------------------
# Contrato de saída dos builders
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidBuildUpdate(GraphException):
    """Builder produziu um valor que não é ProgressEvent nem UniqueArtifact."""


@dataclass(frozen=True, eq=False)
class UndeclaredOutput(GraphException):
    """Builder produziu um artefato fora de suas saídas declaradas."""


def missing_condition_input(*, builder: str, artifact_id: str) -> MissingConditionInput:
    return MissingConditionInput(
        message=f"Condition input '{artifact_id}' is not available for builder '{builder}'",
        details={"builder": builder, "artifact_id": artifact_id},
        hint="Garanta que o artefato seja produzido por um batch anterior ou fornecido na task.",
    )


def missing_builder_input(*, builder: str, artifact_id: str) -> MissingBuilderInput:
    return MissingBuilderInput(
        message=f"Artifact '{artifact_id}' is not found for builder '{builder}'",
        details={"builder": builder, "artifact_id": artifact_id},
        hint="Violação de invariante do planner: revise as entradas e saídas declaradas.",
    )
