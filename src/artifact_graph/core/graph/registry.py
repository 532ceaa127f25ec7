# src/artifact_graph/core/graph/registry.py
"""
Registro estrutural de builders e da tabela de tipos de artefato.

Este módulo define o `BuilderRegistry`, responsável por registrar builders
e validar a integridade estrutural do grafo antes de qualquer
planejamento ou execução, e `check_artifact_kinds`, que confere que
todo id referenciado possui um materializador.

Responsabilidades do módulo:
    - Validar unicidade de `builder.name`
    - Preservar a ordem de registro (usada como desempate pelo planner)
    - Validar exaustivamente o conjunto fechado de ids de artefato

Decisões arquiteturais:
    - A validação ocorre na construção do grafo, antes de qualquer run
    - Erros estruturais são tratados como falhas fatais

Limites explícitos:
    - Não resolve dependências (ver planner)
    - Não verifica alcançabilidade (ver reachability)
    - Não executa builders
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping

from .builder import ArtifactBuilder
from .condition import Condition
from .types import Artifact, UniqueArtifact


Materializer = Callable[[Artifact], UniqueArtifact]


class DuplicateBuilderNameError(ValueError):
    """
    Exceção levantada quando dois builders são registrados com o mesmo nome.

    O nome identifica o builder em logs, no plano de execução e no
    conjunto de builders pulados; duplicidade torna esses registros
    ambíguos.
    """


class UnknownArtifactError(ValueError):
    """Um builder ou condição referencia um id sem materializador registrado."""

    def __init__(self, artifact_ids: List[str]):
        self.artifact_ids = list(artifact_ids)
        super().__init__(f"Unknown artifact id(s): {', '.join(self.artifact_ids)}")


@dataclass
class BuilderRegistry:
    """
    Registro canônico de builders para validação estrutural pré-execução.

    Invariantes:
        - Cada `builder.name` é único no registry
        - A lista de builders reflete exatamente a ordem de registro
    """

    _builders: Dict[str, ArtifactBuilder] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, builder: ArtifactBuilder) -> None:
        name = getattr(builder, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("builder.name must be a non-empty string")

        if name in self._builders:
            raise DuplicateBuilderNameError(f"Duplicate builder name: {name}")

        self._builders[name] = builder
        self._order.append(name)

    def get(self, name: str) -> ArtifactBuilder:
        return self._builders[name]

    def list(self) -> List[ArtifactBuilder]:
        return [self._builders[n] for n in self._order]


def check_artifact_kinds(
    materializers: Mapping[str, Materializer],
    builders: Iterable[ArtifactBuilder],
    conditions: Iterable[Condition] = (),
) -> None:
    """Falha se algum id citado por builders ou condições não tiver materializador."""
    mentioned: List[str] = []
    for b in builders:
        mentioned.extend(b.inputs())
        mentioned.extend(b.outputs())
    for c in conditions:
        mentioned.extend(c.inputs())
        mentioned.extend(c.then())

    unknown: List[str] = []
    for artifact_id in mentioned:
        if artifact_id not in materializers and artifact_id not in unknown:
            unknown.append(artifact_id)

    if unknown:
        raise UnknownArtifactError(unknown)
