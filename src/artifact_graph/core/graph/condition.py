# src/artifact_graph/core/graph/condition.py
"""
Condições que habilitam builders opcionais.

Uma condição lê artefatos já produzidos (`inputs`), avalia um predicado
puro e, quando o predicado é falso, faz o Engine pular os builders
relacionados aos ids listados em `then`. Um builder é relacionado a uma
condição quando `then` intersecta suas entradas OU suas saídas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Tuple

from .types import UniqueArtifact


Predicate = Callable[[Mapping[str, UniqueArtifact]], bool]


@dataclass(frozen=True)
class Condition:
    input_ids: Tuple[str, ...]
    predicate: Predicate
    then_ids: Tuple[str, ...]

    def inputs(self) -> List[str]:
        return list(self.input_ids)

    def then(self) -> List[str]:
        return list(self.then_ids)

    def gates(self, builder) -> bool:
        """Indica se a condição se aplica ao builder (via entradas ou saídas)."""
        related = set(builder.inputs()) | set(builder.outputs())
        return any(i in related for i in self.then_ids)

    def evaluate(self, inputs: Mapping[str, UniqueArtifact]) -> bool:
        return bool(self.predicate(inputs))


def define_condition(
    *,
    inputs: Iterable[str],
    when: Predicate,
    then: Iterable[str],
) -> Condition:
    """
    Declara uma condição.

    Exemplo:

        define_condition(
            inputs=["step1"],
            when=lambda inputs: inputs["step1"].parsed()["value"] > 10,
            then=["step4"],
        )
    """
    return Condition(input_ids=tuple(inputs), predicate=when, then_ids=tuple(then))
