# src/artifact_graph/core/graph/builder.py
"""
Contrato canônico de builder do Artifact Graph.

Um builder é a menor unidade executável do grafo: declara os ids de
artefato que consome (`inputs()`) e os que promete produzir
(`outputs()`), e produz uma sequência de atualizações a partir de um
`BuildContext`.

Responsabilidades de um builder:
    - ler apenas os inputs recebidos no contexto
    - emitir `ProgressEvent` para progresso e `UniqueArtifact` para resultados
    - não carregar estado entre runs

Princípios fundamentais:
    - Builders não conhecem o Engine nem o planner
    - Dependências são derivadas das entradas/saídas declaradas
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define retry ou timeout
    - Não escreve na tabela de artefatos diretamente
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Iterable, List, Protocol, Tuple, Union, runtime_checkable

from .context import BuildContext
from .types import BuildUpdate


BuildStream = Union[AsyncIterator[BuildUpdate], Iterable[BuildUpdate]]


@runtime_checkable
class ArtifactBuilder(Protocol):
    """
    Contrato mínimo de um builder.

    Atributos obrigatórios:
        - name: identificador único e estável do builder
        - inputs(): ids de artefato exigidos, em ordem
        - outputs(): ids de artefato produzidos, em ordem

    `build(context)` retorna um async iterator (tipicamente um async
    generator) de `BuildUpdate`. Iteradores síncronos também são aceitos
    pelo Engine.
    """
    name: str

    def inputs(self) -> List[str]:
        ...

    def outputs(self) -> List[str]:
        ...

    def build(self, context: BuildContext) -> BuildStream:
        ...


@dataclass(frozen=True)
class BuilderSpec:
    """Builder declarado como valor: nome, ids e a função de build."""
    name: str
    input_ids: Tuple[str, ...]
    output_ids: Tuple[str, ...]
    build_fn: Callable[[BuildContext], BuildStream]

    def inputs(self) -> List[str]:
        return list(self.input_ids)

    def outputs(self) -> List[str]:
        return list(self.output_ids)

    def build(self, context: BuildContext) -> BuildStream:
        return self.build_fn(context)


def define_builder(
    *,
    name: str,
    inputs: Iterable[str] = (),
    outputs: Iterable[str],
    build: Callable[[BuildContext], Any],
) -> BuilderSpec:
    """
    Declara um builder a partir de uma função de build.

    Exemplo:

        async def build_step2(ctx):
            value = ctx.inputs["step1"].parsed()["value"]
            yield Step2Artifact.from_data({"value": value * 2})

        step2 = define_builder(name="Step 2", inputs=["step1"], outputs=["step2"], build=build_step2)
    """
    return BuilderSpec(
        name=name,
        input_ids=tuple(inputs),
        output_ids=tuple(outputs),
        build_fn=build,
    )
