# tests/conftest.py
"""
Fixtures compartilhados para testes do Artifact Graph.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas
- tasks vazias do protocolo
- builders dummy com contagem de invocações
- materializadores genéricos para ids de teste
- um coletor que executa o fluxo assíncrono de uma run até o fim

Decisões arquiteturais:
    - Builders dummy utilizam duck typing em vez de `define_builder`
    - Runs assíncronas são executadas via `asyncio.run`, sem plugins de pytest
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de domínio

Este módulo existe como infraestrutura de teste e não
como validação funcional do framework.
"""

import asyncio

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Returns:
        str: Conteúdo YAML de `config.defaults.yaml`.
    """
    return """\
engine:
  verbose: false
  concurrent_batches: false
graph:
  name: math
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    YAML de overrides locais: liga o modo verbose e mantém o restante.

    Returns:
        str: Conteúdo YAML de `config.local.yaml`.
    """
    return """\
engine:
  verbose: true
"""


# =====================================================
# Graph fixtures
# =====================================================

@pytest.fixture
def empty_task():
    """
    Fixture factory de tasks vazias (sem artefatos), com id fixo.

    Returns:
        Callable[..., Task]: fábrica que aceita `artifacts` opcionais.
    """
    from artifact_graph.core.graph.types import Task

    def _make(artifacts=None, history=None):
        return Task(id="t1", artifacts=list(artifacts or []), history=list(history or []))

    return _make


@pytest.fixture
def materializers():
    """
    Fixture factory de tabelas id -> materializador para ids arbitrários.

    O materializador apenas associa o artefato recebido ao id, sem
    validação de conteúdo.
    """
    from artifact_graph.core.graph.types import UniqueArtifact

    def _make(*ids):
        return {i: (lambda artifact, _id=i: UniqueArtifact(id=_id, artifact=artifact)) for i in ids}

    return _make


@pytest.fixture
def DummyBuilder():
    """
    Fixture factory que fornece uma implementação mínima e duck-typed de builder.

    A classe retornada:
    - expõe `name`, `inputs()` e `outputs()`
    - em `build`, emite um ProgressEvent e depois um artefato por saída
      declarada, com `{"builder": name, "inputs": [...]}` como dados
    - registra cada invocação em `calls` (o BuildContext recebido)

    Decisões arquiteturais:
        - O builder é definido localmente para evitar acoplamento com `define_builder`
        - O comportamento é deliberadamente simples e previsível
        - `progress=False` suprime o evento de progresso

    Returns:
        type: Classe _DummyBuilder que pode ser instanciada pelos testes.
    """
    from artifact_graph.core.graph.types import Artifact, ProgressEvent, UniqueArtifact

    class _DummyBuilder:
        def __init__(self, name, inputs=(), outputs=(), progress=True):
            self.name = name
            self._inputs = list(inputs)
            self._outputs = list(outputs)
            self.progress = progress
            self.calls = []

        def inputs(self):
            return list(self._inputs)

        def outputs(self):
            return list(self._outputs)

        async def build(self, context):
            self.calls.append(context)
            if self.progress:
                yield ProgressEvent.working(f"building {self.name}")
            for out in self._outputs:
                yield UniqueArtifact(
                    id=out,
                    artifact=Artifact(
                        parts=[{"type": "data", "data": {"builder": self.name, "inputs": sorted(context.inputs)}}]
                    ),
                )

    return _DummyBuilder


def collect_updates(stream):
    """Consome um async iterator até o fim e retorna a lista de valores."""

    async def _consume():
        return [u async for u in stream]

    return asyncio.run(_consume())


@pytest.fixture
def collect():
    """Fixture que expõe `collect_updates` aos testes."""
    return collect_updates
