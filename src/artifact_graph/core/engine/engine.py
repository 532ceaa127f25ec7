# src/artifact_graph/core/engine/engine.py
"""
Engine de execução do grafo de artefatos.

O `ArtifactGraph` valida o grafo na construção e, a cada run:

    Initializing → Planning → Executing(batch i) → Completed

- Initializing: carrega os artefatos da task marcados com
  `artifactGraph.id` na tabela da run (artefatos sem marca são ignorados).
- Planning: pula builders cujas saídas já existem e planeja o restante
  em batches (`plan_batches`).
- Executing: para cada builder, avalia as condições relacionadas, resolve
  os inputs declarados, invoca `build` e repassa cada atualização ao
  chamador. Artefatos produzidos são marcados com o id e gravados na
  tabela antes de serem repassados.
- Completed: fim da sequência. Em modo verbose, emite um resumo dos
  artefatos calculados e ausentes.

Falhas de builders abortam a run e são propagadas sem conversão nem
retry. A retomada acontece fora do Engine: uma nova run com os artefatos
já emitidos pula o trabalho concluído.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from artifact_graph.core.config.settings import EngineSettings, resolve_engine_settings
from artifact_graph.core.exceptions import (
    InvalidBuildUpdate,
    UndeclaredOutput,
    missing_builder_input,
    missing_condition_input,
)
from artifact_graph.core.graph.builder import ArtifactBuilder, BuildStream
from artifact_graph.core.graph.condition import Condition
from artifact_graph.core.graph.context import BuildContext, RunState
from artifact_graph.core.graph.registry import BuilderRegistry, Materializer, check_artifact_kinds
from artifact_graph.core.graph.types import (
    Message,
    ProgressEvent,
    RunUpdate,
    Task,
    UniqueArtifact,
)

from .planner import build_producer_map, plan_batches
from .reachability import check_reachability


class RunPhase(str, Enum):
    INITIALIZING = "initializing"
    PLANNING = "planning"
    EXECUTING = "executing"
    COMPLETED = "completed"


_UPDATE = "update"
_DONE = "done"
_FAILED = "failed"


async def _iterate_updates(builder: ArtifactBuilder, stream: BuildStream) -> AsyncIterator[Any]:
    if hasattr(stream, "__aiter__"):
        async for update in stream:  # type: ignore[union-attr]
            yield update
    elif hasattr(stream, "__iter__"):
        for update in stream:  # type: ignore[union-attr]
            yield update
    else:
        raise InvalidBuildUpdate(
            message=f"Builder '{builder.name}' build() must return an iterator of updates",
            details={"builder": builder.name, "received": type(stream).__name__},
            hint="Implemente build(context) como async generator.",
        )


def _describe_plan(skipped: Sequence[ArtifactBuilder], batches: Sequence[Sequence[ArtifactBuilder]]) -> str:
    plan = " -> ".join("[" + ", ".join(b.name for b in batch) + "]" for batch in batches)
    return (
        "Following builders will be skipped, because results are already calculated:\n"
        f"{', '.join(b.name for b in skipped)}\n\n"
        "Execution plan:\n"
        f"{plan}"
    )


def _condition_notice(builder: ArtifactBuilder) -> ProgressEvent:
    return ProgressEvent.working(f"Builder {builder.name} skipped: condition not satisfied")


class ArtifactGraph:
    """
    Grafo de artefatos: validação estrutural + execução de runs.

    Args:
        artifacts: tabela fechada id -> materializador, usada para reconhecer
            artefatos pré-existentes da task.
        builders: builders do grafo, em ordem de registro.
        conditions: condições que habilitam builders opcionais.
        config: configuração resolvida (ver `core.config`).

    Raises:
        DuplicateBuilderNameError: nomes de builder repetidos.
        UnknownArtifactError: id citado sem materializador.
        DuplicateProducerError: dois builders produzem o mesmo id.
        UnreachableArtifactsError: ids que nunca podem ser produzidos.
    """

    def __init__(
        self,
        *,
        artifacts: Mapping[str, Materializer],
        builders: Sequence[ArtifactBuilder],
        conditions: Sequence[Condition] = (),
        config: Optional[Dict[str, Any]] = None,
    ):
        registry = BuilderRegistry()
        for builder in builders:
            registry.add(builder)

        self.builders: List[ArtifactBuilder] = registry.list()
        self.conditions: List[Condition] = list(conditions)
        self.materializers: Dict[str, Materializer] = dict(artifacts)
        self.settings: EngineSettings = resolve_engine_settings(config)

        check_artifact_kinds(self.materializers, self.builders, self.conditions)
        build_producer_map(self.builders)
        check_reachability(self.builders)

    # ------------------------------------------------------------------
    # Initializing
    # ------------------------------------------------------------------
    def _load_existing(self, task: Task, state: RunState) -> None:
        for artifact in task.artifacts or []:
            artifact_id = artifact.graph_id
            if not artifact_id:
                continue

            materialize = self.materializers.get(artifact_id)
            if materialize is None:
                state.log(
                    builder=None,
                    level="WARNING",
                    message="ignored pre-existing artifact with unknown id",
                    artifact_id=artifact_id,
                )
                continue

            state.set_artifact(materialize(artifact))

    # ------------------------------------------------------------------
    # Executing: gating + inputs
    # ------------------------------------------------------------------
    def _conditions_for(self, builder: ArtifactBuilder) -> List[Condition]:
        return [c for c in self.conditions if c.gates(builder)]

    def _conditions_hold(self, builder: ArtifactBuilder, state: RunState) -> bool:
        for condition in self._conditions_for(builder):
            resolved: Dict[str, UniqueArtifact] = {}
            for artifact_id in condition.inputs():
                if not state.has_artifact(artifact_id):
                    raise missing_condition_input(builder=builder.name, artifact_id=artifact_id)
                resolved[artifact_id] = state.get_artifact(artifact_id)

            if not condition.evaluate(resolved):
                return False
        return True

    def _resolve_inputs(self, builder: ArtifactBuilder, state: RunState) -> Dict[str, UniqueArtifact]:
        inputs: Dict[str, UniqueArtifact] = {}
        for artifact_id in builder.inputs():
            if not state.has_artifact(artifact_id):
                raise missing_builder_input(builder=builder.name, artifact_id=artifact_id)
            inputs[artifact_id] = state.get_artifact(artifact_id)
        return inputs

    def _admit(self, builder: ArtifactBuilder, state: RunState) -> Optional[Dict[str, UniqueArtifact]]:
        """Aplica as condições e resolve inputs; None quando o builder deve ser pulado."""
        if not self._conditions_hold(builder, state):
            state.log(builder=builder.name, level="INFO", message="skipped: condition not satisfied")
            return None
        return self._resolve_inputs(builder, state)

    # ------------------------------------------------------------------
    # Executing: updates
    # ------------------------------------------------------------------
    def _accept(self, builder: ArtifactBuilder, update: Any, state: RunState) -> RunUpdate:
        if isinstance(update, ProgressEvent):
            return update

        if isinstance(update, UniqueArtifact):
            if update.id not in builder.outputs():
                raise UndeclaredOutput(
                    message=f"Builder '{builder.name}' produced undeclared artifact '{update.id}'",
                    details={"builder": builder.name, "artifact_id": update.id},
                    hint="Declare o artefato em outputs() ou remova a emissão.",
                )
            tagged = replace(update, artifact=update.artifact.tagged(update.id))
            state.record_produced(tagged)
            return tagged.artifact

        raise InvalidBuildUpdate(
            message=f"Builder '{builder.name}' yielded an unsupported value",
            details={"builder": builder.name, "received": type(update).__name__},
            hint="Builders devem emitir ProgressEvent ou UniqueArtifact.",
        )

    def _context(
        self,
        builder: ArtifactBuilder,
        inputs: Dict[str, UniqueArtifact],
        task: Task,
        history: Optional[List[Message]],
        state: RunState,
    ) -> BuildContext:
        return BuildContext(task=task, history=history, inputs=inputs, builder=builder.name, state=state)

    def _deferred_in_batch(self, batch: Sequence[ArtifactBuilder]) -> List[ArtifactBuilder]:
        """
        Builders cujas condições leem a saída de um builder registrado antes
        no mesmo batch. Rodam sequencialmente depois do grupo concorrente,
        como aconteceria na execução sequencial.
        """
        deferred: List[ArtifactBuilder] = []
        produced_before: Set[str] = set()
        for builder in batch:
            needed = {i for c in self._conditions_for(builder) for i in c.inputs()}
            if needed & produced_before:
                deferred.append(builder)
            produced_before.update(builder.outputs())
        return deferred

    async def _run_sequentially(self, batch, task, history, state, verbose) -> AsyncIterator[RunUpdate]:
        for builder in batch:
            inputs = self._admit(builder, state)
            if inputs is None:
                if verbose:
                    yield _condition_notice(builder)
                continue

            state.log(builder=builder.name, level="INFO", message="started")
            stream = builder.build(self._context(builder, inputs, task, history, state))
            async for update in _iterate_updates(builder, stream):
                yield self._accept(builder, update, state)
            state.log(builder=builder.name, level="INFO", message="finished")

    async def _run_concurrently(self, ready, task, history, state) -> AsyncIterator[RunUpdate]:
        queue: asyncio.Queue = asyncio.Queue()

        async def pump(builder: ArtifactBuilder, inputs: Dict[str, UniqueArtifact]) -> None:
            try:
                stream = builder.build(self._context(builder, inputs, task, history, state))
                async for update in _iterate_updates(builder, stream):
                    queue.put_nowait((builder, _UPDATE, update))
            except Exception as exc:
                queue.put_nowait((builder, _FAILED, exc))
            else:
                queue.put_nowait((builder, _DONE, None))

        for builder, _ in ready:
            state.log(builder=builder.name, level="INFO", message="started")
        tasks = [asyncio.ensure_future(pump(builder, inputs)) for builder, inputs in ready]

        running = len(tasks)
        try:
            while running:
                builder, kind, payload = await queue.get()
                if kind == _FAILED:
                    raise payload
                if kind == _DONE:
                    running -= 1
                    state.log(builder=builder.name, level="INFO", message="finished")
                    continue
                # escritas na tabela acontecem só aqui, uma por vez
                yield self._accept(builder, payload, state)
        finally:
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    async def run(
        self,
        *,
        task: Task,
        history: Optional[List[Message]] = None,
        verbose: Optional[bool] = None,
        state: Optional[RunState] = None,
    ) -> AsyncIterator[RunUpdate]:
        """
        Executa o grafo para a task, produzindo eventos de progresso e artefatos.

        Args:
            task: task corrente; `task.artifacts` marcados são reaproveitados.
            history: histórico de mensagens repassado aos builders.
            verbose: sobrescreve `engine.verbose` da configuração nesta run.
            state: RunState a usar (permite inspecionar eventos e artefatos
                produzidos após a run); criado quando omitido.
        """
        verbose = self.settings.verbose if verbose is None else verbose
        state = state if state is not None else RunState()

        state.log(builder=None, level="INFO", message="run started", phase=RunPhase.INITIALIZING.value, task_id=task.id)
        self._load_existing(task, state)

        skipped = [b for b in self.builders if all(state.has_artifact(o) for o in b.outputs())]
        skipped_names = {b.name for b in skipped}
        batches = plan_batches([b for b in self.builders if b.name not in skipped_names])

        for builder in skipped:
            state.log(builder=builder.name, level="INFO", message="skipped: outputs already calculated")
        state.log(
            builder=None,
            level="INFO",
            message="execution plan",
            phase=RunPhase.PLANNING.value,
            plan=[[b.name for b in batch] for batch in batches],
        )
        if verbose:
            yield ProgressEvent.working(_describe_plan(skipped, batches))

        for index, batch in enumerate(batches):
            state.log(builder=None, level="DEBUG", message="batch started", phase=RunPhase.EXECUTING.value, batch=index)

            if self.settings.concurrent_batches and len(batch) > 1:
                deferred = self._deferred_in_batch(batch)
                deferred_names = {b.name for b in deferred}
                # condições e inputs do grupo concorrente são resolvidos antes do início
                ready: List[Tuple[ArtifactBuilder, Dict[str, UniqueArtifact]]] = []
                for builder in batch:
                    if builder.name in deferred_names:
                        continue
                    inputs = self._admit(builder, state)
                    if inputs is None:
                        if verbose:
                            yield _condition_notice(builder)
                        continue
                    ready.append((builder, inputs))
                stages = [
                    self._run_concurrently(ready, task, history, state),
                    self._run_sequentially(deferred, task, history, state, verbose),
                ]
            else:
                stages = [self._run_sequentially(batch, task, history, state, verbose)]

            for updates in stages:
                try:
                    async for update in updates:
                        yield update
                finally:
                    await updates.aclose()

        calculated = [i for i in self.materializers if state.has_artifact(i)]
        missing = [i for i in self.materializers if not state.has_artifact(i)]
        state.log(
            builder=None,
            level="INFO",
            message="run completed",
            phase=RunPhase.COMPLETED.value,
            calculated=calculated,
            missing=missing,
        )
        if verbose:
            yield ProgressEvent.working(
                f"Calculated artifacts: {', '.join(calculated)}\n"
                f"Missing artifacts: {', '.join(missing)}"
            )
