# src/artifact_graph/samples/math_agent.py
"""
Agente de cálculo em múltiplas etapas, com falhas aleatórias.

Grafo:
    Step 1: ()       -> step1   valor da primeira mensagem + 1
    Step 2: (step1)  -> step2   step1 * 2
    Step 3: (step2)  -> step3   step2 como texto
    Step 4: (step2)  -> step4   step2 * 2, apenas quando step1 > 10

Os três primeiros builders falham com probabilidade `failure_rate`.
Reenviar a mesma task faz o grafo pular as etapas já concluídas, até que
todas completem.
"""

from __future__ import annotations

import random
from typing import Any, AsyncIterator, Dict, List, Optional

from artifact_graph.agent import stream_task
from artifact_graph.core.engine.engine import ArtifactGraph
from artifact_graph.core.graph.artifacts import ArtifactSchemaError, data_artifact, parts_artifact
from artifact_graph.core.graph.builder import define_builder
from artifact_graph.core.graph.condition import define_condition
from artifact_graph.core.graph.context import BuildContext
from artifact_graph.core.graph.types import Message, RunUpdate, Task


def _value_schema(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict) or not isinstance(data.get("value"), (int, float)):
        raise ArtifactSchemaError("expected {'value': number}")
    return data


Step1Artifact = data_artifact("step1", _value_schema)
Step2Artifact = data_artifact("step2", _value_schema)
Step3Artifact = parts_artifact("step3", ["text"])
Step4Artifact = data_artifact("step4", _value_schema)

ARTIFACTS = {
    "step1": Step1Artifact.wrap,
    "step2": Step2Artifact.wrap,
    "step3": Step3Artifact.wrap,
    "step4": Step4Artifact.wrap,
}


def _first_number(history: Optional[List[Message]]) -> float:
    if not history:
        raise ValueError("math agent expects a numeric message in history")
    return float(history[0].text())


def build_math_graph(
    *,
    failure_rate: float = 0.8,
    rng: Optional[random.Random] = None,
    config: Optional[Dict[str, Any]] = None,
) -> ArtifactGraph:
    rng = rng or random.Random()

    def maybe_fail(step: str) -> None:
        if rng.random() < failure_rate:
            raise RuntimeError(f"Randomly failed in {step}")

    async def build_step1(ctx: BuildContext):
        value = _first_number(ctx.history)
        maybe_fail("step1")
        yield Step1Artifact.from_data({"value": value + 1})

    async def build_step2(ctx: BuildContext):
        maybe_fail("step2")
        yield Step2Artifact.from_data({"value": ctx.inputs["step1"].parsed()["value"] * 2})

    async def build_step3(ctx: BuildContext):
        maybe_fail("step3")
        value = ctx.inputs["step2"].parsed()["value"]
        yield Step3Artifact.from_parts([{"type": "text", "text": f"{value:g}"}])

    async def build_step4(ctx: BuildContext):
        yield Step4Artifact.from_data({"value": ctx.inputs["step2"].parsed()["value"] * 2})

    return ArtifactGraph(
        artifacts=ARTIFACTS,
        builders=[
            define_builder(name="Step 1", outputs=["step1"], build=build_step1),
            define_builder(name="Step 2", inputs=["step1"], outputs=["step2"], build=build_step2),
            define_builder(name="Step 3", inputs=["step2"], outputs=["step3"], build=build_step3),
            define_builder(name="Step 4", inputs=["step2"], outputs=["step4"], build=build_step4),
        ],
        conditions=[
            define_condition(
                inputs=["step1"],
                when=lambda inputs: inputs["step1"].parsed()["value"] > 10,
                then=["step4"],
            ),
        ],
        config=config,
    )


async def math_agent(task: Task, graph: Optional[ArtifactGraph] = None) -> AsyncIterator[RunUpdate]:
    """Executa o agente para `task` em modo verbose."""
    graph = graph or build_math_graph()
    async for update in stream_task(graph, task, verbose=True):
        yield update
