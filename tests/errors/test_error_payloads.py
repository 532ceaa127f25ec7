"""
Test — Canonical error payloads

Cenário: cada falha estrutural ou de run é convertida por
`exception_to_error` em um GraphErrorPayload com código estável.
Esperado: `type` estável, `details` com os ids/nomes envolvidos e
`to_dict()` serializável em JSON.
"""

import json

import pytest

from artifact_graph.core.engine.planner import CycleDetectedError, DuplicateProducerError
from artifact_graph.core.engine.reachability import UnreachableArtifactsError
from artifact_graph.core.errors import (
    BUILDER_EXECUTION_ERROR,
    GRAPH_DUPLICATE_BUILDER_NAME,
    GRAPH_DUPLICATE_PRODUCER,
    GRAPH_UNKNOWN_ARTIFACT,
    GRAPH_UNREACHABLE_ARTIFACTS,
    PLAN_CYCLE_DETECTED,
    RUN_INVALID_BUILD_UPDATE,
    RUN_MISSING_BUILDER_INPUT,
    RUN_MISSING_CONDITION_INPUT,
    RUN_UNDECLARED_OUTPUT,
    exception_to_error,
)
from artifact_graph.core.exceptions import (
    InvalidBuildUpdate,
    UndeclaredOutput,
    missing_builder_input,
    missing_condition_input,
)
from artifact_graph.core.graph.registry import DuplicateBuilderNameError, UnknownArtifactError


def _roundtrip(payload):
    return json.loads(json.dumps(payload.to_dict(), sort_keys=True))


def test_missing_condition_input_payload():
    payload = exception_to_error(missing_condition_input(builder="Step 4", artifact_id="step1"))

    assert payload.type == RUN_MISSING_CONDITION_INPUT
    assert payload.details == {"builder": "Step 4", "artifact_id": "step1"}
    assert payload.message == "Condition input 'step1' is not available for builder 'Step 4'"
    assert payload.hint


def test_missing_builder_input_payload():
    payload = exception_to_error(missing_builder_input(builder="Step 2", artifact_id="step1"))

    assert payload.type == RUN_MISSING_BUILDER_INPUT
    assert payload.message == "Artifact 'step1' is not found for builder 'Step 2'"


@pytest.mark.parametrize(
    "exc, code",
    [
        (InvalidBuildUpdate(message="bad", details={"builder": "b"}), RUN_INVALID_BUILD_UPDATE),
        (UndeclaredOutput(message="undeclared", details={"builder": "b", "artifact_id": "X"}), RUN_UNDECLARED_OUTPUT),
    ],
)
def test_builder_contract_payloads(exc, code):
    payload = exception_to_error(exc)
    assert payload.type == code
    assert payload.details == exc.details


def test_structural_payloads_carry_ids():
    cycle = exception_to_error(CycleDetectedError(["a", "b"]))
    assert cycle.type == PLAN_CYCLE_DETECTED
    assert cycle.details == {"builders": ["a", "b"]}

    dup = exception_to_error(DuplicateProducerError("B", ["first", "second"]))
    assert dup.type == GRAPH_DUPLICATE_PRODUCER
    assert dup.details == {"artifact_id": "B", "builders": ["first", "second"]}

    unreachable = exception_to_error(UnreachableArtifactsError(["X", "Y"]))
    assert unreachable.type == GRAPH_UNREACHABLE_ARTIFACTS
    assert unreachable.details == {"artifact_ids": ["X", "Y"]}
    assert unreachable.message == "Unreachable artifact(s): X, Y"

    unknown = exception_to_error(UnknownArtifactError(["Z"]))
    assert unknown.type == GRAPH_UNKNOWN_ARTIFACT
    assert unknown.details == {"artifact_ids": ["Z"]}

    name = exception_to_error(DuplicateBuilderNameError("Duplicate builder name: s"))
    assert name.type == GRAPH_DUPLICATE_BUILDER_NAME


def test_builder_failure_payload_hides_traceback():
    payload = exception_to_error(RuntimeError("Randomly failed in step2"))

    assert payload.type == BUILDER_EXECUTION_ERROR
    assert payload.message == "Randomly failed in step2"
    assert payload.details == {"exception_class": "RuntimeError"}


def test_empty_message_gets_default_text():
    payload = exception_to_error(ValueError())
    assert payload.message


def test_payload_is_json_serializable():
    data = _roundtrip(exception_to_error(missing_builder_input(builder="b", artifact_id="a")))
    assert set(data) == {"type", "message", "details", "hint"}
    assert data["type"] == RUN_MISSING_BUILDER_INPUT
