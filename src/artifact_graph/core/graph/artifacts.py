# src/artifact_graph/core/graph/artifacts.py
"""
Fábricas de classes de artefato com conteúdo verificado.

Cada fábrica gera uma subclasse de `UniqueArtifact` presa a um `id` do
grafo, oferecendo:
    - `wrap(artifact)`  → materializador usado na tabela de artefatos do grafo
    - construtor tipado (`from_data` / `from_parts`)
    - leitor tipado (`parsed()` / `parts()`)

Exemplo:

    def validate_user(data):
        if not isinstance(data.get("name"), str):
            raise ArtifactSchemaError("name must be a string")
        return data

    UserArtifact = data_artifact("user", validate_user)
    art = UserArtifact.from_data({"name": "John"})
    art.parsed()["name"]

A validação é uma função simples `data -> data` que levanta
`ArtifactSchemaError`; nenhum framework de schema é imposto.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from .types import Artifact, UniqueArtifact


class ArtifactSchemaError(ValueError):
    """Conteúdo de um artefato não satisfaz o schema declarado."""


Validator = Callable[[Any], Any]


def _accept(data: Any) -> Any:
    return data


def data_artifact(artifact_id: str, validate: Optional[Validator] = None) -> Type[UniqueArtifact]:
    """Gera uma classe de artefato que carrega uma única part `data`."""
    check = validate or _accept

    class DataArtifact(UniqueArtifact):
        kind_id = artifact_id

        @classmethod
        def wrap(cls, artifact: Artifact) -> "DataArtifact":
            return cls(id=artifact_id, artifact=artifact)

        @classmethod
        def from_data(cls, data: Any, **fields: Any) -> "DataArtifact":
            check(data)
            return cls.wrap(Artifact(parts=[{"type": "data", "data": data}], **fields))

        def parsed(self) -> Any:
            part = self.artifact.parts[0] if self.artifact.parts else None
            if not part or part.get("type") != "data":
                raise ArtifactSchemaError(f"Artifact {artifact_id} has no data part")
            return check(part.get("data"))

    DataArtifact.__name__ = DataArtifact.__qualname__ = f"DataArtifact[{artifact_id}]"
    return DataArtifact


def parts_artifact(artifact_id: str, part_types: Optional[Sequence[str]] = None) -> Type[UniqueArtifact]:
    """Gera uma classe de artefato cujas parts seguem uma sequência fixa de tipos."""
    expected = list(part_types) if part_types is not None else None

    def _check(parts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if expected is None:
            return parts
        got = [p.get("type") for p in parts]
        if got != expected:
            raise ArtifactSchemaError(
                f"Artifact {artifact_id} expects parts {expected}, got {got}"
            )
        return parts

    class PartsArtifact(UniqueArtifact):
        kind_id = artifact_id

        @classmethod
        def wrap(cls, artifact: Artifact) -> "PartsArtifact":
            return cls(id=artifact_id, artifact=artifact)

        @classmethod
        def from_parts(cls, parts: Sequence[Dict[str, Any]], **fields: Any) -> "PartsArtifact":
            return cls.wrap(Artifact(parts=_check(list(parts)), **fields))

        def parts(self) -> List[Dict[str, Any]]:
            return _check(list(self.artifact.parts))

    PartsArtifact.__name__ = PartsArtifact.__qualname__ = f"PartsArtifact[{artifact_id}]"
    return PartsArtifact
