# src/artifact_graph/core/config/settings.py
"""
Leitura tipada da seção `engine` da configuração.

Chaves suportadas:
    - verbose (bool, padrão False): emite eventos textuais de diagnóstico
      (builders pulados, plano, resumo final)
    - concurrent_batches (bool, padrão False): executa os builders de um
      mesmo batch concorrentemente

Chaves desconhecidas são ignoradas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidEngineSettingError


@dataclass(frozen=True)
class EngineSettings:
    verbose: bool = False
    concurrent_batches: bool = False


def _flag(section: Mapping[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise InvalidEngineSettingError(
            f"engine.{key} deve ser bool, recebido: {type(value).__name__}"
        )
    return value


def resolve_engine_settings(config: Optional[Dict[str, Any]]) -> EngineSettings:
    section = (config or {}).get("engine", {}) or {}
    if not isinstance(section, Mapping):
        raise InvalidEngineSettingError(
            f"engine deve ser um mapeamento, recebido: {type(section).__name__}"
        )
    return EngineSettings(
        verbose=_flag(section, "verbose", False),
        concurrent_batches=_flag(section, "concurrent_batches", False),
    )
