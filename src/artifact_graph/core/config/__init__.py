# src/artifact_graph/core/config/__init__.py
"""
Camada de configuração do Artifact Graph.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Leitura tipada das opções do Engine (`EngineSettings`)

Limites explícitos:
    - Não interage com builders
    - Não decide controle de fluxo da run além das opções declaradas
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidEngineSettingError,
    UnsupportedConfigFormatError,
)
from .loader import load_config
from .merge import deep_merge
from .settings import EngineSettings, resolve_engine_settings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "EngineSettings",
    "InvalidConfigRootTypeError",
    "InvalidEngineSettingError",
    "UnsupportedConfigFormatError",
    "deep_merge",
    "load_config",
    "resolve_engine_settings",
]
