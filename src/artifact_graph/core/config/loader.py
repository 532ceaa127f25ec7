# src/artifact_graph/core/config/loader.py
"""
Loader de configuração do Artifact Graph.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ignorado se não existir)

Exemplo de arquivo:

    engine:
      verbose: true
      concurrent_batches: false

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


def _read_mapping(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML ou JSON e garante que a raiz seja um mapeamento.

    Arquivos vazios são lidos como `{}`.

    Raises:
        DefaultsNotFoundError: se o arquivo não existir.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        InvalidConfigRootTypeError: se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do grafo.

    Args:
        defaults_path: caminho do arquivo base (obrigatório).
        local_path: caminho opcional de overrides locais.

    Returns:
        Dict[str, Any]: configuração resolvida (defaults + local).

    Raises:
        DefaultsNotFoundError: se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: se o formato não for suportado.
        InvalidConfigRootTypeError: se o conteúdo não for um dicionário.
        ConfigTypeConflictError: se ocorrer conflito de tipo no merge.
    """
    effective = _read_mapping(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _read_mapping(local_file))

    return effective
