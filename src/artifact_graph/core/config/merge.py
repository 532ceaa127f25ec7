# src/artifact_graph/core/config/merge.py
"""
Deep-merge da configuração do Artifact Graph.

Política de merge:
    - dict + dict → merge recursivo por chave
    - list        → substituída por inteiro pelo override
    - escalar     → substituído pelo override
    - tipos diferentes para a mesma chave → ConfigTypeConflictError

O merge é puramente funcional: nenhum input é mutado e o resultado é
sempre um novo dicionário.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _conflict(path: str, base_value: Any, override_value: Any) -> ConfigTypeConflictError:
    return ConfigTypeConflictError(
        f"Conflito de tipo em '{path}': "
        f"{type(base_value).__name__} vs {type(override_value).__name__}"
    )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], _path: str = "") -> Dict[str, Any]:
    """
    Combina `override` sobre `base` e retorna um novo dicionário.

    Raises:
        ConfigTypeConflictError: se uma chave mudar de tipo entre base e override,
            ou se algum dos argumentos não for dict.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise _conflict(_path or "<root>", base, override)

    merged: Dict[str, Any] = deepcopy(base)
    for key, new in override.items():
        path = f"{_path}.{key}" if _path else str(key)
        if key not in merged:
            merged[key] = deepcopy(new)
        elif isinstance(merged[key], dict) and isinstance(new, dict):
            merged[key] = deep_merge(merged[key], new, path)
        elif isinstance(new, list) or type(merged[key]) is type(new):
            merged[key] = deepcopy(new)
        else:
            raise _conflict(path, merged[key], new)
    return merged
