# src/flowmatrix/core/config/merge.py
"""
Deep-merge de configuração (defaults ← overrides).

Regras por tipo do valor de override:
    - dict sobre dict    → merge recursivo
    - list               → substitui a lista inteira
    - número sobre número → substitui (int e float são intercambiáveis;
                            bool não conta como número)
    - mesmo tipo escalar → substitui
    - qualquer outra combinação → ConfigTypeConflictError

Nenhum dos dicionários de entrada é alterado.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _merge_value(key: str, current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return deep_merge(current, incoming)
    if isinstance(incoming, list):
        return deepcopy(incoming)
    if _is_number(current) and _is_number(incoming):
        return incoming
    if type(current) is type(incoming):
        return deepcopy(incoming)
    raise ConfigTypeConflictError(
        f"Conflito de tipo na chave '{key}': "
        f"{type(current).__name__} não pode ser sobrescrito por {type(incoming).__name__}"
    )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve um dicionário novo.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: DEFAULT_CONFIG).
        override (Dict[str, Any]): Valores explícitos do chamador.

    Returns:
        Dict[str, Any]: Resultado do merge.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for dict, ou se um
            valor do override tiver tipo incompatível com a base.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"deep_merge espera dois dicts, recebido: "
            f"{type(base).__name__} e {type(override).__name__}"
        )

    merged = deepcopy(base)
    for key, incoming in override.items():
        if key in merged:
            merged[key] = _merge_value(key, merged[key], incoming)
        else:
            merged[key] = deepcopy(incoming)
    return merged
