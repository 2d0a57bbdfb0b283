# src/flowmatrix/core/config/defaults.py
"""
Configuração padrão embutida do FlowMatrix Engine.

Os valores abaixo reproduzem exatamente o comportamento canônico do motor:
    - unidades de duração: m → 1, h → 60, d → 1440 minutos
    - severidade de gargalo: MEDIUM ≥ 30%, HIGH ≥ 40%, CRITICAL ≥ 50%
    - resumo de lead time: horas e dias com 2 casas decimais

Qualquer seção ausente na configuração do chamador é completada a partir
destes defaults via `get_section`.
"""

from typing import Any, Dict, Mapping, Optional

from .merge import deep_merge


DEFAULT_CONFIG: Dict[str, Any] = {
    "duration": {
        "units": {"m": 1, "h": 60, "d": 1440},
    },
    "bottleneck": {
        "thresholds": {"medium": 30, "high": 40, "critical": 50},
    },
    "lead_time": {
        "precision": 2,
    },
}


def get_section(config: Optional[Mapping[str, Any]], name: str) -> Dict[str, Any]:
    """
    Retorna uma seção da configuração completada pelos defaults embutidos.

    Args:
        config (Optional[Mapping[str, Any]]): Configuração do chamador (pode ser None).
        name (str): Nome da seção de primeiro nível (ex.: "duration").

    Returns:
        Dict[str, Any]: Nova seção resolvida (defaults + overrides do chamador).

    Raises:
        ConfigTypeConflictError: Se a seção do chamador conflitar com os defaults.
    """
    base = DEFAULT_CONFIG.get(name, {}) or {}
    override = (config or {}).get(name, {}) or {}
    return deep_merge(base, dict(override))
