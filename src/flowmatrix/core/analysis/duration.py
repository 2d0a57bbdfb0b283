# src/flowmatrix/core/analysis/duration.py
"""
Duration Parser: converte expressões de duração em minutos.

Gramática (v1), após `strip()` e `lower()`:

    ^(\\d+(?:\\.\\d+)?)\\s*([hdm])$

    - h → horas (×60)
    - d → dias (×1440)
    - m → minutos (×1)

Política de erro: **soft-fail**. Qualquer outra forma (sem unidade,
múltiplas unidades, número negativo, texto não numérico, vazio, None ou
valor que não seja texto) resulta em `0`. Nada é levantado; quando um
`AnalysisContext` é informado, textos malformados geram warning no escopo
`duration`. Não há arredondamento de resultados fracionários.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from flowmatrix.core.config import get_section
from flowmatrix.core.context import AnalysisContext

_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-z])$", re.ASCII)


def duration_units(ctx: Optional[AnalysisContext] = None) -> Mapping[str, float]:
    """Multiplicadores em minutos por unidade, a partir da configuração do contexto."""
    config = ctx.config if ctx is not None else None
    return get_section(config, "duration")["units"]


def parse_duration(
    text: Any,
    *,
    units: Optional[Mapping[str, float]] = None,
    ctx: Optional[AnalysisContext] = None,
) -> float:
    """
    Converte uma expressão de duração (ex.: "2h", "0.5 h", " 3D ") em minutos.

    Args:
        text (Any): Expressão de duração. Valores que não são `str` valem 0.
        units (Optional[Mapping[str, float]]): Multiplicadores por unidade;
            quando omitido, vem da configuração de `ctx` (ou dos defaults).
        ctx (Optional[AnalysisContext]): Contexto para warnings de formato.

    Returns:
        float: Duração em minutos (0 para entradas malformadas).
    """
    if not text or not isinstance(text, str):
        return 0

    if units is None:
        units = duration_units(ctx)

    match = _DURATION_RE.match(text.strip().lower())
    if match is None or match.group(2) not in units:
        if ctx is not None:
            ctx.add_warning(
                scope="duration",
                message=(
                    f'Invalid duration format: "{text}". '
                    f'Expected format: "2h", "3d", or "45m".'
                ),
            )
        return 0

    return float(match.group(1)) * units[match.group(2)]
