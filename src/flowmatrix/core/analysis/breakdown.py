# src/flowmatrix/core/analysis/breakdown.py
"""
Breakdown Aggregator: totais de duração por classificação.

Soma a duração de **todos** os itens agrupada por uma função de
classificação arbitrária (estágio, departamento, ...). É uma soma de
trabalho total, independente do caminho crítico: tempo de ramos paralelos
é contado integralmente. Durações ausentes ou inválidas contribuem 0.

Invariante de conservação:
    sum(breakdown_by(nodes, key).values()) == sum(parse_duration(n) for n in nodes)
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Mapping, Optional

from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.model import WorkItem

from .duration import duration_units, parse_duration


def breakdown_by(
    nodes: Iterable[WorkItem],
    key_fn: Callable[[WorkItem], Hashable],
    *,
    units: Optional[Mapping[str, float]] = None,
    ctx: Optional[AnalysisContext] = None,
) -> Dict[Hashable, float]:
    """Soma minutos por `key_fn(item)`, na ordem de primeira aparição da chave."""
    if units is None:
        units = duration_units(ctx)
    totals: Dict[Hashable, float] = {}
    for node in nodes:
        key = key_fn(node)
        totals[key] = totals.get(key, 0) + parse_duration(node.duration_expr, units=units, ctx=ctx)
    return totals


def stage_breakdown(
    nodes: Iterable[WorkItem],
    *,
    units: Optional[Mapping[str, float]] = None,
    ctx: Optional[AnalysisContext] = None,
) -> Dict[str, float]:
    return breakdown_by(nodes, lambda n: n.stage, units=units, ctx=ctx)


def department_breakdown(
    nodes: Iterable[WorkItem],
    *,
    units: Optional[Mapping[str, float]] = None,
    ctx: Optional[AnalysisContext] = None,
) -> Dict[str, float]:
    return breakdown_by(nodes, lambda n: n.department, units=units, ctx=ctx)


def stage_lead_time(nodes: Iterable[WorkItem], stage: str, *, ctx: Optional[AnalysisContext] = None) -> float:
    """Total de minutos dos itens de um estágio (0 se o estágio não existir)."""
    return stage_breakdown(nodes, ctx=ctx).get(stage, 0)


def department_lead_time(
    nodes: Iterable[WorkItem], department: str, *, ctx: Optional[AnalysisContext] = None
) -> float:
    return department_breakdown(nodes, ctx=ctx).get(department, 0)
