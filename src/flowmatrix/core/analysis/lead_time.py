# src/flowmatrix/core/analysis/lead_time.py
"""
Resumo de lead time do workflow.

Consolida, em uma única estrutura, o caminho crítico, os totais
convertidos (horas e dias) e os breakdowns por estágio e departamento,
no formato consumido pelo painel de lead time e pelos exportadores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from flowmatrix.core.config import get_section
from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.model import WorkItem

from .breakdown import department_breakdown, stage_breakdown
from .critical_path import CriticalPathNode, critical_path
from .duration import duration_units

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60


def format_lead_time(total_minutes: float) -> str:
    """
    Formata minutos como texto humano: "5d 3h 20m", "2h 30m", "45m".

    Componentes zerados são omitidos; valores <= 0 resultam em "0m".
    """
    total_minutes = round(total_minutes, 2)
    if total_minutes <= 0:
        return "0m"

    days = int(total_minutes // MINUTES_PER_DAY)
    hours = int((total_minutes % MINUTES_PER_DAY) // MINUTES_PER_HOUR)
    minutes = round(total_minutes % MINUTES_PER_HOUR, 2)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes:g}m")
    return " ".join(parts) or "0m"


def is_on_critical_path(node_id: str, path: Sequence[str]) -> bool:
    return node_id in path


@dataclass(frozen=True)
class LeadTimeSummary:
    total_minutes: float = 0
    total_hours: float = 0
    total_days: float = 0
    formatted: str = "0m"
    critical_path: List[str] = field(default_factory=list)
    critical_path_nodes: List[CriticalPathNode] = field(default_factory=list)
    stage_breakdown: Dict[str, float] = field(default_factory=dict)
    department_breakdown: Dict[str, float] = field(default_factory=dict)


def workflow_lead_time(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> LeadTimeSummary:
    """
    Calcula o lead time total do workflow.

    O total é o do caminho crítico; os breakdowns somam o trabalho de todos
    os itens. Horas e dias são arredondados em `lead_time.precision` casas.
    """
    node_list = list(nodes)
    if not node_list:
        return LeadTimeSummary()

    result = critical_path(node_list, edges, ctx=ctx)
    precision = get_section(ctx.config if ctx is not None else None, "lead_time")["precision"]
    total = result.total_minutes

    # warnings de duração já foram registrados pelo caminho crítico
    units = duration_units(ctx)

    return LeadTimeSummary(
        total_minutes=total,
        total_hours=round(total / MINUTES_PER_HOUR, precision),
        total_days=round(total / MINUTES_PER_DAY, precision),
        formatted=format_lead_time(total),
        critical_path=list(result.path),
        critical_path_nodes=list(result.per_node),
        stage_breakdown=stage_breakdown(node_list, units=units),
        department_breakdown=department_breakdown(node_list, units=units),
    )
