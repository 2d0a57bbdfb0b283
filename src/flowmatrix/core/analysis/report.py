# src/flowmatrix/core/analysis/report.py
"""
Tabela de lead time por item (pandas).

Produz um `pandas.DataFrame` com uma linha por item de trabalho, no formato
consumido pelos exportadores (CSV/planilha) da aplicação hospedeira. O
motor não escreve arquivos: a serialização é responsabilidade do chamador
(ex.: `df.to_csv(...)`).

Colunas (v1):
    - id, label, department, stage
    - duration          → texto de duração bruto
    - minutes           → duração em minutos
    - formatted         → duração formatada ("2h 30m")
    - on_critical_path  → bool
    - severity          → severidade de gargalo (None fora do caminho crítico)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import pandas as pd

from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.model import WorkItem

from .bottleneck import bottleneck_severity, severity_thresholds
from .critical_path import critical_path
from .duration import duration_units, parse_duration
from .lead_time import format_lead_time

LEAD_TIME_COLUMNS = [
    "id",
    "label",
    "department",
    "stage",
    "duration",
    "minutes",
    "formatted",
    "on_critical_path",
    "severity",
]


def lead_time_table(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> pd.DataFrame:
    """Uma linha por item, na ordem de entrada."""
    node_list = list(nodes)
    result = critical_path(node_list, edges, ctx=ctx)
    on_path = set(result.path)
    units = duration_units(ctx)
    thresholds = severity_thresholds(ctx)

    rows = []
    for node in node_list:
        minutes = parse_duration(node.duration_expr, units=units)
        severity = None
        if node.id in on_path:
            severity = bottleneck_severity(minutes, result.total_minutes, thresholds=thresholds).value
        rows.append(
            {
                "id": node.id,
                "label": node.display_label,
                "department": node.department,
                "stage": node.stage,
                "duration": node.duration_expr or "0m",
                "minutes": minutes,
                "formatted": format_lead_time(minutes),
                "on_critical_path": node.id in on_path,
                "severity": severity,
            }
        )

    table = pd.DataFrame(rows, columns=LEAD_TIME_COLUMNS)
    # object dtype preserva None fora do caminho crítico
    table["severity"] = pd.Series(
        [row["severity"] for row in rows], index=table.index, dtype=object
    )
    return table
