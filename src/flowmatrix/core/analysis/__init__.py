# src/flowmatrix/core/analysis/__init__.py
"""
Análises de duração do FlowMatrix Engine.

Componentes principais:
    - duration      → Duration Parser (texto → minutos, soft-fail)
    - critical_path → Critical Path Analyzer (caminho mais longo no DAG)
    - breakdown     → Breakdown Aggregator (totais por estágio/departamento)
    - bottleneck    → Bottleneck Classifier (participação → severidade)
    - lead_time     → resumo consolidado e formatação
    - report        → tabela por item (pandas) para exportadores

Princípios fundamentais:
    - Funções puras sobre snapshots fornecidos pelo chamador
    - Nenhum input é mutado; resultados são estruturas novas
    - Durações malformadas nunca levantam exceção
"""

from .bottleneck import BottleneckFinding, Severity, analyze_bottlenecks, bottleneck_severity
from .breakdown import (
    breakdown_by,
    department_breakdown,
    department_lead_time,
    stage_breakdown,
    stage_lead_time,
)
from .critical_path import CriticalPathNode, CriticalPathResult, critical_path, start_candidates
from .duration import parse_duration
from .lead_time import LeadTimeSummary, format_lead_time, is_on_critical_path, workflow_lead_time
from .report import LEAD_TIME_COLUMNS, lead_time_table

__all__ = [
    "LEAD_TIME_COLUMNS",
    "BottleneckFinding",
    "CriticalPathNode",
    "CriticalPathResult",
    "LeadTimeSummary",
    "Severity",
    "analyze_bottlenecks",
    "bottleneck_severity",
    "breakdown_by",
    "critical_path",
    "department_breakdown",
    "department_lead_time",
    "format_lead_time",
    "is_on_critical_path",
    "lead_time_table",
    "parse_duration",
    "stage_breakdown",
    "stage_lead_time",
    "start_candidates",
    "workflow_lead_time",
]
