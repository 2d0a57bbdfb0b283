# src/flowmatrix/core/analysis/bottleneck.py
"""
Bottleneck Classifier: severidade da participação de um item no caminho crítico.

Mapeamento (limite inferior inclusivo, em % do total do caminho crítico):

    ratio <  30        → LOW
    30 <= ratio <  40  → MEDIUM
    40 <= ratio <  50  → HIGH
    ratio >= 50        → CRITICAL

Total zero resulta sempre em LOW (guarda contra divisão por zero).
Os limites podem ser sobrescritos em `bottleneck.thresholds`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from flowmatrix.core.config import get_section
from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.model import WorkItem

from .critical_path import critical_path


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


def severity_thresholds(ctx: Optional[AnalysisContext] = None) -> Mapping[str, float]:
    config = ctx.config if ctx is not None else None
    return get_section(config, "bottleneck")["thresholds"]


def bottleneck_severity(
    node_minutes: float,
    total_critical_minutes: float,
    *,
    thresholds: Optional[Mapping[str, float]] = None,
) -> Severity:
    """
    Classifica a participação `node_minutes / total_critical_minutes`.

    Função pura: sem efeitos colaterais.
    """
    if total_critical_minutes == 0:
        return Severity.LOW

    if thresholds is None:
        thresholds = severity_thresholds()

    ratio = node_minutes / total_critical_minutes * 100

    if ratio >= thresholds["critical"]:
        return Severity.CRITICAL
    if ratio >= thresholds["high"]:
        return Severity.HIGH
    if ratio >= thresholds["medium"]:
        return Severity.MEDIUM
    return Severity.LOW


@dataclass(frozen=True)
class BottleneckFinding:
    node_id: str
    label: str
    minutes: float
    share: float
    severity: Severity


def analyze_bottlenecks(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> List[BottleneckFinding]:
    """Um achado por item do caminho crítico, na ordem do caminho."""
    result = critical_path(nodes, edges, ctx=ctx)
    thresholds = severity_thresholds(ctx)
    total = result.total_minutes

    findings = []
    for node in result.per_node:
        share = node.duration / total * 100 if total else 0
        findings.append(
            BottleneckFinding(
                node_id=node.id,
                label=node.label,
                minutes=node.duration,
                share=share,
                severity=bottleneck_severity(node.duration, total, thresholds=thresholds),
            )
        )
    return findings
