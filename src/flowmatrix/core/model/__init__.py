# src/flowmatrix/core/model/__init__.py
"""
Tipos canônicos do FlowMatrix Engine.

Componentes principais:
    - WorkItemType   → TRIGGER, ACTION, DECISION, ARTIFACT
    - RelationKind   → TRIGGER, BLOCKS, REQUIRES, FEEDBACK_TO
    - WorkItemStatus → PENDING, READY, IN_PROGRESS, COMPLETED, BLOCKED
    - WorkItem       → nó imutável do workflow
    - Relationship   → aresta dirigida imutável (source → target)
"""

from .types import (
    STICKY_STATUSES,
    RelationKind,
    Relationship,
    WorkItem,
    WorkItemStatus,
    WorkItemType,
    edge_endpoints,
)

__all__ = [
    "STICKY_STATUSES",
    "RelationKind",
    "Relationship",
    "WorkItem",
    "WorkItemStatus",
    "WorkItemType",
    "edge_endpoints",
]
