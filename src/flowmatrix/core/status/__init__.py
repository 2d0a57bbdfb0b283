# src/flowmatrix/core/status/__init__.py
"""
Máquina de estados de dependência do FlowMatrix Engine.

Combina uma derivação pura (`derive_status`) para PENDING/READY/BLOCKED
com duas transições explícitas e *sticky* (`start_work_item`,
`complete_work_item`), evitando sobrescrita acidental de trabalho em curso.
"""

from .machine import (
    PrerequisiteCheck,
    are_all_predecessors_completed,
    blocked_work_items,
    check_prerequisites,
    complete_work_item,
    derive_status,
    executable_work_items,
    recompute_statuses,
    start_work_item,
    update_progress,
    workflow_progress,
)

__all__ = [
    "PrerequisiteCheck",
    "are_all_predecessors_completed",
    "blocked_work_items",
    "check_prerequisites",
    "complete_work_item",
    "derive_status",
    "executable_work_items",
    "recompute_statuses",
    "start_work_item",
    "update_progress",
    "workflow_progress",
]
