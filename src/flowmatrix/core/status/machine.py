# src/flowmatrix/core/status/machine.py
"""
Dependency State Machine: status de ciclo de vida dos itens de trabalho.

Estados: PENDING, READY, IN_PROGRESS, COMPLETED, BLOCKED.
Estado terminal: COMPLETED (nenhuma operação o deixa).

Regra de derivação (aplicada a todos os itens em cada recomputação):
    - COMPLETED e IN_PROGRESS são *sticky*: nunca são recalculados
    - se algum predecessor direto não está COMPLETED → BLOCKED
    - caso contrário → READY (inclusive TRIGGER, que não tem predecessores)

Operações explícitas:
    - start    → apenas a partir de READY: IN_PROGRESS, `started_at`,
                 `progress = 0`; fora de READY é no-op
    - complete → rejeita com `PrerequisiteError` (todos os rótulos pendentes)
                 se houver predecessor direto não concluído; senão COMPLETED,
                 `progress = 100`, `completed_at`, e recomputação de todo o grafo

Decisões arquiteturais:
    - Todas as operações recebem snapshots e devolvem listas novas
    - A recomputação é global (O(V + E)) e feita em uma única passada:
      ela nunca cria nem remove COMPLETED, então o status dos predecessores
      lido do snapshot de entrada já é o definitivo
    - Ids desconhecidos levantam `UnknownWorkItemError`
    - `complete` sobre item já COMPLETED é idempotente (timestamps mantidos)

Limites explícitos:
    - Não serializa chamadas concorrentes (responsabilidade do chamador)
    - Não persiste o snapshot resultante
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.errors import work_item_not_found
from flowmatrix.core.exceptions import PrerequisiteError, UnknownWorkItemError
from flowmatrix.core.graph import WorkflowGraph, build_graph
from flowmatrix.core.model import STICKY_STATUSES, WorkItem, WorkItemStatus


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def _require(graph: WorkflowGraph, node_id: str, operation: str) -> WorkItem:
    if node_id not in graph:
        payload = work_item_not_found(work_item_id=node_id, operation=operation)
        raise UnknownWorkItemError(
            message=f"Unknown work item '{node_id}'",
            details=payload.details,
            hint=payload.hint,
        )
    return graph.items[node_id]


def derive_status(item: WorkItem, predecessor_statuses: Iterable[WorkItemStatus]) -> WorkItemStatus:
    """
    Deriva o status de um item a partir do seu status atual e do status
    dos predecessores diretos. Função pura.
    """
    if item.status in STICKY_STATUSES:
        return item.status
    if any(status != WorkItemStatus.COMPLETED for status in predecessor_statuses):
        return WorkItemStatus.BLOCKED
    return WorkItemStatus.READY


def _recompute(graph: WorkflowGraph, ctx: Optional[AnalysisContext]) -> List[WorkItem]:
    updated: List[WorkItem] = []
    for nid in graph.order:
        item = graph.items[nid]
        status = derive_status(item, (graph.items[p].status for p in graph.predecessors[nid]))
        if status != item.status:
            if ctx is not None:
                ctx.log(
                    scope="status",
                    level="INFO",
                    message="Status derived",
                    work_item_id=nid,
                    previous=item.status.value,
                    status=status.value,
                )
            item = replace(item, status=status)
        updated.append(item)
    return updated


def recompute_statuses(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> List[WorkItem]:
    """Aplica a regra de derivação a todos os itens e devolve um snapshot novo."""
    return _recompute(build_graph(nodes, edges, ctx=ctx), ctx)


def are_all_predecessors_completed(
    node_id: str,
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
) -> bool:
    graph = build_graph(nodes, edges)
    return all(
        graph.items[p].status == WorkItemStatus.COMPLETED
        for p in graph.predecessors.get(node_id, [])
    )


@dataclass(frozen=True)
class PrerequisiteCheck:
    can_complete: bool
    incomplete_prerequisites: List[str] = field(default_factory=list)


def _incomplete_labels(graph: WorkflowGraph, node_id: str) -> List[str]:
    return [
        graph.items[p].display_label
        for p in graph.predecessors.get(node_id, [])
        if graph.items[p].status != WorkItemStatus.COMPLETED
    ]


def check_prerequisites(
    node_id: str,
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
) -> PrerequisiteCheck:
    """Rótulos dos predecessores diretos ainda não concluídos."""
    incomplete = _incomplete_labels(build_graph(nodes, edges), node_id)
    return PrerequisiteCheck(can_complete=not incomplete, incomplete_prerequisites=incomplete)


def start_work_item(
    node_id: str,
    nodes: Iterable[WorkItem],
    *,
    now: Optional[datetime] = None,
    ctx: Optional[AnalysisContext] = None,
) -> List[WorkItem]:
    """
    Inicia um item READY (IN_PROGRESS, `started_at`, `progress = 0`).

    Fora de READY a operação é um no-op: o snapshot volta inalterado
    (e um warning é registrado no contexto, quando fornecido).

    Raises:
        UnknownWorkItemError: Se `node_id` não existir no snapshot.
    """
    graph = build_graph(nodes, [])
    item = _require(graph, node_id, "start")

    if item.status != WorkItemStatus.READY:
        if ctx is not None:
            ctx.add_warning(
                scope="status",
                message=f"Cannot start '{item.display_label}' from status {item.status.value}",
            )
        return [graph.items[nid] for nid in graph.order]

    started = replace(
        item,
        status=WorkItemStatus.IN_PROGRESS,
        started_at=_timestamp(now),
        progress=0,
    )
    if ctx is not None:
        ctx.log(scope="status", level="INFO", message="Work item started", work_item_id=node_id)
    return [started if nid == node_id else graph.items[nid] for nid in graph.order]


def complete_work_item(
    node_id: str,
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    now: Optional[datetime] = None,
    ctx: Optional[AnalysisContext] = None,
) -> List[WorkItem]:
    """
    Conclui um item e recomputa o status de todo o grafo.

    Returns:
        List[WorkItem]: Snapshot novo com o item COMPLETED e os sucessores
        desbloqueados.

    Raises:
        PrerequisiteError: Se houver predecessores diretos não concluídos;
            `details["incomplete_prerequisites"]` lista todos os rótulos.
        UnknownWorkItemError: Se `node_id` não existir no snapshot.
    """
    graph = build_graph(nodes, edges, ctx=ctx)
    item = _require(graph, node_id, "complete")

    incomplete = _incomplete_labels(graph, node_id)
    if incomplete:
        raise PrerequisiteError.for_item(
            work_item_id=node_id,
            work_item_label=item.display_label,
            incomplete=incomplete,
        )

    if item.status != WorkItemStatus.COMPLETED:
        item = replace(
            item,
            status=WorkItemStatus.COMPLETED,
            progress=100,
            completed_at=_timestamp(now),
        )
        graph.items[node_id] = item
        if ctx is not None:
            ctx.log(scope="status", level="INFO", message="Work item completed", work_item_id=node_id)

    return _recompute(graph, ctx)


def update_progress(
    node_id: str,
    progress: float,
    nodes: Iterable[WorkItem],
) -> List[WorkItem]:
    """Atualiza o progresso (limitado a 0-100) sem alterar o status."""
    graph = build_graph(nodes, [])
    item = _require(graph, node_id, "update_progress")
    updated = replace(item, progress=min(100, max(0, progress)))
    return [updated if nid == node_id else graph.items[nid] for nid in graph.order]


def executable_work_items(nodes: Iterable[WorkItem]) -> List[WorkItem]:
    return [n for n in nodes if n.status == WorkItemStatus.READY]


def blocked_work_items(nodes: Iterable[WorkItem]) -> List[WorkItem]:
    return [n for n in nodes if n.status == WorkItemStatus.BLOCKED]


def workflow_progress(nodes: Iterable[WorkItem]) -> int:
    """Percentual (arredondado) de itens COMPLETED; snapshot vazio → 0."""
    node_list = list(nodes)
    if not node_list:
        return 0
    completed = sum(1 for n in node_list if n.status == WorkItemStatus.COMPLETED)
    return math.floor(completed / len(node_list) * 100 + 0.5)
