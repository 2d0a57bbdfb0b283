# src/flowmatrix/core/graph/builder.py
"""
Graph Builder: adjacências a partir de registros planos.

Este módulo transforma a lista de itens de trabalho e a lista de
relacionamentos em estruturas de adjacência prontas para travessia.

A saída (`WorkflowGraph`) contém:
    - successors   → id → lista de sucessores diretos
    - predecessors → id → lista de predecessores diretos
    - items        → id → WorkItem
    - order        → ids na ordem de entrada

Decisões arquiteturais:
    - A ordem de inserção das arestas é preservada nas listas de adjacência;
      ela define o desempate do caminho crítico
    - Arestas pendentes (endpoint inexistente) são descartadas em silêncio
      (com warning no contexto, quando fornecido)
    - Arestas duplicadas (mesmo source/target) colapsam em uma entrada;
      a primeira ocorrência fixa a ordem
    - Ids de item duplicados: a primeira ocorrência prevalece

Invariantes:
    - Todo id presente em `successors`/`predecessors` existe em `items`
    - Nenhum input é mutado
    - Complexidade O(V + E)

Limites explícitos:
    - Não detecta ciclos (responsabilidade do Cycle Guard)
    - Não deriva status nem calcula durações
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.model import WorkItem, edge_endpoints
from flowmatrix.core.model.types import edge_id


@dataclass(frozen=True)
class WorkflowGraph:
    """Estruturas de adjacência derivadas de um snapshot (itens, relacionamentos)."""

    items: Dict[str, WorkItem]
    successors: Dict[str, List[str]]
    predecessors: Dict[str, List[str]]
    order: List[str]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.items

    def in_degree(self, node_id: str) -> int:
        return len(self.predecessors.get(node_id, []))

    def roots(self) -> List[str]:
        """Ids sem arestas de entrada, na ordem de entrada."""
        return [nid for nid in self.order if self.in_degree(nid) == 0]


def build_graph(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> WorkflowGraph:
    """
    Constrói as adjacências de um snapshot de workflow.

    Args:
        nodes (Iterable[WorkItem]): Itens de trabalho.
        edges (Iterable[Any]): Relacionamentos (Relationship ou mapping com
            `source`/`target`).
        ctx (Optional[AnalysisContext]): Contexto para warnings de descarte.

    Returns:
        WorkflowGraph: Estruturas de adjacência novas e independentes.
    """
    items: Dict[str, WorkItem] = {}
    order: List[str] = []
    for node in nodes:
        if node.id in items:
            if ctx is not None:
                ctx.add_warning(scope="graph", message=f"Duplicate work item id ignored: {node.id}")
            continue
        items[node.id] = node
        order.append(node.id)

    successors: Dict[str, List[str]] = {nid: [] for nid in order}
    predecessors: Dict[str, List[str]] = {nid: [] for nid in order}
    seen: Set[Tuple[str, str]] = set()

    for edge in edges:
        source, target = edge_endpoints(edge)
        if source not in items or target not in items:
            if ctx is not None:
                missing = source if source not in items else target
                ctx.add_warning(
                    scope="graph",
                    message=(
                        f"Relationship '{edge_id(edge)}' references unknown work item "
                        f"'{missing}' and was dropped"
                    ),
                )
            continue
        if (source, target) in seen:
            continue
        seen.add((source, target))
        successors[source].append(target)
        predecessors[target].append(source)

    return WorkflowGraph(
        items=items,
        successors=successors,
        predecessors=predecessors,
        order=order,
    )
