# src/flowmatrix/core/analysis/critical_path.py
"""
Critical Path Analyzer: caminho mais longo ponderado sobre o DAG.

Este módulo calcula o caminho de maior duração acumulada partindo de um
ponto de partida do workflow, que determina o tempo mínimo de conclusão
de todo o fluxo.

Algoritmo:
    1. Pontos de partida: nós sem arestas de entrada; se não houver, todos
       os nós TRIGGER; se ainda não houver, o primeiro nó da entrada.
    2. Para cada ponto de partida, DFS memoizada:
           dist(N) = dur(N) + max(dist(S) para S em sucessores(N))
       ou apenas dur(N) quando N não tem sucessores. Cada nó é resolvido
       uma única vez, independentemente de quantos predecessores o alcançam
       (O(V + E) no total).
    3. Entre os pontos de partida, mantém-se o melhor (distância, caminho).

Política de desempate (observável e determinística):
    - **o primeiro descoberto vence**: um sucessor só substitui o melhor
      atual se for estritamente mais longo (ordem de adjacência), e um ponto
      de partida só substitui o melhor global se for estritamente mais longo
      (ordem de entrada). O primeiro ponto de partida sempre inicializa o
      resultado.
    - Consequência: sucessores de duração zero não estendem o caminho.

Invariantes:
    - `total_minutes` é igual à soma das durações dos nós do caminho
    - Grafo vazio → caminho vazio e total zero
    - Nó isolado → caminho unitário com a própria duração

Limites explícitos:
    - Não agenda contra calendário nem considera recursos
    - Não corrige ciclos: um snapshot cíclico levanta `CycleDetectedError`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from flowmatrix.core.context import AnalysisContext
from flowmatrix.core.exceptions import CycleDetectedError
from flowmatrix.core.graph import WorkflowGraph, build_graph
from flowmatrix.core.model import WorkItem, WorkItemType

from .duration import duration_units, parse_duration


@dataclass(frozen=True)
class CriticalPathNode:
    """Item do caminho crítico com sua duração (minutos) e posição no caminho."""
    id: str
    label: str
    duration: float
    position: int


@dataclass(frozen=True)
class CriticalPathResult:
    path: List[str] = field(default_factory=list)
    per_node: List[CriticalPathNode] = field(default_factory=list)
    total_minutes: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "per_node": [
                {"id": n.id, "label": n.label, "duration": n.duration, "position": n.position}
                for n in self.per_node
            ],
            "total_minutes": self.total_minutes,
        }


def start_candidates(graph: WorkflowGraph) -> List[str]:
    """Pontos de partida na ordem de entrada (raízes → TRIGGERs → primeiro nó)."""
    roots = graph.roots()
    if roots:
        return roots
    triggers = [nid for nid in graph.order if graph.items[nid].type == WorkItemType.TRIGGER]
    if triggers:
        return triggers
    return graph.order[:1]


def _node_minutes(graph: WorkflowGraph, ctx: Optional[AnalysisContext]) -> Dict[str, float]:
    units = duration_units(ctx)
    return {
        nid: parse_duration(graph.items[nid].duration_expr, units=units, ctx=ctx)
        for nid in graph.order
    }


def _longest_suffixes(
    graph: WorkflowGraph,
    minutes: Dict[str, float],
    starts: List[str],
) -> Dict[str, tuple]:
    """
    Resolve, para cada nó alcançável, `(distância, melhor_sucessor)`.

    DFS pós-ordem iterativa; um sucessor ainda na pilha indica ciclo.
    """
    memo: Dict[str, tuple] = {}

    for start in starts:
        if start in memo:
            continue
        on_stack = {start}
        stack = [(start, iter(graph.successors[start]))]

        while stack:
            node_id, successors = stack[-1]
            for succ in successors:
                if succ in memo:
                    continue
                if succ in on_stack:
                    raise CycleDetectedError(
                        message=f"Cycle detected through work item '{succ}'",
                        details={"work_item_id": succ},
                        hint="Remova um dos relacionamentos do ciclo antes de analisar o caminho crítico.",
                    )
                on_stack.add(succ)
                stack.append((succ, iter(graph.successors[succ])))
                break
            else:
                stack.pop()
                on_stack.discard(node_id)

                own = minutes[node_id]
                best_distance, best_next = own, None
                for succ in graph.successors[node_id]:
                    candidate = own + memo[succ][0]
                    if candidate > best_distance:
                        best_distance, best_next = candidate, succ
                memo[node_id] = (best_distance, best_next)

    return memo


def critical_path(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
    *,
    ctx: Optional[AnalysisContext] = None,
) -> CriticalPathResult:
    """
    Calcula o caminho crítico (caminho mais longo) de um snapshot.

    Args:
        nodes (Iterable[WorkItem]): Itens de trabalho.
        edges (Iterable[Any]): Relacionamentos.
        ctx (Optional[AnalysisContext]): Configuração e diagnósticos.

    Returns:
        CriticalPathResult: Caminho (ids), detalhes por nó e total em minutos.

    Raises:
        CycleDetectedError: Se o snapshot contiver ciclo alcançável.
    """
    graph = build_graph(nodes, edges, ctx=ctx)
    if not graph.order:
        return CriticalPathResult()

    minutes = _node_minutes(graph, ctx)
    starts = start_candidates(graph)
    memo = _longest_suffixes(graph, minutes, starts)

    best_start = starts[0]
    for start in starts[1:]:
        if memo[start][0] > memo[best_start][0]:
            best_start = start

    path: List[str] = []
    current: Optional[str] = best_start
    while current is not None:
        path.append(current)
        current = memo[current][1]

    per_node = [
        CriticalPathNode(
            id=nid,
            label=graph.items[nid].display_label,
            duration=minutes[nid],
            position=position,
        )
        for position, nid in enumerate(path)
    ]
    result = CriticalPathResult(
        path=path,
        per_node=per_node,
        total_minutes=memo[best_start][0],
    )

    if ctx is not None:
        ctx.log(
            scope="critical_path",
            level="INFO",
            message="Critical path computed",
            path=list(path),
            total_minutes=result.total_minutes,
        )
    return result
