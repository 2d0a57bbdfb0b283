# src/flowmatrix/core/graph/cycles.py
"""
Cycle Guard: decide se um relacionamento proposto criaria um ciclo.

Este módulo é chamado pela fronteira de edição (camada de persistência)
**antes** de efetivar um novo relacionamento. O motor nunca altera o
conjunto de arestas para quebrar um ciclo: ele apenas responde sim/não.

Decisões arquiteturais:
    - Self-loop (`source == target`) é sempre ciclo
    - A busca é uma DFS de alcançabilidade a partir de `source`, rastreando
      a pilha de recursão; há ciclo se a busca revisita um nó na pilha
    - A DFS é iterativa (grafos longos não esbarram no limite de recursão)
    - A rejeição é um booleano, não uma exceção

Também oferece `validate_dependencies`, a checagem de integridade completa
(ciclos e referências pendentes) usada pela persistência antes de gravar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set

from flowmatrix.core.errors import FlowErrorPayload, cycle_detected, dangling_reference
from flowmatrix.core.model import WorkItem, edge_endpoints
from flowmatrix.core.model.types import edge_id


def _adjacency(edges: Iterable[Any]) -> Dict[str, List[str]]:
    adjacency: Dict[str, List[str]] = {}
    for edge in edges:
        source, target = edge_endpoints(edge)
        adjacency.setdefault(source, []).append(target)
    return adjacency


def _reaches_cycle(
    start: str,
    adjacency: Dict[str, List[str]],
    visited: Set[str],
) -> bool:
    """DFS iterativa a partir de `start`; True se encontrar aresta de retorno."""
    visited.add(start)
    on_stack: Set[str] = {start}
    stack = [(start, iter(adjacency.get(start, [])))]

    while stack:
        node_id, successors = stack[-1]
        for succ in successors:
            if succ in on_stack:
                return True
            if succ not in visited:
                visited.add(succ)
                on_stack.add(succ)
                stack.append((succ, iter(adjacency.get(succ, []))))
                break
        else:
            stack.pop()
            on_stack.discard(node_id)

    return False


def would_create_cycle(proposed_edge: Any, existing_edges: Iterable[Any]) -> bool:
    """
    Informa se adicionar `proposed_edge` a `existing_edges` cria um ciclo.

    Args:
        proposed_edge (Any): Relationship ou mapping com `source`/`target`.
        existing_edges (Iterable[Any]): Relacionamentos já efetivados.

    Returns:
        bool: True se o conjunto resultante contiver ciclo alcançável a
        partir de `proposed_edge.source` (inclui self-loop).
    """
    source, target = edge_endpoints(proposed_edge)
    if source == target:
        return True

    adjacency = _adjacency(existing_edges)
    adjacency.setdefault(source, []).append(target)
    return _reaches_cycle(source, adjacency, set())


@dataclass(frozen=True)
class DependencyValidation:
    valid: bool
    errors: List[FlowErrorPayload] = field(default_factory=list)


def validate_dependencies(
    nodes: Iterable[WorkItem],
    edges: Iterable[Any],
) -> DependencyValidation:
    """
    Checagem de integridade de um snapshot completo.

    Reporta um `CYCLE_DETECTED` por item (em ordem de entrada) a partir do
    qual uma nova DFS encontra um ciclo, e um `DANGLING_REFERENCE` por
    endpoint inexistente de cada relacionamento.
    """
    node_list = list(nodes)
    edge_list = list(edges)
    node_ids = {n.id for n in node_list}
    adjacency = _adjacency(edge_list)

    errors: List[FlowErrorPayload] = []
    visited: Set[str] = set()
    for node in node_list:
        if node.id not in visited and _reaches_cycle(node.id, adjacency, visited):
            errors.append(cycle_detected(work_item_id=node.id))

    for edge in edge_list:
        source, target = edge_endpoints(edge)
        if source not in node_ids:
            errors.append(
                dangling_reference(relationship_id=edge_id(edge), endpoint="source", missing_id=source)
            )
        if target not in node_ids:
            errors.append(
                dangling_reference(relationship_id=edge_id(edge), endpoint="target", missing_id=target)
            )

    return DependencyValidation(valid=not errors, errors=errors)
