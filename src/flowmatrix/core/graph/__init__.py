# src/flowmatrix/core/graph/__init__.py
"""
Grafo de execução do FlowMatrix Engine.

Componentes principais:
    - builder → adjacências (sucessores/predecessores) a partir de registros planos
    - cycles  → Cycle Guard e validação de integridade do snapshot

Invariantes:
    - O conjunto de arestas efetivado forma um DAG (garantido pelo Cycle Guard
      antes de cada commit)
    - Nenhuma função deste pacote muta seus inputs
"""

from .builder import WorkflowGraph, build_graph
from .cycles import DependencyValidation, validate_dependencies, would_create_cycle

__all__ = [
    "DependencyValidation",
    "WorkflowGraph",
    "build_graph",
    "validate_dependencies",
    "would_create_cycle",
]
