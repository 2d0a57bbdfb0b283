# src/flowmatrix/__init__.py
"""
FlowMatrix Engine — análise de dependências e status de workflows.

Este pacote raiz define o namespace público do motor de análise do
FlowMatrix, uma ferramenta de mapeamento de workflows. O motor transforma
um conjunto de itens de trabalho tipados e relacionamentos dirigidos em:

    - um grafo de execução validado e acíclico
    - o caminho crítico (caminho mais longo ponderado por duração)
    - agregados de tempo por estágio e por departamento
    - o status de ciclo de vida de cada item (bloqueio/desbloqueio)

Arquitetura em alto nível:
    - core.model    → enums e registros imutáveis (WorkItem, Relationship)
    - core.graph    → construção de adjacências e guarda de ciclos
    - core.analysis → durações, caminho crítico, breakdowns e gargalos
    - core.status   → máquina de estados de dependência
    - core.config   → carregamento, merge e hashing de configuração

Limites explícitos:
    - Não renderiza, não persiste e não exporta planilhas
    - Não mantém estado entre chamadas
    - Não agenda contra calendários reais
"""
# src/flowmatrix/__init__.py
from .core.analysis import (
    critical_path,
    breakdown_by,
    bottleneck_severity,
    parse_duration,
    workflow_lead_time,
)
from .core.context import AnalysisContext
from .core.exceptions import PrerequisiteError
from .core.graph import build_graph, would_create_cycle
from .core.model import Relationship, WorkItem
from .core.status import complete_work_item, recompute_statuses, start_work_item

__all__ = [
    "AnalysisContext",
    "PrerequisiteError",
    "Relationship",
    "WorkItem",
    "breakdown_by",
    "bottleneck_severity",
    "build_graph",
    "complete_work_item",
    "critical_path",
    "parse_duration",
    "recompute_statuses",
    "start_work_item",
    "workflow_lead_time",
    "would_create_cycle",
]
