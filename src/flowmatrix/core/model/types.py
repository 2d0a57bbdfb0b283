# src/flowmatrix/core/model/types.py
"""
Tipos canônicos de itens de trabalho e relacionamentos.

Este módulo define os enums e registros imutáveis que padronizam a
comunicação entre a aplicação hospedeira e o motor de análise.

Princípios fundamentais:
    - Registros são imutáveis (frozen); toda alteração produz uma nova
      instância via `dataclasses.replace`
    - Enums possuem valores textuais canônicos, estáveis e serializáveis
    - Nenhuma lógica de análise vive neste módulo

Invariantes:
    - `WorkItem.id` é a identidade imutável do item
    - `WorkItem.status` só muda pelas operações da máquina de estados
    - `Relationship` sempre descreve precedência `source → target`

Limites explícitos:
    - Não valida integridade referencial (responsabilidade da persistência)
    - Não define formato de persistência além de dicts simples
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class WorkItemType(str, Enum):
    """
    Tipo semântico de um item de trabalho.

    O tipo é informativo para a derivação de status: um TRIGGER não tem
    tratamento especial além de, tipicamente, não possuir predecessores.
    O Critical Path Analyzer usa TRIGGER apenas como fallback de pontos
    de partida quando não existem nós sem arestas de entrada.
    """
    TRIGGER = "TRIGGER"
    ACTION = "ACTION"
    DECISION = "DECISION"
    ARTIFACT = "ARTIFACT"


class RelationKind(str, Enum):
    """
    Tipo de relacionamento entre itens.

    A semântica de precedência é uniforme entre os tipos: `source → target`
    significa que `target` não pode ser concluído antes de `source`.
    """
    TRIGGER = "TRIGGER"
    BLOCKS = "BLOCKS"
    REQUIRES = "REQUIRES"
    FEEDBACK_TO = "FEEDBACK_TO"


class WorkItemStatus(str, Enum):
    """
    Estados do ciclo de vida de um item.

    Estados definidos:
        - PENDING: ainda não passou por uma derivação
        - READY: todos os predecessores diretos concluídos
        - IN_PROGRESS: iniciado explicitamente (sticky)
        - COMPLETED: concluído explicitamente (sticky, terminal)
        - BLOCKED: ao menos um predecessor direto não concluído
    """
    PENDING = "PENDING"
    READY = "READY"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    BLOCKED = "BLOCKED"


STICKY_STATUSES = frozenset({WorkItemStatus.IN_PROGRESS, WorkItemStatus.COMPLETED})


@dataclass(frozen=True)
class WorkItem:
    """
    Nó imutável do workflow.

    Campos:
        - id: identidade imutável
        - type: tipo semântico (WorkItemType)
        - label: rótulo humano (usado em mensagens e relatórios)
        - stage / department: classificações livres
        - duration_expr: texto de duração bruto (ex.: "2h")
        - status: estado do ciclo de vida
        - progress: 0-100
        - started_at / completed_at: timestamps ISO-8601 (UTC) opcionais
    """
    id: str
    type: WorkItemType = WorkItemType.ACTION
    label: str = ""
    stage: str = ""
    department: str = ""
    duration_expr: Optional[str] = None
    status: WorkItemStatus = WorkItemStatus.PENDING
    progress: float = 0
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or self.id

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkItem":
        """
        Constrói um WorkItem a partir de um registro da aplicação hospedeira.

        A duração é lida de `duration_expr` ou, no formato de documento do
        editor, de `attributes.avg_time`.

        Raises:
            KeyError: Se `id` estiver ausente.
            ValueError: Se `type` ou `status` não forem valores canônicos.
        """
        attributes = data.get("attributes") or {}
        duration = data.get("duration_expr", attributes.get("avg_time"))
        return cls(
            id=str(data["id"]),
            type=WorkItemType(data.get("type") or WorkItemType.ACTION),
            label=data.get("label") or "",
            stage=data.get("stage") or "",
            department=data.get("department") or "",
            duration_expr=duration,
            status=WorkItemStatus(data.get("status") or WorkItemStatus.PENDING),
            progress=data.get("progress") or 0,
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "stage": self.stage,
            "department": self.department,
            "duration_expr": self.duration_expr,
            "status": self.status.value,
            "progress": self.progress,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }


@dataclass(frozen=True)
class Relationship:
    """Aresta dirigida imutável `source → target`."""
    id: str
    source: str
    target: str
    kind: RelationKind = RelationKind.REQUIRES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Relationship":
        kind = data.get("kind", data.get("relation_type")) or RelationKind.REQUIRES
        return cls(
            id=str(data["id"]),
            source=str(data["source"]),
            target=str(data["target"]),
            kind=RelationKind(kind),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
        }


def edge_endpoints(edge: Any) -> Tuple[str, str]:
    """Retorna `(source, target)` de um Relationship ou de um mapping equivalente."""
    if isinstance(edge, Mapping):
        return edge["source"], edge["target"]
    return edge.source, edge.target


def edge_id(edge: Any, default: str = "") -> str:
    if isinstance(edge, Mapping):
        return str(edge.get("id", default))
    return str(getattr(edge, "id", default))
