"""
FlowMatrix Engine: Canonical Exceptions (v1)

Este módulo define as exceções tipadas do motor.

Objetivo:
- Permitir que a máquina de estados e o analisador levantem sinais
  semânticos tipados, capturáveis pelo chamador
- Facilitar o mapeamento determinístico para FlowErrorPayload

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Nada aqui é fatal ao processo: o chamador decide como apresentar o erro.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .errors import (
    CYCLE_DETECTED,
    PREREQUISITES_INCOMPLETE,
    WORK_ITEM_NOT_FOUND,
    FlowErrorPayload,
    prerequisites_incomplete,
)


@dataclass(frozen=True, eq=False)
class FlowMatrixException(Exception):
    """Base class para exceções do motor.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    # código estável usado em `to_payload`
    error_type = "FLOWMATRIX_ERROR"

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> FlowErrorPayload:
        return FlowErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


@dataclass(frozen=True, eq=False)
class PrerequisiteError(FlowMatrixException):
    """
    Conclusão rejeitada: o item possui predecessores diretos não concluídos.

    `details["incomplete_prerequisites"]` lista os rótulos de todos os
    predecessores pendentes (não apenas o primeiro).
    """

    error_type = PREREQUISITES_INCOMPLETE

    @classmethod
    def for_item(
        cls, *, work_item_id: str, work_item_label: str, incomplete: Sequence[str]
    ) -> "PrerequisiteError":
        payload = prerequisites_incomplete(
            work_item_id=work_item_id,
            work_item_label=work_item_label,
            incomplete_prerequisites=incomplete,
        )
        labels = payload.details["incomplete_prerequisites"]
        return cls(
            message=(
                f'Cannot complete "{work_item_label}": '
                f"finish its prerequisites first: {', '.join(labels)}"
            ),
            details=payload.details,
            hint=payload.hint,
        )

    @property
    def incomplete_prerequisites(self) -> List[str]:
        return list(self.details.get("incomplete_prerequisites", []))


@dataclass(frozen=True, eq=False)
class UnknownWorkItemError(FlowMatrixException):
    """Operação de status sobre um id ausente do snapshot."""

    error_type = WORK_ITEM_NOT_FOUND


@dataclass(frozen=True, eq=False)
class CycleDetectedError(FlowMatrixException):
    """O snapshot viola o invariante de DAG (análise de caminho impossível)."""

    error_type = CYCLE_DETECTED
