"""
FlowMatrix Engine: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do motor. Erros são
artefatos de domínio e fazem parte do contrato com a aplicação hospedeira,
devendo ser:

- explícitos
- serializáveis
- acionáveis

Os payloads são usados em dois pontos:
- `validate_dependencies` devolve uma lista deles (checagem de integridade)
- `FlowMatrixException.to_payload()` converte exceções tipadas
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowErrorPayload:
    """
    Payload canônico de erro do FlowMatrix Engine.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Máquina de estados
PREREQUISITES_INCOMPLETE = "PREREQUISITES_INCOMPLETE"
WORK_ITEM_NOT_FOUND = "WORK_ITEM_NOT_FOUND"

# Integridade do grafo
CYCLE_DETECTED = "CYCLE_DETECTED"
DANGLING_REFERENCE = "DANGLING_REFERENCE"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def prerequisites_incomplete(
    *,
    work_item_id: str,
    work_item_label: str,
    incomplete_prerequisites: List[str],
    hint: str = "Conclua os itens predecessores listados antes de concluir este item.",
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=PREREQUISITES_INCOMPLETE,
        message="Item possui predecessores não concluídos",
        details={
            "work_item_id": work_item_id,
            "work_item_label": work_item_label,
            "incomplete_prerequisites": list(incomplete_prerequisites),
        },
        hint=hint,
    )


def work_item_not_found(
    *,
    work_item_id: str,
    operation: Optional[str] = None,
    hint: str = "Verifique se o snapshot de itens enviado contém o id informado.",
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=WORK_ITEM_NOT_FOUND,
        message="Item de trabalho não encontrado no snapshot",
        details={
            "work_item_id": work_item_id,
            "operation": operation,
        },
        hint=hint,
    )


def cycle_detected(
    *,
    work_item_id: str,
    hint: str = "Remova um dos relacionamentos do ciclo; o grafo de execução deve ser acíclico.",
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=CYCLE_DETECTED,
        message=f"Dependência circular detectada a partir do item {work_item_id}",
        details={"work_item_id": work_item_id},
        hint=hint,
    )


def dangling_reference(
    *,
    relationship_id: str,
    endpoint: str,
    missing_id: str,
    hint: str = "Remova o relacionamento ou restaure o item referenciado antes de persistir.",
) -> FlowErrorPayload:
    return FlowErrorPayload(
        type=DANGLING_REFERENCE,
        message=f"Relacionamento {relationship_id}: {endpoint} {missing_id} não existe",
        details={
            "relationship_id": relationship_id,
            "endpoint": endpoint,
            "missing_id": missing_id,
        },
        hint=hint,
    )
