# tests/core/status/test_status_transitions.py
"""
Testes das transições explícitas da Dependency State Machine.

Este módulo valida `start_work_item` e `complete_work_item`, as únicas
operações que levam um item a IN_PROGRESS ou COMPLETED.

Os testes asseguram que:
- concluir com predecessor pendente é rejeitado com PrerequisiteError,
  listando o rótulo de todos os predecessores pendentes
- após concluir o predecessor, a nova tentativa é aceita (progress = 100)
- concluir um item desbloqueia todos os sucessores diretos
- iniciar só é possível a partir de READY; fora disso é no-op
- concluir um item já COMPLETED é idempotente
- ids desconhecidos levantam UnknownWorkItemError

Decisões arquiteturais:
    - Operações recebem snapshots e devolvem listas novas
    - Timestamps são controlados via `now=` para determinismo

Invariantes:
    - Nenhum input é mutado
    - Um item COMPLETED nunca deixa de ser COMPLETED
"""

import pytest

try:
    from flowmatrix.core.exceptions import PrerequisiteError, UnknownWorkItemError
    from flowmatrix.core.model import WorkItemStatus
    from flowmatrix.core.status import complete_work_item, recompute_statuses, start_work_item
except Exception as e:  # noqa: BLE001
    complete_work_item = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que a máquina de estados esteja disponível para os testes.

    Falha explicitamente quando as transições ou as exceções canônicas
    (`PrerequisiteError`, `UnknownWorkItemError`) não podem ser importadas.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing status machine. Implement:
- src/flowmatrix/core/status/machine.py (start_work_item, complete_work_item)
- src/flowmatrix/core/exceptions.py (PrerequisiteError, UnknownWorkItemError)
Import error: {_IMPORT_ERR}
""")


def _by_id(items):
    return {item.id: item for item in items}


def test_complete_with_incomplete_prerequisite_is_rejected(make_item, make_edge):
    """
    Verifica que concluir X com o predecessor Y pendente é rejeitado
    e que a mensagem nomeia o rótulo de Y.
    """
    _require_imports()
    nodes = [
        make_item("Y", "1h", label="Draft schematic", status="READY"),
        make_item("X", "2h", label="Review schematic", status="BLOCKED"),
    ]
    edges = [make_edge("Y", "X")]

    with pytest.raises(PrerequisiteError) as exc:
        complete_work_item("X", nodes, edges)

    err = exc.value
    assert "Draft schematic" in str(err)
    assert "Review schematic" in str(err)
    assert err.incomplete_prerequisites == ["Draft schematic"]
    assert err.details["work_item_id"] == "X"
    assert err.to_payload().type == "PREREQUISITES_INCOMPLETE"


def test_rejection_lists_all_incomplete_prerequisites(make_item, make_edge):
    _require_imports()
    nodes = [
        make_item("P1", label="Order parts", status="IN_PROGRESS"),
        make_item("P2", label="Book lab", status="COMPLETED"),
        make_item("P3", label="Write test plan", status="READY"),
        make_item("X", label="Run tests", status="BLOCKED"),
    ]
    edges = [make_edge("P1", "X"), make_edge("P2", "X"), make_edge("P3", "X")]

    with pytest.raises(PrerequisiteError) as exc:
        complete_work_item("X", nodes, edges)

    assert exc.value.incomplete_prerequisites == ["Order parts", "Write test plan"]


def test_retry_after_prerequisite_completed(make_item, make_edge, fixed_now):
    """
    Verifica o fluxo completo: Y concluído → X desbloqueado → X concluído.

    Invariantes:
        - X passa a READY após concluir Y
        - A nova tentativa de concluir X é aceita com progress = 100
    """
    _require_imports()
    nodes = [make_item("Y", "1h", status="READY"), make_item("X", "2h", status="BLOCKED")]
    edges = [make_edge("Y", "X")]

    after_y = complete_work_item("Y", nodes, edges, now=fixed_now)
    assert _by_id(after_y)["X"].status == WorkItemStatus.READY

    after_x = _by_id(complete_work_item("X", after_y, edges, now=fixed_now))
    assert after_x["X"].status == WorkItemStatus.COMPLETED
    assert after_x["X"].progress == 100
    assert after_x["X"].completed_at == "2026-03-01T12:00:00+00:00"


def test_completion_unblocks_all_direct_successors(make_item, make_edge):
    """
    Verifica que concluir X leva a READY todos os sucessores diretos
    cujos demais predecessores já estão concluídos.
    """
    _require_imports()
    nodes = [
        make_item("X", status="IN_PROGRESS"),
        make_item("done", status="COMPLETED"),
        make_item("S1", status="BLOCKED"),
        make_item("S2", status="BLOCKED"),
        make_item("S3", status="BLOCKED"),
        make_item("later", status="BLOCKED"),
    ]
    edges = [
        make_edge("X", "S1"),
        make_edge("X", "S2"),
        make_edge("X", "S3"),
        make_edge("done", "S3"),
        make_edge("S1", "later"),
    ]

    out = _by_id(complete_work_item("X", nodes, edges))

    assert out["X"].status == WorkItemStatus.COMPLETED
    assert [out[s].status for s in ("S1", "S2", "S3")] == [WorkItemStatus.READY] * 3
    assert out["later"].status == WorkItemStatus.BLOCKED


def test_completion_recomputes_whole_graph(make_item, make_edge):
    _require_imports()
    nodes = [
        make_item("A", status="PENDING"),
        make_item("B", status="PENDING"),
        make_item("Z", status="PENDING"),
    ]
    out = _by_id(complete_work_item("A", nodes, [make_edge("A", "B")]))
    assert out["B"].status == WorkItemStatus.READY
    assert out["Z"].status == WorkItemStatus.READY


def test_complete_is_idempotent(make_item, fixed_now):
    _require_imports()
    done = make_item("A", status="COMPLETED", progress=100, completed_at="2026-01-01T00:00:00+00:00")
    out = complete_work_item("A", [done], [], now=fixed_now)
    assert out == [done]


def test_start_from_ready(make_item, fixed_now, analysis_ctx):
    """
    Verifica que um item READY passa a IN_PROGRESS com `started_at` e progresso zerado.
    """
    _require_imports()
    nodes = [make_item("A", status="READY", progress=40), make_item("B", status="BLOCKED")]

    out = _by_id(start_work_item("A", nodes, now=fixed_now, ctx=analysis_ctx))

    assert out["A"].status == WorkItemStatus.IN_PROGRESS
    assert out["A"].started_at == "2026-03-01T12:00:00+00:00"
    assert out["A"].progress == 0
    assert out["B"] == nodes[1]
    assert analysis_ctx.events[-1]["message"] == "Work item started"


@pytest.mark.parametrize("status", ["PENDING", "BLOCKED", "IN_PROGRESS", "COMPLETED"])
def test_start_outside_ready_is_noop(make_item, analysis_ctx, status):
    _require_imports()
    nodes = [make_item("A", status=status)]

    out = start_work_item("A", nodes, ctx=analysis_ctx)

    assert out == nodes
    assert analysis_ctx.warnings["status"] == [f"Cannot start 'Task A' from status {status}"]


def test_in_progress_survives_recompute_and_completion_elsewhere(make_item, make_edge):
    """
    Verifica que IN_PROGRESS é sticky, mesmo com predecessor pendente.
    """
    _require_imports()
    nodes = [
        make_item("A", status="READY"),
        make_item("B", status="IN_PROGRESS"),
        make_item("C", status="READY"),
    ]
    edges = [make_edge("A", "B")]
    assert _by_id(recompute_statuses(nodes, edges))["B"].status == WorkItemStatus.IN_PROGRESS
    assert _by_id(complete_work_item("C", nodes, edges))["B"].status == WorkItemStatus.IN_PROGRESS


@pytest.mark.parametrize("operation", ["start", "complete"])
def test_unknown_id_raises(make_item, operation):
    _require_imports()
    nodes = [make_item("A", status="READY")]
    with pytest.raises(UnknownWorkItemError) as exc:
        if operation == "start":
            start_work_item("missing", nodes)
        else:
            complete_work_item("missing", nodes, [])

    payload = exc.value.to_payload()
    assert payload.type == "WORK_ITEM_NOT_FOUND"
    assert payload.details == {"work_item_id": "missing", "operation": operation}


def test_transitions_do_not_mutate_inputs(make_item, make_edge):
    _require_imports()
    nodes = [make_item("Y", status="READY"), make_item("X", status="BLOCKED")]
    edges = [make_edge("Y", "X")]
    snapshot = list(nodes)

    complete_work_item("Y", nodes, edges)
    start_work_item("Y", nodes)

    assert nodes == snapshot
    assert nodes[0].status == WorkItemStatus.READY
