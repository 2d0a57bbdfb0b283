# tests/conftest.py
"""
Fixtures compartilhados para testes do FlowMatrix Engine.

Este módulo define fixtures reutilizáveis que fornecem:
- fábricas de WorkItem e Relationship com defaults explícitos
- snapshots canônicos (cadeia linear, diamante)
- um AnalysisContext determinístico
- YAMLs de configuração (defaults e override local)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Fábricas são retornadas como funções (não instâncias), para que cada
      teste monte o snapshot que precisa
    - Imports do core são realizados de forma lazy para melhorar a clareza
      de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Dados retornados são determinísticos e isolados

Este módulo existe como infraestrutura de teste e não
como validação funcional do motor.
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração base semelhante a um `flowmatrix.defaults.yaml` real.

    Returns:
        str: Conteúdo YAML representando a configuração base.
    """
    return """\
duration:
  units:
    m: 1
    h: 60
    d: 1440
bottleneck:
  thresholds:
    medium: 30
    high: 40
    critical: 50
lead_time:
  precision: 2
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    YAML de override local: semana de trabalho de 5 dias e limites mais rígidos.

    Returns:
        str: Conteúdo YAML representando apenas overrides locais.
    """
    return """\
duration:
  units:
    w: 2400
bottleneck:
  thresholds:
    critical: 60
"""


# =====================================================
# Model fixtures
# =====================================================

@pytest.fixture
def make_item():
    """
    Fábrica de WorkItem com defaults neutros.

    Uso:
        make_item("A", "1h", type="TRIGGER", status="COMPLETED")

    Returns:
        Callable[..., WorkItem]
    """
    from flowmatrix.core.model import WorkItem, WorkItemStatus, WorkItemType

    def _make(item_id, duration=None, *, type="ACTION", status="PENDING", **extra):
        extra.setdefault("label", f"Task {item_id}")
        extra.setdefault("stage", "DEVELOPMENT")
        extra.setdefault("department", "SW_TEAM")
        return WorkItem(
            id=item_id,
            type=WorkItemType(type),
            duration_expr=duration,
            status=WorkItemStatus(status),
            **extra,
        )

    return _make


@pytest.fixture
def make_edge():
    """
    Fábrica de Relationship `source → target` com id derivado.

    Returns:
        Callable[[str, str], Relationship]
    """
    from flowmatrix.core.model import RelationKind, Relationship

    def _make(source, target, kind="REQUIRES", edge_id=None):
        return Relationship(
            id=edge_id or f"{source}->{target}",
            source=source,
            target=target,
            kind=RelationKind(kind),
        )

    return _make


@pytest.fixture
def linear_chain(make_item, make_edge):
    """Cadeia A(1h) → B(2h) → C(3h)."""
    nodes = [make_item("A", "1h"), make_item("B", "2h"), make_item("C", "3h")]
    edges = [make_edge("A", "B"), make_edge("B", "C")]
    return nodes, edges


@pytest.fixture
def diamond(make_item, make_edge):
    """Diamante A(1h, TRIGGER) → B(3h) → D(1h) e A → C(2h) → D."""
    nodes = [
        make_item("A", "1h", type="TRIGGER"),
        make_item("B", "3h"),
        make_item("C", "2h"),
        make_item("D", "1h"),
    ]
    edges = [
        make_edge("A", "B"),
        make_edge("A", "C"),
        make_edge("B", "D"),
        make_edge("C", "D"),
    ]
    return nodes, edges


# =====================================================
# Context fixtures
# =====================================================

@pytest.fixture
def analysis_ctx():
    """
    AnalysisContext determinístico, com a configuração padrão embutida.

    Returns:
        AnalysisContext: Contexto isolado e previsível para testes.
    """
    from flowmatrix.core.context import AnalysisContext
    return AnalysisContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
