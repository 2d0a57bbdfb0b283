# src/flowmatrix/core/context.py
"""
AnalysisContext: Contexto de observabilidade das análises do FlowMatrix Engine.

O motor não mantém estado próprio nem utiliza logger global. Quando o
chamador deseja diagnósticos, ele cria um `AnalysisContext` e o repassa
às operações via `ctx=`. O contexto é o **único** objeto mutável tocado
pelo motor, e pertence ao chamador.

O contexto concentra:
- a configuração efetiva usada nas análises (e seu hash canônico)
- eventos de log estruturados (dicts com `run_id`, `scope`, `level`, ...)
- warnings não fatais agrupados por escopo (ex.: `duration`, `graph`)

Escopos usados pelo motor:
- `duration`      → texto de duração malformado (soft-fail para 0)
- `graph`         → relacionamentos pendentes descartados da travessia
- `critical_path` → resultado do caminho crítico
- `status`        → transições de ciclo de vida e `start` rejeitado
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .config import DEFAULT_CONFIG, compute_config_hash, load_config


@dataclass
class AnalysisContext:
    """
    Contexto compartilhado de uma sessão de análise.

    Campos canônicos:
    - run_id: identificador da sessão (livre, escolhido pelo chamador)
    - config: configuração efetiva (defaults + overrides)
    - created_at: timestamp UTC de criação do contexto
    - events: log estruturado de eventos
    - warnings: warnings por escopo
    """

    run_id: str
    config: Dict[str, Any] = field(default_factory=lambda: deepcopy(DEFAULT_CONFIG))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(
        cls,
        *,
        run_id: Optional[str] = None,
        defaults_path: Optional[str] = None,
        local_path: Optional[str] = None,
    ) -> "AnalysisContext":
        """Cria um contexto com a configuração resolvida por `load_config`."""
        config = load_config(defaults_path=defaults_path, local_path=local_path)
        return cls(run_id=run_id or uuid4().hex, config=config)

    @property
    def config_hash(self) -> str:
        return compute_config_hash(self.config)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        if scope not in self.warnings:
            self.warnings[scope] = []
        self.warnings[scope].append(message)
        self.log(scope=scope, level="WARNING", message=message)
