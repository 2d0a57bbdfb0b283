# src/flowmatrix/core/config/hashing.py
"""
Identidade da configuração efetiva: SHA-256 do JSON canônico
(chaves ordenadas, separadores compactos, UTF-8).

Exposto como `AnalysisContext.config_hash`, permite associar um resultado
de análise (tabela, resumo de lead time) à configuração que o produziu.
"""

import hashlib
import json
from typing import Any, Dict


def _canonical_bytes(config: Dict[str, Any]) -> bytes:
    return json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Hash hexadecimal (64 caracteres) da configuração.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(f"compute_config_hash espera um dict, recebido: {type(config).__name__}")
    return hashlib.sha256(_canonical_bytes(config)).hexdigest()
