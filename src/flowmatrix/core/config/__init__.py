# src/flowmatrix/core/config/__init__.py

"""
Camada de configuração do FlowMatrix Engine.

Este pacote contém as estruturas responsáveis por carregar, mesclar e
identificar a configuração efetiva utilizada pelas análises do motor.

A configuração é:
    - declarativa
    - determinística
    - opcional (os defaults embutidos reproduzem o comportamento canônico)

Chaves reconhecidas (v1):
    - duration.units          → multiplicador em minutos por unidade
    - bottleneck.thresholds   → limites inferiores (%) de severidade
    - lead_time.precision     → casas decimais de horas/dias no resumo

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Overrides nunca mutam os defaults
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não valida semântica de domínio
    - Não é lida implicitamente durante as análises
"""

from .defaults import DEFAULT_CONFIG, get_section
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "get_section",
    "load_config",
]
