# src/flowmatrix/core/config/errors.py
"""
Erros da camada de configuração.

Todos derivam de `ConfigError`, o que permite ao chamador separar um
arquivo de configuração quebrado de uma falha de domínio (ex.:
`PrerequisiteError`). Nenhum deles é tratado dentro do motor.
"""


class ConfigError(Exception):
    """Raiz da hierarquia de erros de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    `defaults_path` foi informado, mas o arquivo não existe.

    Sem `defaults_path`, o loader usa DEFAULT_CONFIG e este erro nunca ocorre.
    """


class UnsupportedConfigFormatError(ConfigError):
    """Extensão de arquivo diferente de .yaml, .yml ou .json."""


class InvalidConfigRootTypeError(ConfigError):
    """O documento carregado não é um mapping (ex.: uma lista YAML)."""


class ConfigTypeConflictError(ConfigError):
    """
    Override com tipo incompatível com o valor da base.

    Exemplo:
        base:     {"bottleneck": {"thresholds": {...}}}
        override: {"bottleneck": "strict"}

    O merge é abortado por inteiro; nenhum resultado parcial é devolvido.
    """
