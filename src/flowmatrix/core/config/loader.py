# src/flowmatrix/core/config/loader.py
"""
Loader de configuração do FlowMatrix Engine.

A configuração efetiva é montada em duas camadas:

    base  = arquivo de defaults informado, ou DEFAULT_CONFIG (embutido)
    final = deep_merge(base, arquivo local)   # se o arquivo local existir

Arquivos aceitos: YAML (`.yaml`, `.yml`, via PyYAML) e JSON (`.json`).
Um arquivo vazio vale `{}`; um conteúdo raiz que não seja mapping é rejeitado.

As análises nunca leem arquivos: o chamador carrega a configuração uma
vez (diretamente ou via `AnalysisContext.create`) e a repassa no contexto.
"""

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, IO, Optional

import yaml  # PyYAML

from .defaults import DEFAULT_CONFIG
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

_PARSERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_mapping(path: Path) -> Dict[str, Any]:
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato de configuração não suportado: '{path.suffix}' ({path})"
        )

    with path.open("r", encoding="utf-8") as fh:
        content = parser(fh)

    content = {} if content is None else content
    if not isinstance(content, dict):
        raise InvalidConfigRootTypeError(
            f"A raiz de {path.name} deve ser um mapping, recebido: {type(content).__name__}"
        )
    return content


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva do motor.

    Args:
        defaults_path (Optional[str]): Arquivo base. Quando informado, deve existir.
        local_path (Optional[str]): Overrides locais; ignorado se ausente do disco.

    Returns:
        Dict[str, Any]: Dicionário novo (mutá-lo não afeta DEFAULT_CONFIG).

    Raises:
        DefaultsNotFoundError: Arquivo de defaults informado e inexistente.
        UnsupportedConfigFormatError: Extensão fora de YAML/JSON.
        InvalidConfigRootTypeError: Conteúdo raiz que não é dict.
        ConfigTypeConflictError: Override local incompatível com a base.
    """
    if defaults_path is None:
        config = deepcopy(DEFAULT_CONFIG)
    else:
        defaults_file = Path(defaults_path)
        if not defaults_file.is_file():
            raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")
        config = _read_mapping(defaults_file)

    if local_path is not None and Path(local_path).is_file():
        config = deep_merge(config, _read_mapping(Path(local_path)))

    return config
