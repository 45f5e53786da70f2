# src/strata_config/core/config/loader.py
"""
Leitura do arquivo YAML de configuração e criação do arquivo inicial.

Este módulo concentra o acesso ao filesystem da camada de configuração:
    - carregar o documento YAML e validar sua estrutura mínima
    - selecionar a seção de um ambiente
    - materializar um arquivo inicial (starter) quando nenhum existe

Formato esperado do arquivo:

    development:
      example_key: example_value
    test:
      example_key: example_value
    production:
      example_key: example_value

Princípios fundamentais:
    - Erros estruturais são falhas tipadas entregues ao chamador
    - A criação do arquivo inicial é best-effort e nunca fatal

Invariantes:
    - O documento carregado é sempre um dicionário
    - Arquivos vazios são interpretados como dicionários vazios

Limites explícitos:
    - Não aplica precedência nem valida chaves contra o schema
    - Não suporta outros formatos além de YAML
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    ConfigurationError,
    InvalidConfigRootTypeError,
    MissingEnvironmentError,
)

logger = logging.getLogger(__name__)

STARTER_ENVIRONMENTS = ("development", "test", "production")


def load_yaml_document(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega o arquivo YAML e valida que a raiz é um mapa.

    Args:
        path: Caminho para o arquivo de configuração.

    Returns:
        Dict[str, Any]: Documento carregado (mapa ambiente → seção).

    Raises:
        ConfigurationError: Se o YAML for sintaticamente inválido.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"File {file_path} is not valid YAML: {exc}") from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"File {file_path} must contain a mapping of environments, "
            f"got: {type(data).__name__}"
        )

    return data


def environment_section(
    document: Dict[str, Any],
    environment: str,
    *,
    path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Seleciona a seção de um ambiente dentro do documento carregado.

    Uma seção declarada sem corpo (`development:`) é tratada como vazia.

    Raises:
        MissingEnvironmentError: Se a seção não existir.
        InvalidConfigRootTypeError: Se a seção não for um dicionário.
    """
    if environment not in document:
        raise MissingEnvironmentError(path, environment)

    section = document[environment]
    if section is None:
        return {}

    if not isinstance(section, dict):
        raise InvalidConfigRootTypeError(
            f"Section {environment} of file {path} must be a mapping, "
            f"got: {type(section).__name__}"
        )

    return section


def render_starter_template(app_name: str) -> str:
    prefix = f"{app_name.upper()}_"
    lines = [
        f"# Configuration for {app_name}. Values here override built-in defaults;",
        f"# {prefix}* environment variables override values here.",
    ]
    for env in STARTER_ENVIRONMENTS:
        lines.append(f"{env}:")
        lines.append("  # example_key: example_value")
    return "\n".join(lines) + "\n"


def write_starter_file(
    path: Union[str, Path],
    app_name: str,
    *,
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Materializa um arquivo de configuração inicial em `path`.

    Diretórios pais são criados quando necessário. Um arquivo já existente
    nunca é sobrescrito.

    Decisões arquiteturais:
        - A operação é best-effort: falhas de escrita (ex.: filesystem
          somente leitura) são registradas em log e não propagadas
        - As seções geradas não contêm chaves ativas, apenas exemplos
          comentados, para não introduzir chaves desconhecidas

    Returns:
        bool: True se o arquivo foi criado, False caso contrário.
    """
    log = log or logger
    file_path = Path(path)
    if file_path.exists():
        return False

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("x", encoding="utf-8") as f:
            f.write(render_starter_template(app_name))
    except OSError as exc:
        log.warning("Could not write starter config file %s: %s", file_path, exc)
        return False

    log.info("Wrote starter config file %s", file_path)
    return True
