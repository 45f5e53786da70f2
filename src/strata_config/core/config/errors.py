# src/strata_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Strata Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a definição de schema, a leitura das fontes e a consulta de valores
resolvidos.

As exceções aqui definidas representam **falhas tipadas entregues ao
chamador**, e não o caminho de abortar a inicialização. Chaves
obrigatórias ausentes NÃO geram exceção: seguem o caminho fatal do
resolver (log fatal + aviso + exit).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Mensagens de erro são claras e direcionadas ao usuário
    - Nenhuma exceção é silenciada ou recuperada internamente

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigurationError`

Limites explícitos:
    - Não encerra o processo
    - Não realiza fallback ou recovery
"""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Levantada diretamente para problemas estruturais genéricos (por
    exemplo, YAML inválido) e usada como raiz para captura genérica.
    """


class UndefinedKeyError(ConfigurationError):
    """
    Exceção levantada quando uma chave não definida no schema é consultada.

    Vale tanto para consultas ao resolver (`get`, `source_of`, ...) quanto
    para consultas diretas ao schema (`required`, `default_value`, ...).

    Invariantes:
        - `key` contém exatamente o nome consultado
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"No configuration key '{key}' is defined")


class DuplicateKeyError(ConfigurationError):
    """
    Exceção levantada quando o mesmo nome de chave é registrado duas vezes
    no schema.

    Decisões arquiteturais:
        - Nomes de chave são únicos no schema
        - A duplicidade é detectada no momento do registro

    Limites explícitos:
        - Não renomeia nem mescla definições automaticamente
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Configuration key '{key}' is already defined")


class MissingEnvironmentError(ConfigurationError):
    """
    Exceção levantada quando o arquivo de configuração existe, mas não
    contém a seção do ambiente solicitado.
    """

    def __init__(self, path: Any, environment: str) -> None:
        self.path = path
        self.environment = environment
        super().__init__(f"File {path} contains no {environment} section")


class InvalidConfigRootTypeError(ConfigurationError):
    """
    Exceção levantada quando o YAML não tem o formato de dois níveis
    esperado (ambiente → chave → valor).

    Cobre dois casos:
        - o documento inteiro não é um mapa de ambientes
          (ex.: uma lista de strings no topo do arquivo)
        - a seção do ambiente solicitado existe, mas não é um mapa de
          chaves (ex.: `development: [a, b]` ou `development: 3`)

    Uma seção declarada sem corpo (`development:`) não é erro: equivale
    a uma seção vazia.
    """


class NotInitializedError(ConfigurationError):
    """Exceção levantada quando o holder é consultado antes de `init()`."""
