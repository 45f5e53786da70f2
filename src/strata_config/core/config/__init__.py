# src/strata_config/core/config/__init__.py

"""
Camada de configuração do Strata Config.

Este pacote contém as estruturas responsáveis por definir o schema de
chaves, ler as fontes de configuração e resolver os valores finais de uma
aplicação com proveniência.

A configuração no Strata Config é:
    - em camadas (defaults → arquivo YAML → variáveis de ambiente)
    - validada contra um schema opcional
    - rastreável (cada valor sabe de qual fonte veio)
    - resolvida uma única vez, no startup

Responsabilidades do pacote:
    - Definição de chaves obrigatórias e opcionais (schema)
    - Leitura de fontes (defaults, arquivo, ambiente)
    - Merge com precedência explícita e descarte de chaves desconhecidas
    - Caminho fatal para chaves obrigatórias ausentes

Invariantes:
    - Ambiente > arquivo > defaults
    - Chaves desconhecidas nunca entram na configuração resolvida

Limites explícitos:
    - Não recarrega configuração em tempo de execução
    - Não é um serviço distribuído de configuração
    - Não gerencia segredos nem criptografia
"""

from .errors import (
    ConfigurationError,
    DuplicateKeyError,
    InvalidConfigRootTypeError,
    MissingEnvironmentError,
    NotInitializedError,
    UndefinedKeyError,
)
from .holder import AppConfigHolder
from .resolver import AppConfig
from .schema import KeySchema, PermissiveSchema, Schema
from .sources import ConfigSource, DefaultSource, EnvironmentSource, FileSource
from .system import ProcessSystem, System
from .values import ConfiguredValue, SourceKind, SourceRef

__all__ = [
    "AppConfig",
    "AppConfigHolder",
    "ConfigSource",
    "ConfigurationError",
    "ConfiguredValue",
    "DefaultSource",
    "DuplicateKeyError",
    "EnvironmentSource",
    "FileSource",
    "InvalidConfigRootTypeError",
    "KeySchema",
    "MissingEnvironmentError",
    "NotInitializedError",
    "PermissiveSchema",
    "ProcessSystem",
    "Schema",
    "SourceKind",
    "SourceRef",
    "System",
    "UndefinedKeyError",
]
