# src/strata_config/__init__.py
"""
Strata Config — configuração em camadas para aplicações nomeadas.

Este pacote raiz define o namespace público do Strata Config, que resolve
valores de configuração a partir de três fontes com precedência estrita:

    defaults do schema < arquivo `config/<app>.yml` < variáveis `<APP>_*`

Arquitetura em alto nível:
    - core.config → schema, fontes, resolver (`AppConfig`) e holder
    - report      → tabela e resumo legíveis da configuração resolvida

Limites explícitos:
    - Não recarrega configuração em tempo de execução
    - Não gerencia segredos
"""
from .core.config import (
    AppConfig,
    AppConfigHolder,
    ConfigurationError,
    PermissiveSchema,
    Schema,
    UndefinedKeyError,
)

__all__ = [
    "AppConfig",
    "AppConfigHolder",
    "ConfigurationError",
    "PermissiveSchema",
    "Schema",
    "UndefinedKeyError",
]
