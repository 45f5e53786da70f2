# src/strata_config/core/config/schema.py
"""
Schema de chaves de configuração.

Este módulo define o `Schema` estrito, responsável por registrar as
chaves conhecidas de uma aplicação e seus defaults, e o
`PermissiveSchema`, variante degenerada derivada apenas de um mapa de
defaults.

O schema atua como a régua de validação do merge:
    - chaves não definidas são descartadas pelo resolver
    - chaves sem default registrado são obrigatórias
    - chaves com default registrado (mesmo `None` ou `False`) são opcionais

Decisões arquiteturais:
    - A ordem de registro é preservada
    - Nomes duplicados são rejeitados no registro
    - Nomes são comparados em minúsculas apenas para casar sufixos de
      variáveis de ambiente (`canonical_name`)

Invariantes:
    - Cada nome registrado é único no schema
    - `required` e `optional` são complementos exatos para chaves definidas
    - Consultas a chaves não definidas levantam `UndefinedKeyError`
      (apenas no schema estrito)

Limites explícitos:
    - Não lê fontes de configuração
    - Não realiza coerção de tipos
    - Não valida valores, apenas nomes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .errors import DuplicateKeyError, UndefinedKeyError


class _NoDefault:
    def __repr__(self) -> str:
        return "<no default>"


NO_DEFAULT: Any = _NoDefault()


@runtime_checkable
class KeySchema(Protocol):
    """
    Contrato comum de `Schema` e `PermissiveSchema`, consumido pelo resolver.
    """

    def keys(self) -> List[str]: ...

    def required(self, key: Any) -> bool: ...

    def optional(self, key: Any) -> bool: ...

    def defined(self, key: Any) -> bool: ...

    def default_value(self, key: Any) -> Any: ...

    def defaults(self) -> Dict[str, Any]: ...

    def canonical_name(self, name: str) -> Optional[str]: ...


@dataclass(frozen=True)
class KeyDefinition:
    """Definição imutável de uma chave: nome e default opcional."""

    name: str
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass
class Schema:
    """
    Schema estrito de configuração.

    Uso típico:

        schema = (
            Schema()
            .key("foo", default=42)
            .key("bar")            # obrigatória
        )

    Decisões arquiteturais:
        - `key()` retorna o próprio schema para permitir encadeamento
        - Nomes são convertidos com `str()` no registro e na consulta

    Limites explícitos:
        - Não aceita redefinição de chaves
    """

    _defs: Dict[str, KeyDefinition] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def key(self, name: Any, default: Any = NO_DEFAULT) -> "Schema":
        key_name = str(name)
        if not key_name:
            raise ValueError("configuration key name must be a non-empty string")

        if key_name in self._defs:
            raise DuplicateKeyError(key_name)

        self._defs[key_name] = KeyDefinition(name=key_name, default=default)
        self._order.append(key_name)
        return self

    def keys(self) -> List[str]:
        return list(self._order)

    def definition(self, key: Any) -> KeyDefinition:
        key_def = self._defs.get(str(key))
        if key_def is None:
            raise UndefinedKeyError(key)
        return key_def

    def required(self, key: Any) -> bool:
        return not self.definition(key).has_default

    def optional(self, key: Any) -> bool:
        return not self.required(key)

    def defined(self, key: Any) -> bool:
        return str(key) in self._defs

    def default_value(self, key: Any) -> Any:
        key_def = self.definition(key)
        return key_def.default if key_def.has_default else None

    def defaults(self) -> Dict[str, Any]:
        return {
            name: self._defs[name].default
            for name in self._order
            if self._defs[name].has_default
        }

    def canonical_name(self, name: str) -> Optional[str]:
        if name in self._defs:
            return name
        lowered = name.lower()
        for key_name in self._order:
            if key_name.lower() == lowered:
                return key_name
        return None


class PermissiveSchema:
    """
    Schema permissivo derivado de um mapa de defaults.

    Toda chave é considerada definida e opcional; o conjunto de chaves
    listado é apenas o do mapa de defaults.
    """

    def __init__(self, defaults: Optional[Mapping[Any, Any]] = None) -> None:
        self._defaults: Dict[str, Any] = {
            str(k): v for k, v in (defaults or {}).items()
        }

    def keys(self) -> List[str]:
        return list(self._defaults.keys())

    def required(self, key: Any) -> bool:
        return False

    def optional(self, key: Any) -> bool:
        return True

    def defined(self, key: Any) -> bool:
        return True

    def default_value(self, key: Any) -> Any:
        return self._defaults.get(str(key))

    def defaults(self) -> Dict[str, Any]:
        return dict(self._defaults)

    def canonical_name(self, name: str) -> Optional[str]:
        if name in self._defaults:
            return name
        lowered = name.lower()
        for key_name in self._defaults:
            if key_name.lower() == lowered:
                return key_name
        return name

    def __repr__(self) -> str:
        return f"PermissiveSchema(keys={self.keys()!r})"
