# src/strata_config/core/config/values.py
"""
Tipos canônicos de valores configurados e de proveniência.

Este módulo define as estruturas que carregam cada valor resolvido
junto com a origem que o forneceu.

Componentes principais:
    - SourceKind      → enum das variantes de origem
    - SourceRef       → referência imutável a uma origem
    - ConfiguredValue → valor resolvido + chave + origem

Princípios fundamentais:
    - Valores são imutáveis após a criação
    - A proveniência é apenas diagnóstica (não participa de precedência)

Invariantes:
    - Uma fonte posterior nunca muta um ConfiguredValue existente;
      ela cria um novo que substitui o anterior no mapa resolvido

Limites explícitos:
    - Não lê arquivos nem variáveis de ambiente
    - Não aplica precedência nem validação
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class SourceKind(str, Enum):
    """
    Variantes fechadas de origem de um valor configurado.

    Os valores são strings para facilitar inspeção, relatórios e
    comparação em testes.
    """

    DEFAULTS = "defaults"
    FILE = "file"
    ENVIRONMENT = "environment"
    CODE = "code"


def _relative_to_cwd(path: Path) -> str:
    try:
        return os.path.relpath(path, Path.cwd())
    except ValueError:
        # caminhos em drives distintos (Windows)
        return str(path)


@dataclass(frozen=True)
class SourceRef:
    """
    Referência imutável à origem de um valor configurado.

    Para a variante FILE, `path` guarda o caminho do arquivo; o descritor
    usa o caminho relativo ao diretório corrente no momento da chamada.
    """

    kind: SourceKind
    path: Optional[Path] = None

    @classmethod
    def defaults(cls) -> "SourceRef":
        return cls(SourceKind.DEFAULTS)

    @classmethod
    def file(cls, path: Path) -> "SourceRef":
        return cls(SourceKind.FILE, Path(path))

    @classmethod
    def environment(cls) -> "SourceRef":
        return cls(SourceKind.ENVIRONMENT)

    @classmethod
    def code(cls) -> "SourceRef":
        return cls(SourceKind.CODE)

    def describe(self) -> str:
        if self.kind is SourceKind.FILE and self.path is not None:
            return f"file {_relative_to_cwd(self.path)}"
        return self.kind.value

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class ConfiguredValue:
    """
    Um valor de configuração resolvido e sua proveniência.

    Criado por um adapter de fonte durante a iteração e consumido pelo
    resolver durante o merge.
    """

    source: SourceRef
    key: str
    value: Any
