# src/strata_config/core/config/sources.py
"""
Adapters de fontes de configuração.

Este módulo define o contrato `ConfigSource` e suas três variantes
fechadas, cada uma produzindo uma sequência de `ConfiguredValue` a partir
de uma única origem:

    - DefaultSource     → defaults do schema (menor precedência)
    - FileSource        → seção de ambiente do arquivo YAML
    - EnvironmentSource → variáveis de ambiente com prefixo (maior precedência)

Princípios fundamentais:
    - Fontes são lazy e reiteráveis: cada iteração relê o armazenamento
      de origem, sem cache
    - Fontes não conhecem o schema nem a precedência
    - Nenhuma coerção de tipos é aplicada

Invariantes:
    - Toda chave produzida é uma string
    - Todo valor produzido carrega a referência da sua fonte

Limites explícitos:
    - Não descarta chaves desconhecidas (responsabilidade do resolver)
    - Não cria arquivos
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Protocol, Union, runtime_checkable

from .loader import environment_section, load_yaml_document
from .values import ConfiguredValue, SourceRef


@runtime_checkable
class ConfigSource(Protocol):
    """
    Contrato canônico de uma fonte de configuração.

    A validação do protocolo ocorre em runtime (`@runtime_checkable`),
    permitindo verificação por duck typing em testes.

    Invariantes:
        - A sequência produzida é finita
        - Iterar novamente relê a origem
    """

    def __iter__(self) -> Iterator[ConfiguredValue]: ...

    def describe(self) -> str: ...


class DefaultSource:
    """Produz um valor por entrada do mapa de defaults."""

    def __init__(self, defaults: Mapping[Any, Any]) -> None:
        self._defaults = defaults
        self.ref = SourceRef.defaults()

    def describe(self) -> str:
        return self.ref.describe()

    def __str__(self) -> str:
        return self.describe()

    def __iter__(self) -> Iterator[ConfiguredValue]:
        for key, value in self._defaults.items():
            yield ConfiguredValue(self.ref, str(key), value)


class FileSource:
    """
    Produz os valores da seção de um ambiente no arquivo YAML.

    O arquivo é aberto e interpretado a cada iteração.

    Raises (na iteração):
        MissingEnvironmentError: Se o arquivo não contiver a seção.
        InvalidConfigRootTypeError: Se a raiz ou a seção não forem mapas.
        ConfigurationError: Se o YAML for inválido.
    """

    def __init__(self, path: Union[str, Path], environment: Any) -> None:
        self.path = Path(path)
        self.environment = str(environment)
        self.ref = SourceRef.file(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def readable(self) -> bool:
        return self.path.is_file() and os.access(self.path, os.R_OK)

    def describe(self) -> str:
        return self.ref.describe()

    def __str__(self) -> str:
        return self.describe()

    def __iter__(self) -> Iterator[ConfiguredValue]:
        document = load_yaml_document(self.path)
        section = environment_section(document, self.environment, path=self.path)
        for key, value in section.items():
            yield ConfiguredValue(self.ref, str(key), value)


class EnvironmentSource:
    """
    Produz valores a partir de variáveis de ambiente com prefixo.

    O prefixo é casado sem diferenciar maiúsculas de minúsculas; a chave
    produzida é o sufixo capturado em minúsculas e o valor é a string
    bruta da variável. Variáveis cujo sufixo é vazio são ignoradas.
    """

    def __init__(self, prefix: str, environ: Optional[Mapping[str, str]] = None) -> None:
        self.prefix = prefix
        self._environ = environ if environ is not None else os.environ
        self._pattern = re.compile(rf"^{re.escape(prefix)}(.*)$", re.IGNORECASE | re.DOTALL)
        self.ref = SourceRef.environment()

    def describe(self) -> str:
        return self.ref.describe()

    def __str__(self) -> str:
        return self.describe()

    def __iter__(self) -> Iterator[ConfiguredValue]:
        for name, value in list(self._environ.items()):
            match = self._pattern.match(name)
            if match is None or not match.group(1):
                continue
            yield ConfiguredValue(self.ref, match.group(1).lower(), value)
