# src/strata_config/core/config/resolver.py
"""
Resolver canônico de configuração da aplicação (`AppConfig`).

Este módulo é responsável por resolver os valores de configuração de uma
aplicação nomeada a partir de três fontes, em ordem estrita de
precedência:

    1. defaults do schema        (menor precedência)
    2. seção do ambiente no YAML (precedência intermediária)
    3. variáveis `<APP>_*`       (maior precedência)

Para definir `foo = "bar"` pelo ambiente em uma aplicação chamada
`my_app`, basta exportar `MY_APP_FOO=bar`.

Responsabilidades do módulo:
    - Materializar o arquivo inicial quando nenhum existe (best-effort)
    - Aplicar a precedência entre as fontes
    - Descartar chaves desconhecidas, com aviso em log
    - Detectar chaves obrigatórias ausentes e abortar a inicialização
    - Expor consulta de valores e de proveniência

Decisões arquiteturais:
    - A resolução acontece uma única vez, na construção
    - O mapa resolvido é construído em um dicionário novo e só então
      atribuído à instância
    - Erros de consulta são exceções tipadas; chaves obrigatórias ausentes
      seguem o caminho fatal (log fatal + `system.warn` + `system.exit`)
    - Logger e capacidade de sistema são injetáveis

Invariantes:
    - Chaves desconhecidas nunca entram no mapa resolvido
    - Para chaves presentes em várias fontes vence a de maior precedência
    - O mapa resolvido só é alterado por `override`

Limites explícitos:
    - Não recarrega configuração em tempo de execução
    - Não realiza coerção de tipos (valores de ambiente são strings)
    - Não gerencia segredos
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union

from strata_config.report.table import render_config_table, render_summary

from .errors import UndefinedKeyError
from .loader import write_starter_file
from .schema import KeySchema, PermissiveSchema
from .sources import ConfigSource, DefaultSource, EnvironmentSource, FileSource
from .system import ProcessSystem, System
from .values import ConfiguredValue, SourceKind, SourceRef

DEFAULT_ENVIRONMENT = "development"

_MISSING: Any = object()


class AppConfig:
    """
    Configuração resolvida de uma aplicação.

    Uso típico:

        schema = Schema().key("api_url", default="http://localhost").key("token")
        config = AppConfig("my_app", schema, environment="production")
        config.get("api_url")
        config.source_of("api_url")   # "defaults", "file config/my_app.yml", ...

    Sem schema explícito, `defaults=` produz um `PermissiveSchema`: toda
    chave é aceita e nenhuma é obrigatória.

    Args:
        app_name: Nome da aplicação; define o prefixo `<APP_NAME>_`.
        schema: Schema estrito (ou permissivo) de chaves.
        defaults: Mapa de defaults para o modo permissivo.
        config_path: Caminho do YAML (padrão `<app_root>/config/<app_name>.yml`).
        app_root: Raiz da aplicação (padrão: diretório corrente).
        environment: Seção do YAML a ser lida (padrão `development`).
        logger: Logger que recebe info/warning/critical.
        system: Capacidade `warn`/`exit` do caminho fatal.
        environ: Snapshot das variáveis de ambiente (padrão `os.environ`).
        write_starter: Se True, cria o arquivo inicial quando ausente.
        defined_at: Local de definição (informativo, usado em relatórios).

    Raises:
        ValueError: Se `schema` e `defaults` forem informados juntos.
        ConfigurationError: Se o arquivo existir e for estruturalmente inválido.
    """

    def __init__(
        self,
        app_name: str,
        schema: Optional[KeySchema] = None,
        *,
        defaults: Optional[Mapping[Any, Any]] = None,
        config_path: Optional[Union[str, Path]] = None,
        app_root: Optional[Union[str, Path]] = None,
        environment: Any = DEFAULT_ENVIRONMENT,
        logger: Optional[logging.Logger] = None,
        system: Optional[System] = None,
        environ: Optional[Mapping[str, str]] = None,
        write_starter: bool = True,
        defined_at: Optional[str] = None,
    ) -> None:
        if schema is not None and defaults is not None:
            raise ValueError("pass either schema or defaults, not both")

        self.app_name = str(app_name)
        if not self.app_name:
            raise ValueError("app_name must be a non-empty string")

        self.schema: KeySchema = schema if schema is not None else PermissiveSchema(defaults)
        self.environment = str(environment)
        self.app_root = Path(app_root) if app_root is not None else Path.cwd()
        self.config_path = (
            Path(config_path)
            if config_path is not None
            else self.app_root / "config" / f"{self.app_name}.yml"
        )
        self.logger = logger if logger is not None else logging.getLogger("strata_config")
        self.system: System = system if system is not None else ProcessSystem()
        self.env_prefix = f"{self.app_name.upper()}_"
        self.defined_at = defined_at

        self._environ: Dict[str, str] = dict(environ if environ is not None else os.environ)
        self._write_starter = write_starter
        self._values: Dict[str, ConfiguredValue] = {}

        self._resolve()

    # -----------------------------
    # Resolution
    # -----------------------------
    def _build_sources(self) -> List[ConfigSource]:
        """Fontes ativas, da menor para a maior precedência."""
        out: List[ConfigSource] = [DefaultSource(self.schema.defaults())]

        file_source = FileSource(self.config_path, self.environment)
        if file_source.readable():
            self.logger.info("Found config file %s.", self.config_path)
            out.append(file_source)
        elif file_source.exists():
            self.logger.warning(
                "%s is not readable; config will be from environment.", self.config_path
            )
        else:
            self.logger.info(
                "%s does not exist; config will be from environment.", self.config_path
            )

        out.append(EnvironmentSource(self.env_prefix, self._environ))
        return out

    def _schema_name(self, configured: ConfiguredValue) -> Optional[str]:
        # sufixos de ambiente chegam em minúsculas; demais fontes casam exatamente
        if configured.source.kind is SourceKind.ENVIRONMENT:
            return self.schema.canonical_name(configured.key)
        return configured.key if self.schema.defined(configured.key) else None

    def _resolve(self) -> None:
        if not self.config_path.exists() and self._write_starter:
            write_starter_file(self.config_path, self.app_name, log=self.logger)

        values: Dict[str, ConfiguredValue] = {}
        for source in self._build_sources():
            unknown: Set[str] = set()
            for configured in source:
                name = self._schema_name(configured)
                if name is None:
                    if configured.key not in unknown:
                        unknown.add(configured.key)
                        self.logger.warning(
                            "Unknown configuration key '%s' in %s",
                            configured.key,
                            source.describe(),
                        )
                    continue
                if name != configured.key:
                    configured = replace(configured, key=name)
                values[name] = configured

        self._values = values
        self._check_required()

    def _check_required(self) -> None:
        missing = [
            key
            for key in self.schema.keys()
            if key not in self._values and self.schema.required(key)
        ]
        if not missing:
            return

        self.logger.critical(
            "Missing required configuration keys for %s (%s): %s",
            self.app_name,
            self.environment,
            ", ".join(missing),
        )
        for key in missing:
            self.system.warn(key)
        self.system.exit(1)

    # -----------------------------
    # Lookup
    # -----------------------------
    def _lookup(self, key: Any) -> Optional[ConfiguredValue]:
        name = str(key)
        configured = self._values.get(name)
        if configured is not None:
            return configured
        if not self.schema.defined(name):
            raise UndefinedKeyError(key)
        return None

    def get(self, key: Any) -> Any:
        configured = self._lookup(key)
        return configured.value if configured is not None else None

    def fetch(self, key: Any, default: Any = _MISSING) -> Any:
        configured = self._lookup(key)
        if configured is not None:
            return configured.value
        if default is _MISSING:
            raise UndefinedKeyError(key)
        return default

    def contains(self, key: Any) -> bool:
        return str(key) in self._values

    def source_of(self, key: Any) -> Optional[str]:
        configured = self._lookup(key)
        return configured.source.describe() if configured is not None else None

    def entries(self) -> List[ConfiguredValue]:
        return list(self._values.values())

    def rows(self) -> List[Tuple[str, Any, str]]:
        """Triplas (chave, valor, origem) consumidas pelos relatórios."""
        return [(cv.key, cv.value, cv.source.describe()) for cv in self._values.values()]

    def as_dict(self) -> Dict[str, Any]:
        return {key: cv.value for key, cv in self._values.items()}

    def override(self, new_values: Mapping[Any, Any]) -> None:
        """
        Injeta valores com origem `code`, sem validação de schema.

        Válvula de escape explícita para overrides em runtime e testes;
        não faz parte do fluxo normal de resolução.
        """
        code = SourceRef.code()
        values = dict(self._values)
        for key, value in new_values.items():
            values[str(key)] = ConfiguredValue(code, str(key), value)
        self._values = values

    # -----------------------------
    # Schema queries
    # -----------------------------
    def keys(self) -> List[str]:
        return self.schema.keys()

    def required(self, key: Any) -> bool:
        return self.schema.required(key)

    def optional(self, key: Any) -> bool:
        return self.schema.optional(key)

    def defined(self, key: Any) -> bool:
        return self.schema.defined(key)

    def default_value(self, key: Any) -> Any:
        return self.schema.default_value(key)

    def defaults(self) -> Dict[str, Any]:
        return self.schema.defaults()

    # -----------------------------
    # Reporting
    # -----------------------------
    def dump(self) -> str:
        return render_config_table(self.rows())

    def summary(self) -> str:
        return render_summary(self)

    # -----------------------------
    # Container protocol
    # -----------------------------
    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return (
            f"AppConfig(app_name={self.app_name!r}, environment={self.environment!r}, "
            f"keys={list(self._values)!r})"
        )
