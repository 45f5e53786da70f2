# tests/conftest.py
"""
Fixtures compartilhados para testes do Strata Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório de aplicação isolado (cwd temporário)
- uma capacidade de sistema falsa para o caminho fatal
- um escritor de arquivos YAML de configuração

Decisões arquiteturais:
    - Testes nunca dependem das variáveis de ambiente reais do processo;
      o snapshot de ambiente é sempre injetado explicitamente
    - O caminho fatal (warn + exit) é observado via `FakeSystem`, sem
      encerrar o processo de testes
    - Logs são observados via `caplog`

Invariantes:
    - Cada teste roda em um diretório temporário próprio
    - Nenhuma fixture escreve fora de `tmp_path`

Limites explícitos:
    - Não valida comportamento de domínio
    - Não substitui testes de integração
"""

import logging
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from tests._helpers import FakeSystem


APP_NAME = "foo_app"


@pytest.fixture
def app_name() -> str:
    return APP_NAME


@pytest.fixture
def app_dir(tmp_path: Path, monkeypatch) -> Path:
    """
    Diretório de aplicação isolado, usado como diretório corrente.

    O caminho padrão do arquivo de configuração é relativo ao diretório
    corrente (`config/<app>.yml`), e o descritor da fonte de arquivo usa
    caminho relativo; por isso o teste roda com cwd apontando para cá.
    """
    monkeypatch.chdir(tmp_path)
    return Path.cwd()


@pytest.fixture
def fake_system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def write_config(app_dir: Path, app_name: str):
    """
    Fixture factory que escreve `config/<app>.yml` no diretório da aplicação.

    Returns:
        Callable[[Dict[str, Any]], Path]: Escreve o documento e retorna o caminho.
    """

    def _write(document: Dict[str, Any], name: str = app_name) -> Path:
        path = app_dir / "config" / f"{name}.yml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_logger(caplog) -> logging.Logger:
    caplog.set_level(logging.INFO)
    return logging.getLogger("strata_config.tests")

