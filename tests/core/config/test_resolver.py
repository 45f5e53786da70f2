# tests/core/config/test_resolver.py
"""
Testes do resolver de configuração (AppConfig).

Este módulo valida o comportamento do resolver responsável por:
- combinar defaults, arquivo YAML e variáveis de ambiente
- aplicar a precedência ambiente > arquivo > defaults
- descartar chaves desconhecidas com aviso em log
- abortar a inicialização quando chaves obrigatórias estão ausentes
- expor valores e proveniência

Decisões arquiteturais:
    - O snapshot de ambiente é sempre injetado (nunca o `os.environ` real)
    - O caminho fatal é observado via FakeSystem, sem encerrar o processo
    - Os testes rodam com cwd no diretório da aplicação

Invariantes:
    - Chaves desconhecidas nunca aparecem no resultado
    - Chaves obrigatórias ausentes não geram exceção

Limites explícitos:
    - Não valida o formato detalhado do YAML (ver test_loader)
    - Não valida o ciclo de vida do holder (ver test_holder)
"""

import logging
from pathlib import Path

import pytest

from strata_config.core.config.errors import (
    ConfigurationError,
    MissingEnvironmentError,
    UndefinedKeyError,
)
from strata_config.core.config.resolver import AppConfig
from strata_config.core.config.schema import Schema
from tests._helpers import messages_at


def _scenario_schema() -> Schema:
    return (
        Schema()
        .key("foo", default=42)
        .key("bar", default="baz")
        .key("buz", default="ribbit")
    )


@pytest.fixture
def mixed_config(app_name, write_config, config_logger, fake_system):
    write_config({"development": {"bar": "file_bar"}})
    return AppConfig(
        app_name,
        _scenario_schema(),
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_BUZ": "env_buz"},
    )


def test_mixed_sources_resolve_by_precedence(mixed_config):
    """
    Verifica a resolução com defaults, arquivo e ambiente combinados.

    Cenário:
        - foo só existe nos defaults
        - bar é sobrescrito pelo arquivo
        - buz é sobrescrito pelo ambiente

    Invariantes:
        - Cada valor vem da fonte de maior precedência que o contém
        - Nenhum valor chega como o wrapper ConfiguredValue
    """
    assert mixed_config.get("foo") == 42
    assert mixed_config.get("bar") == "file_bar"
    assert mixed_config.get("buz") == "env_buz"
    assert mixed_config["bar"] == "file_bar"


def test_mixed_sources_report_provenance(mixed_config):
    assert mixed_config.source_of("foo") == "defaults"
    assert mixed_config.source_of("bar") == "file config/foo_app.yml"
    assert mixed_config.source_of("buz") == "environment"


def test_environment_beats_file_beats_defaults(app_name, write_config, config_logger, fake_system):
    write_config({"development": {"foo": "file_foo", "bar": "file_bar"}})
    config = AppConfig(
        app_name,
        _scenario_schema(),
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_FOO": "env_foo"},
    )
    assert (config.get("foo"), config.source_of("foo")) == ("env_foo", "environment")
    assert (config.get("bar"), config.source_of("bar")) == ("file_bar", "file config/foo_app.yml")
    assert (config.get("buz"), config.source_of("buz")) == ("ribbit", "defaults")


def test_found_file_is_logged(mixed_config, caplog):
    infos = messages_at(caplog, logging.INFO)
    assert any(m.startswith("Found config file") for m in infos)


def test_unknown_file_key_is_warned_and_discarded(app_name, write_config, config_logger, fake_system, caplog):
    """
    Verifica que chaves desconhecidas no arquivo são avisadas e descartadas.

    Invariantes:
        - Exatamente um aviso por chave desconhecida por fonte
        - A chave não aparece em consulta, proveniência ou enumeração
    """
    write_config({"development": {"undefined": "xyz"}})
    config = AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    assert messages_at(caplog, logging.WARNING) == [
        "Unknown configuration key 'undefined' in file config/foo_app.yml"
    ]
    assert "undefined" not in config
    assert list(config) == ["foo"]
    with pytest.raises(UndefinedKeyError):
        config.get("undefined")
    with pytest.raises(UndefinedKeyError):
        config.source_of("undefined")


def test_unknown_environment_key_is_warned_and_discarded(app_name, app_dir, config_logger, fake_system, caplog):
    config = AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_NOPE": "1", "UNRELATED": "2"},
    )
    assert messages_at(caplog, logging.WARNING) == [
        "Unknown configuration key 'nope' in environment"
    ]
    assert config.as_dict() == {"foo": 42}


def test_file_keys_are_matched_case_sensitively(app_name, write_config, config_logger, fake_system, caplog):
    """
    Verifica que chaves do arquivo precisam casar exatamente com o schema.

    Decisões arquiteturais:
        - Nomes do schema diferenciam maiúsculas de minúsculas
        - A comparação em minúsculas vale apenas para sufixos de ambiente

    Invariantes:
        - `FOO` no arquivo é desconhecida para o schema `foo`
        - O default de `foo` permanece intacto
    """
    write_config({"development": {"FOO": "file_upper"}})
    config = AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    assert config.get("foo") == 42
    assert config.source_of("foo") == "defaults"
    assert messages_at(caplog, logging.WARNING) == [
        "Unknown configuration key 'FOO' in file config/foo_app.yml"
    ]


def test_file_keys_differing_only_in_case_do_not_collapse(app_name, write_config, config_logger, fake_system, caplog):
    write_config({"development": {"foo": "file_lower", "FOO": "file_upper"}})
    config = AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    assert config.get("foo") == "file_lower"
    assert messages_at(caplog, logging.WARNING) == [
        "Unknown configuration key 'FOO' in file config/foo_app.yml"
    ]


def test_unknown_key_is_warned_once_per_source(app_name, app_dir, config_logger, fake_system, caplog):
    """
    Verifica que variáveis que diferem só na caixa do sufixo geram um
    único aviso para a mesma chave desconhecida.
    """
    AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_X": "1", "foo_app_x": "2"},
    )
    assert messages_at(caplog, logging.WARNING) == [
        "Unknown configuration key 'x' in environment"
    ]


def test_unreadable_config_path_is_logged_and_skipped(app_name, app_dir, config_logger, fake_system, caplog):
    """
    Verifica que o log sobre o arquivo reflete a decisão de merge: um
    caminho que existe mas não é arquivo legível é avisado e ignorado.
    """
    (app_dir / "config" / "foo_app.yml").mkdir(parents=True)
    config = AppConfig(
        app_name,
        Schema().key("foo", default=42),
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    assert config.source_of("foo") == "defaults"
    warnings = messages_at(caplog, logging.WARNING)
    assert len(warnings) == 1
    assert "is not readable" in warnings[0]
    assert not any(m.startswith("Found config file") for m in messages_at(caplog, logging.INFO))


def test_environment_suffix_matches_schema_name_case_insensitively(app_name, app_dir, config_logger, fake_system):
    config = AppConfig(
        app_name,
        Schema().key("apiKey", default=None),
        logger=config_logger,
        system=fake_system,
        environ={"foo_app_APIKEY": "secret"},
    )
    assert config.get("apiKey") == "secret"
    assert config.source_of("apiKey") == "environment"


def test_missing_required_keys_abort_startup(app_name, app_dir, config_logger, fake_system, caplog):
    """
    Verifica o caminho fatal de chaves obrigatórias ausentes.

    Cenário:
        - foo e bar definidos sem default
        - nenhum arquivo, nenhuma variável de ambiente

    Decisões arquiteturais:
        - Chaves obrigatórias ausentes não são exceção
        - O resolver registra log fatal, avisa cada chave e encerra com código 1
    """
    AppConfig(
        app_name,
        Schema().key("foo").key("bar"),
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    critical = messages_at(caplog, logging.CRITICAL)
    assert len(critical) == 1
    assert "foo, bar" in critical[0]
    assert fake_system.warnings == ["foo", "bar"]
    assert fake_system.exit_codes == [1]


def test_required_key_supplied_by_environment_does_not_abort(app_name, app_dir, config_logger, fake_system):
    config = AppConfig(
        app_name,
        Schema().key("token"),
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_TOKEN": "abc"},
    )
    assert config.get("token") == "abc"
    assert fake_system.exit_codes == []


def test_missing_required_keys_with_process_system_exits(app_name, app_dir, config_logger, capsys):
    with pytest.raises(SystemExit) as exc_info:
        AppConfig(app_name, Schema().key("foo"), logger=config_logger, environ={})
    assert exc_info.value.code == 1
    assert capsys.readouterr().err == "foo\n"


def test_file_lacking_environment_section_raises(app_name, write_config, config_logger, fake_system):
    write_config({"production": {}})
    with pytest.raises(MissingEnvironmentError) as exc_info:
        AppConfig(
            app_name,
            environment="development",
            logger=config_logger,
            system=fake_system,
            environ={},
        )
    assert isinstance(exc_info.value, ConfigurationError)
    assert "development" in str(exc_info.value)


def test_defaults_only_configuration_is_permissive(app_name, app_dir, config_logger, fake_system):
    """
    Verifica o modo permissivo, sem definições explícitas de chave.

    Invariantes:
        - As chaves vêm do mapa de defaults
        - Todas as chaves são opcionais, inclusive as não listadas
        - Qualquer nome é considerado definido
    """
    config = AppConfig(
        app_name,
        defaults={"foo": 24, "bar": False, "baz": 3.14},
        logger=config_logger,
        system=fake_system,
        environ={},
    )

    assert sorted(config.keys()) == ["bar", "baz", "foo"]
    assert config.get("foo") == 24
    assert config.get("bar") is False
    assert config.get("baz") == 3.14
    assert config.default_value("baz") == 3.14
    assert config.optional("foo") and config.optional("faz")
    assert not config.required("foo")
    assert config.defined("faz")
    assert config.get("faz") is None
    assert fake_system.exit_codes == []


def test_permissive_mode_accepts_any_environment_key(app_name, app_dir, config_logger, fake_system):
    config = AppConfig(
        app_name,
        defaults={"foo": 1},
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_EXTRA": "x"},
    )
    assert config.get("extra") == "x"


def test_fetch(app_name, app_dir, config_logger, fake_system):
    config = AppConfig(
        app_name,
        defaults={"foo": 1},
        logger=config_logger,
        system=fake_system,
        environ={},
    )
    assert config.fetch("foo") == 1
    assert config.fetch("faz", "fallback") == "fallback"
    with pytest.raises(UndefinedKeyError):
        config.fetch("faz")


def test_strict_lookups_reject_undefined_keys(mixed_config):
    for lookup in (mixed_config.get, mixed_config.source_of, mixed_config.required):
        with pytest.raises(UndefinedKeyError):
            lookup("nope")
    with pytest.raises(UndefinedKeyError):
        mixed_config.fetch("nope", "fallback")


def test_override_injects_code_values(mixed_config):
    mixed_config.override({"foo": 1, "adhoc": "x"})
    assert mixed_config.get("foo") == 1
    assert mixed_config.source_of("foo") == "code"
    assert mixed_config.get("adhoc") == "x"
    assert mixed_config.source_of("adhoc") == "code"
    assert mixed_config.get("bar") == "file_bar"


def test_entries_and_rows(mixed_config):
    assert [cv.key for cv in mixed_config.entries()] == ["foo", "bar", "buz"]
    assert mixed_config.rows() == [
        ("foo", 42, "defaults"),
        ("bar", "file_bar", "file config/foo_app.yml"),
        ("buz", "env_buz", "environment"),
    ]
    assert len(mixed_config) == 3


def test_dump_renders_table(mixed_config):
    assert mixed_config.dump() == (
        "+------------------------------------------+\n"
        "| Key |  Value   |         Source          |\n"
        "+------------------------------------------+\n"
        "| foo |       42 | defaults                |\n"
        "| bar | file_bar | file config/foo_app.yml |\n"
        "| buz | env_buz  | environment             |\n"
        "+------------------------------------------+\n"
    )


def test_summary(mixed_config):
    text = mixed_config.summary()
    assert "Application: foo_app" in text
    assert "Environment: development" in text
    assert "Env prefix:  FOO_APP_" in text


def test_starter_file_written_on_first_init(app_name, app_dir, config_logger, fake_system):
    config = AppConfig(app_name, logger=config_logger, system=fake_system, environ={})
    assert (app_dir / "config" / "foo_app.yml").exists()
    assert config.config_path == app_dir / "config" / "foo_app.yml"
    assert config.environment == "development"


def test_starter_file_can_be_disabled(app_name, app_dir, config_logger, fake_system, caplog):
    AppConfig(
        app_name,
        logger=config_logger,
        system=fake_system,
        environ={},
        write_starter=False,
    )
    assert not (app_dir / "config").exists()
    assert any("does not exist" in m for m in messages_at(caplog, logging.INFO))


def test_starter_write_failure_does_not_stop_resolution(app_name, tmp_path: Path, config_logger, fake_system, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    config = AppConfig(
        app_name,
        Schema().key("foo", default=1),
        config_path=blocker / "foo_app.yml",
        logger=config_logger,
        system=fake_system,
        environ={"FOO_APP_FOO": "2"},
    )

    assert config.get("foo") == "2"
    assert any("Could not write starter" in m for m in messages_at(caplog, logging.WARNING))


def test_schema_and_defaults_are_mutually_exclusive(app_name, app_dir):
    with pytest.raises(ValueError):
        AppConfig(app_name, Schema(), defaults={"foo": 1}, environ={})


def test_custom_environment_and_app_root(app_name, tmp_path: Path, config_logger, fake_system):
    root = tmp_path / "elsewhere"
    path = root / "config" / "foo_app.yml"
    path.parent.mkdir(parents=True)
    path.write_text("production:\n  foo: prod_foo\n", encoding="utf-8")

    config = AppConfig(
        app_name,
        Schema().key("foo"),
        app_root=root,
        environment="production",
        logger=config_logger,
        system=fake_system,
        environ={},
    )
    assert config.get("foo") == "prod_foo"
    assert fake_system.exit_codes == []
