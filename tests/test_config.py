"""Tests for configuration models and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ormrel.config import (
    AppConfig,
    ConfigurationError,
    ConfigurationNotFoundError,
    ConfigurationValidationError,
    FileLoggingConfig,
    GeneratorConfig,
    load_config,
)

BASE_CONFIG = """
global:
  log_level: info
generator:
  output_dir: out/rel
  filename_template: "{concept}_schema.rel"
"""


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "environments").mkdir()
    (tmp_path / "ormrel_config.yaml").write_text(BASE_CONFIG)
    return tmp_path


def test_defaults():
    config = AppConfig()
    assert config.global_.log_level == "INFO"
    assert config.generator.output_dir == Path("rel/model")
    assert config.generator.filename_for("Event") == "event_schema.rel"
    assert config.generator.encoding == "utf-8"
    assert config.namespaces.as_dict() == {
        "orm": "http://schemas.neumont.edu/ORM/2006-04/ORMCore",
        "ormDiagram": "http://schemas.neumont.edu/ORM/2006-04/ORMDiagram",
    }


def test_global_alias():
    config = AppConfig(**{"global": {"log_level": "debug"}})
    assert config.global_.log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        AppConfig(**{"global": {"log_level": "chatty"}})


@pytest.mark.parametrize("template", ["schema.rel", "{concept}_{date}.rel"])
def test_filename_template_must_name_concept(template):
    with pytest.raises(ValidationError):
        GeneratorConfig(filename_template=template)


def test_unknown_encoding():
    with pytest.raises(ValidationError):
        GeneratorConfig(encoding="no-such-codec")


def test_log_path_template():
    file_config = FileLoggingConfig(path="logs/{environment}.log")
    assert file_config.get_resolved_path("test") == Path("logs/test.log")
    with pytest.raises(ValidationError):
        FileLoggingConfig(path="logs/{user}.log")


def test_load_base_config(config_dir):
    config = load_config(config_dir / "ormrel_config.yaml", quiet=True)
    assert config.global_.log_level == "INFO"
    assert config.generator.output_dir == Path("out/rel")


def test_environment_overrides(config_dir):
    (config_dir / "environments" / "test.yaml").write_text(
        "_environment: test\nglobal:\n  log_level: WARNING\n"
    )
    config = load_config(config_dir / "ormrel_config.yaml", "test", quiet=True)
    assert config.global_.log_level == "WARNING"
    assert config.generator.output_dir == Path("out/rel")


def test_env_var_overrides(config_dir, monkeypatch):
    monkeypatch.setenv("ORMREL_GENERATOR_OUTPUT_DIR", "env/rel")
    monkeypatch.setenv("ORMREL_GLOBAL_LOGGING__FILE__ENABLED", "true")
    config = load_config(config_dir / "ormrel_config.yaml", quiet=True)
    assert config.generator.output_dir == Path("env/rel")
    assert config.global_.logging.file.enabled


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    config = load_config(environment="production", quiet=True)
    assert config == AppConfig()


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationNotFoundError):
        load_config(tmp_path / "missing.yaml", quiet=True)


def test_invalid_config(config_dir):
    (config_dir / "ormrel_config.yaml").write_text("generator:\n  encoding: nope\n")
    with pytest.raises(ConfigurationValidationError):
        load_config(config_dir / "ormrel_config.yaml", quiet=True)


def test_malformed_yaml(config_dir):
    (config_dir / "ormrel_config.yaml").write_text("global: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_config(config_dir / "ormrel_config.yaml", quiet=True)
