"""Configuration loading, substitution and context override tests."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from usergen.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    GeneratorConfig,
    LoggingConfig,
)
from usergen.runtime.config.config_template import load_templated_yaml, substitute_env_vars
from usergen.runtime.context import get_config, load_default_config, set_config, with_context
from usergen.runtime.settings import EnvironmentVariables

YAML = """
config:
  database:
    url: ${DATABASE_URL:-sqlite:///./users.db}
  generator:
    count: ${USER_COUNT:-10}
    seed: 99
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(YAML, encoding="utf-8")
    return path


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("USERGEN_TEST_VAR", raising=False)

        assert substitute_env_vars("a=${USERGEN_TEST_VAR:-fallback}") == "a=fallback"

    def test_value_from_environment(self, monkeypatch):
        monkeypatch.setenv("USERGEN_TEST_VAR", "value")

        assert substitute_env_vars("${USERGEN_TEST_VAR:-fallback}") == "value"
        assert substitute_env_vars("${USERGEN_TEST_VAR}") == "value"

    def test_required_variable_missing(self, monkeypatch):
        monkeypatch.delenv("USERGEN_TEST_VAR", raising=False)

        with pytest.raises(ValueError, match="USERGEN_TEST_VAR"):
            substitute_env_vars("${USERGEN_TEST_VAR}")

    def test_custom_error_message(self, monkeypatch):
        monkeypatch.delenv("USERGEN_TEST_VAR", raising=False)

        with pytest.raises(ValueError, match="set it please"):
            substitute_env_vars("${USERGEN_TEST_VAR:?set it please}")

    def test_comment_lines_left_untouched(self, monkeypatch):
        monkeypatch.delenv("USERGEN_TEST_VAR", raising=False)
        text = "  # use ${USERGEN_TEST_VAR} here\nkey: ${USERGEN_TEST_VAR:-x}\n"

        assert substitute_env_vars(text) == "  # use ${USERGEN_TEST_VAR} here\nkey: x\n"


class TestLoadTemplatedYaml:
    def test_defaults(self, config_file, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("USER_COUNT", raising=False)

        config = load_templated_yaml(config_file, "test")

        assert config.database.url == "sqlite:///./users.db"
        assert config.generator.count == 10
        assert config.generator.seed == 99
        assert config.generator.min_age == 14

    def test_environment_prefixed_override(self, config_file, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///plain.db")
        monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///test.db")

        config = load_templated_yaml(config_file, "test")

        assert config.database.url == "sqlite:///test.db"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("config: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("config:\n  generator:\n    min_age: 50\n    max_age: 20\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "nope.yaml")


class TestConfigData:
    def test_defaults(self):
        config = ConfigData()

        assert config.database.url == "sqlite:///./users.db"
        assert config.generator.count == 10
        assert config.generator.attempts_factor == 3
        assert config.cli.wait_for_key is True
        assert config.logging.file is None

    def test_database_helpers(self):
        assert DatabaseConfig(url="sqlite:///./users.db").is_sqlite is True
        assert DatabaseConfig(url="postgresql://u:p@h:5432/db").is_sqlite is False
        assert DatabaseConfig(url="postgresql://u:p@h:5432/db").connection_string == (
            "postgresql://u:p@h:5432/db"
        )

    def test_age_bounds_validated(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(min_age=80, max_age=80)


class TestLoadDefaultConfig:
    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("USERGEN_CONFIG", str(tmp_path / "absent.yaml"))
        monkeypatch.setenv("APP_ENVIRONMENT", "test")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = load_default_config(EnvironmentVariables())

        assert config.database.url == "sqlite:///./users.db"
        assert config.app.environment == "test"
        assert config.logging.level == "DEBUG"

    def test_reads_configured_file(self, config_file, monkeypatch):
        monkeypatch.setenv("USERGEN_CONFIG", str(config_file))
        monkeypatch.setenv("APP_ENVIRONMENT", "test")
        monkeypatch.setenv("USER_COUNT", "4")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("TEST_USER_COUNT", raising=False)

        config = load_default_config(EnvironmentVariables())

        assert config.generator.count == 4
        assert config.generator.seed == 99

    def test_shipped_config_file(self, fresh_context):
        config = load_default_config()

        assert config.database.url == "sqlite:///./users.db"
        assert config.logging.level == "INFO"
        assert config.generator.count == 10
        assert config.generator.min_age == 14
        assert config.generator.max_age == 80
        assert config.cli.wait_for_key is True


class TestDefaultContext:
    def test_loaded_on_first_use(self, fresh_context, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "usergen.runtime.context.load_default_config",
            lambda: calls.append(1) or ConfigData(),
        )

        assert calls == []
        first = get_config()
        assert get_config() is first
        assert calls == [1]

    def test_broken_environment_raises_on_access(self, fresh_context, monkeypatch):
        monkeypatch.setenv("APP_ENVIRONMENT", "staging")

        with pytest.raises(ValidationError):
            get_config()


class TestWithContext:
    def test_partial_override_inherits_rest(self):
        before = get_config()

        with with_context(ConfigData(generator=GeneratorConfig(count=3))):
            config = get_config()
            assert config.generator.count == 3
            assert config.generator.min_age == before.generator.min_age
            assert config.database.url == before.database.url

        assert get_config() is before

    def test_nested_override(self):
        with with_context(ConfigData(logging=LoggingConfig(level="DEBUG"))):
            with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
                config = get_config()
                assert config.logging.level == "DEBUG"
                assert config.database.url == "sqlite://"

    def test_none_is_noop(self):
        before = get_config()

        with with_context(None):
            assert get_config() is before

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"generator": {"count": 1}}):
                pass

    def test_set_config(self):
        before = get_config()
        try:
            set_config(ConfigData(generator=GeneratorConfig(count=1)))
            assert get_config().generator.count == 1
        finally:
            set_config(before)
