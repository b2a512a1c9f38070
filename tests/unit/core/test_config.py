"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py. Tests run
against the packaged settings files; failure scenarios use tmp_path to
create controlled settings directories.
"""

from pathlib import Path

import pytest

from discourse_stats.core.config import (
    DEFAULT_SETTINGS_DIR,
    AppConfig,
    find_settings_dir,
    get_app_config,
    get_request_timeout,
    get_settings,
    load_yaml_config,
)
from discourse_stats.core.config_schema import ApplicationSchema, LoggingSchema
from discourse_stats.core.exceptions import ConfigError

APPLICATION_YAML = """\
name: discourse-stats
version: 9.9.9
description: test
client:
  timeout: 5
  statistics_path: /site/statistics.json
  default_scheme: http
  follow_redirects: false
"""

LOGGING_YAML = """\
level: INFO
format: json
handlers:
  console:
    enabled: true
  file:
    enabled: false
    path: logs/test.jsonl
    max_bytes: 1024
    backup_count: 1
"""


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    """A complete, valid settings directory."""
    (tmp_path / "application.yaml").write_text(APPLICATION_YAML)
    (tmp_path / "logging.yaml").write_text(LOGGING_YAML)
    return tmp_path


# =============================================================================
# Packaged defaults
# =============================================================================


class TestPackagedSettings:
    """Tests against the settings shipped with the package."""

    def test_default_settings_dir_exists(self) -> None:
        assert DEFAULT_SETTINGS_DIR.is_dir()
        assert (DEFAULT_SETTINGS_DIR / "application.yaml").is_file()
        assert (DEFAULT_SETTINGS_DIR / "logging.yaml").is_file()

    def test_find_settings_dir_defaults_to_package(self) -> None:
        assert find_settings_dir() == DEFAULT_SETTINGS_DIR

    def test_application_defaults(self) -> None:
        application = get_app_config().application
        assert isinstance(application, ApplicationSchema)
        assert application.client.timeout == 30
        assert application.client.statistics_path == "/site/statistics.json"
        assert application.client.default_scheme == "https"

    def test_logging_defaults(self) -> None:
        logging_config = get_app_config().logging
        assert isinstance(logging_config, LoggingSchema)
        assert logging_config.level == "WARNING"
        assert logging_config.handlers.file.enabled is False

    def test_app_config_is_cached(self) -> None:
        assert get_app_config() is get_app_config()


# =============================================================================
# Environment overrides
# =============================================================================


class TestEnvironmentOverrides:
    """Tests for DISCOURSE_STATS_* variables."""

    def test_config_dir_override(self, settings_dir: Path, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_CONFIG_DIR", str(settings_dir))

        assert find_settings_dir() == settings_dir
        assert get_app_config().application.version == "9.9.9"

    def test_timeout_override(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_TIMEOUT", "12.5")
        assert get_request_timeout() == 12.5

    def test_timeout_defaults_to_yaml(self) -> None:
        assert get_request_timeout() == 30

    def test_log_level_override(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_LOG_LEVEL", "DEBUG")
        assert get_settings().log_level == "DEBUG"

    def test_log_level_override_is_uppercased(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_LOG_LEVEL", "debug")
        assert get_settings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_LOG_LEVEL", "verbose")
        with pytest.raises(ConfigError, match="environment variable"):
            get_settings()

    def test_invalid_environment_value(self, monkeypatch) -> None:
        monkeypatch.setenv("DISCOURSE_STATS_TIMEOUT", "soon")
        with pytest.raises(ConfigError, match="environment variable"):
            get_settings()


# =============================================================================
# Loading and validation
# =============================================================================


class TestLoadYamlConfig:
    """Tests for YAML loading."""

    def test_loads_mapping(self, settings_dir: Path) -> None:
        data = load_yaml_config("application.yaml", settings_dir)
        assert data["client"]["timeout"] == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_yaml_config("application.yaml", tmp_path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "application.yaml").write_text("client: [unclosed")
        with pytest.raises(ConfigError, match="Malformed YAML"):
            load_yaml_config("application.yaml", tmp_path)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "application.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_yaml_config("application.yaml", tmp_path)

    def test_empty_file_is_empty_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "application.yaml").write_text("")
        assert load_yaml_config("application.yaml", tmp_path) == {}


class TestAppConfig:
    """Tests for schema validation at load time."""

    def test_loads_custom_directory(self, settings_dir: Path) -> None:
        config = AppConfig(settings_dir)
        assert config.application.client.default_scheme == "http"
        assert config.application.client.follow_redirects is False
        assert config.logging.format == "json"

    def test_unknown_key_rejected(self, settings_dir: Path) -> None:
        (settings_dir / "application.yaml").write_text(APPLICATION_YAML + "extra_key: 1\n")
        with pytest.raises(ConfigError, match="application.yaml"):
            AppConfig(settings_dir)

    def test_non_positive_timeout_rejected(self, settings_dir: Path) -> None:
        (settings_dir / "application.yaml").write_text(
            APPLICATION_YAML.replace("timeout: 5", "timeout: 0"),
        )
        with pytest.raises(ConfigError):
            AppConfig(settings_dir)

    def test_invalid_log_level_rejected(self, settings_dir: Path) -> None:
        (settings_dir / "logging.yaml").write_text(LOGGING_YAML.replace("INFO", "LOUD"))
        with pytest.raises(ConfigError, match="logging.yaml"):
            AppConfig(settings_dir)

    def test_missing_section_rejected(self, settings_dir: Path) -> None:
        (settings_dir / "application.yaml").write_text("name: x\nversion: 1\ndescription: y\n")
        with pytest.raises(ConfigError):
            AppConfig(settings_dir)
