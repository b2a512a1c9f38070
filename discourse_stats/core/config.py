"""
Configuration Management.

Loads settings from YAML files in the settings directory and optional
overrides from DISCOURSE_STATS_* environment variables.

Settings (YAML):
    application.yaml   - App identity and HTTP client settings
    logging.yaml       - Logging configuration

Environment overrides:
    DISCOURSE_STATS_CONFIG_DIR  - Alternate settings directory
    DISCOURSE_STATS_TIMEOUT     - Request timeout in seconds
    DISCOURSE_STATS_LOG_LEVEL   - Log level for the console handler
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from discourse_stats.core.config_schema import ApplicationSchema, LoggingSchema
from discourse_stats.core.exceptions import ConfigError

DEFAULT_SETTINGS_DIR = Path(__file__).resolve().parent.parent / "settings"


class Settings(BaseSettings):
    """Environment overrides. All optional; unset values defer to YAML."""

    config_dir: Path | None = None
    timeout: float | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    model_config = SettingsConfigDict(
        env_prefix="DISCOURSE_STATS_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Get cached environment overrides."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid DISCOURSE_STATS_* environment variable:\n{e}") from e


def find_settings_dir() -> Path:
    """Return the settings directory, honouring DISCOURSE_STATS_CONFIG_DIR."""
    override = get_settings().config_dir
    if override is not None:
        return override
    return DEFAULT_SETTINGS_DIR


def load_yaml_config(filename: str, settings_dir: Path | None = None) -> dict[str, Any]:
    """Load a YAML configuration file from the settings directory."""
    config_path = (settings_dir or find_settings_dir()) / filename

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {config_path}")
    return data


def _load_validated(schema_cls: type, filename: str, settings_dir: Path | None) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename, settings_dir)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self, settings_dir: Path | None = None) -> None:
        self.settings_dir = settings_dir or find_settings_dir()
        self._application = _load_validated(ApplicationSchema, "application.yaml", self.settings_dir)
        self._logging = _load_validated(LoggingSchema, "logging.yaml", self.settings_dir)

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_request_timeout() -> float:
    """Effective request timeout: environment override, else application.yaml."""
    override = get_settings().timeout
    if override is not None:
        return override
    return get_app_config().application.client.timeout
