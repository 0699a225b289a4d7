"""Configuration settings for multi-stripe-mcp using pydantic-settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from multi_stripe_mcp.defaults import (
    DEFAULT_API_VERSION,
    DEFAULT_FETCH_ALL_PAGE_SIZE,
    DEFAULT_MAX_RESULTS,
    MAX_PAGE_SIZE,
)
from multi_stripe_mcp.exceptions import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. STRIPE_MCP_CONFIG_FILE environment variable
    2. ./stripe-mcp.yaml (current directory)
    3. $XDG_CONFIG_HOME/multi-stripe-mcp/config.yaml (defaults to ~/.config)

    API keys are never read from this file; they come from
    STRIPE_<NAME>_ACCOUNT_APIKEY environment variables only.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load and cache YAML config file."""
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        """Read YAML config from the first existing candidate path."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get("STRIPE_MCP_CONFIG_FILE"),
            Path.cwd() / "stripe-mcp.yaml",
            Path(xdg_config) / "multi-stripe-mcp" / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                problem = getattr(e, "problem", None) or str(e)
                raise ConfigError(
                    f"Invalid YAML syntax: {problem}",
                    file_path=str(path_obj),
                    line=mark.line if mark else None,
                    col=mark.column if mark else None,
                ) from e
            except OSError as e:
                raise ConfigError(
                    f"Cannot read config file: {e}",
                    file_path=str(path_obj),
                ) from e

            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(
                    "Config file must contain a mapping of settings",
                    file_path=str(path_obj),
                )
            return data

        return {}


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = err.get("loc", ())
    msg = err.get("msg", "")
    if loc:
        field_name = ".".join(str(part) for part in loc)
        return f"Invalid value for '{field_name}': {msg}"
    return str(error)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with STRIPE_MCP_ prefix.

    Example YAML config:
        api_version: "2025-03-31.basil"
        log_level: "DEBUG"
        max_results: 50
    """

    model_config = SettingsConfigDict(env_prefix="STRIPE_MCP_", extra="ignore")

    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1)
    log_level: str = "INFO"

    # Pagination bounds
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1, le=MAX_PAGE_SIZE)
    fetch_all_page_size: int = Field(default=DEFAULT_FETCH_ALL_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )


def load_settings() -> Settings:
    """Load settings with eager validation.

    Raises:
        ConfigError: If the configuration is invalid, with a user-friendly message.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings.

    Cached so the Stripe API version stays pinned for the whole process run.
    """
    return load_settings()
