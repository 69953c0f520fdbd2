"""
Settings Management Module

Provides pydantic-based configuration management with:
- YAML configuration file loading
- Environment variable overrides (VMAP_*)
- Multi-environment support (dev, prod, test)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .config import VmapParserConfig
from .exceptions import VmapConfigError
from .log_config import configure_logging


class Settings(BaseSettings):
    """
    Application settings for VMAP document handling.

    Configuration hierarchy (lowest to highest precedence):
    1. settings/config.yaml (base)
    2. settings/config.{environment}.yaml (environment-specific)
    3. Environment variables (VMAP_*), which also outrank keyword arguments

    Examples:
        >>> settings = get_settings()
        >>> settings.parser_config().skip_invalid_scalars
        False
    """

    model_config = SettingsConfigDict(
        env_prefix="VMAP_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="allow",
    )

    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = True

    parser: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; VMAP_* variables must win over them
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config file (default: ./settings/config.yaml)

        Returns:
            Settings instance

        Raises:
            VmapConfigError: If a config file is not valid YAML or not a mapping
        """
        if config_path is None:
            config_path = Path.cwd() / "settings" / "config.yaml"

        if not config_path.exists():
            # Return default settings if config doesn't exist
            return cls()

        config_data = cls._read_yaml(config_path)

        # Load environment-specific overrides
        env = os.getenv("VMAP_ENVIRONMENT", config_data.get("environment", "development"))
        env_config_path = config_path.parent / f"config.{env}.yaml"
        if env_config_path.exists():
            config_data = cls._deep_merge(config_data, cls._read_yaml(env_config_path))

        return cls(**config_data)

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise VmapConfigError(
                f"Invalid YAML in settings file: {str(e)}", config_path=str(path)
            ) from e
        if not isinstance(data, dict):
            raise VmapConfigError("Settings file must contain a mapping", config_path=str(path))
        return data

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Settings._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def parser_config(self) -> VmapParserConfig:
        """Build the parser configuration from the ``parser`` section."""
        return VmapParserConfig.from_dict(self.parser)

    def setup_logging(self) -> None:
        """Apply ``log_level`` and ``log_json`` to structlog."""
        configure_logging(self.log_level, json_output=self.log_json)


@lru_cache
def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Settings instance
    """
    return Settings.load_from_yaml(config_path)


def reload_settings() -> Settings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]
