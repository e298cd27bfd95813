"""
Settings management for torkeys.

Configuration is loaded with pydantic-settings from, highest priority first:
1. CLI arguments (passed to get_settings as overrides)
2. Environment variables
3. TOML config file (~/.torkeys/config.toml)
4. Default values

Environment Variable Naming:
    - Prefix TORKEYS_, double underscore for nested settings
    - Examples: TORKEYS_LOGGING__LEVEL=DEBUG, TORKEYS_OUTPUT__FORMAT=json
    - Maps to TOML sections: TORKEYS_LOGGING__LEVEL -> [logging] level

The core key and address functions never read settings; only the CLI does.
"""

from __future__ import annotations

import os
import sys
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_DATA_DIR_NAME = ".torkeys"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level: TRACE, DEBUG, INFO, WARNING, ERROR",
    )
    sensitive: bool = Field(
        default=False,
        description="Allow private key material in DEBUG logs",
    )


class OutputSettings(BaseModel):
    """CLI output configuration."""

    format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description="Output format for CLI commands: text or json",
    )


class TorKeysSettings(BaseSettings):
    """
    Main torkeys settings class.

    See the module docstring for source priority.
    """

    model_config = SettingsConfigDict(
        env_prefix="TORKEYS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Data directory (defaults to ~/.torkeys)",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    def get_data_dir(self) -> Path:
        """Get the data directory, using default if not set."""
        if self.data_dir is not None:
            return self.data_dir
        return get_default_data_dir()


def get_default_data_dir() -> Path:
    """Return $TORKEYS_DATA_DIR or ~/.torkeys. Does not create it."""
    env_path = os.environ.get("TORKEYS_DATA_DIR")
    return Path(env_path) if env_path else Path.home() / DEFAULT_DATA_DIR_NAME


def get_config_path() -> Path:
    """Get the path to the config file."""
    env_path = os.environ.get("TORKEYS_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return get_default_data_dir() / "config.toml"


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads the TOML config file, if present."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        config_path = get_config_path()

        if not config_path.exists():
            logger.debug(f"Config file not found at {config_path}, using defaults")
            return

        try:
            with open(config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Invalid TOML syntax in config file {config_path}")
            logger.error(f"Error: {e}")
            logger.error("Tip: Make sure section headers like [logging] are uncommented")
            sys.exit(1)
        except OSError as e:
            logger.error(f"Failed to load config from {config_path}: {e}")
            sys.exit(1)

        logger.info(f"Loaded config from {config_path}")

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        value = self._config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._config


def generate_config_template() -> str:
    """Generate a config file template with all settings commented out."""
    lines: list[str] = [
        "# torkeys configuration",
        "#",
        "# Settings are commented out by default - uncomment to override.",
        "#",
        "# Priority (highest to lowest):",
        "#   1. CLI arguments",
        "#   2. Environment variables (e.g. TORKEYS_LOGGING__LEVEL=DEBUG)",
        "#   3. This config file",
        "#   4. Built-in defaults",
        "",
    ]

    def add_section(title: str, model_cls: type[BaseModel], prefix: str) -> None:
        lines.append(f"# {'=' * 60}")
        lines.append(f"# {title}")
        lines.append(f"# {'=' * 60}")
        lines.append(f"[{prefix}]")
        lines.append("")

        for field_name, field_info in model_cls.model_fields.items():
            if field_info.description:
                lines.append(f"# {field_info.description}")

            default = field_info.default
            if isinstance(default, bool):
                value_str = str(default).lower()
            elif isinstance(default, Enum):
                value_str = f'"{default.value}"'
            elif isinstance(default, str):
                value_str = f'"{default}"'
            else:
                value_str = str(default)

            lines.append(f"# {field_name} = {value_str}")
            lines.append("")

    lines.append("# Data directory, defaults to ~/.torkeys or $TORKEYS_DATA_DIR")
    lines.append("# data_dir = ")
    lines.append("")

    add_section("Logging Settings", LoggingSettings, "logging")
    add_section("Output Settings", OutputSettings, "output")

    return "\n".join(lines)


def ensure_config_file(data_dir: Path | None = None) -> Path:
    """
    Ensure the config file exists, creating a template if it doesn't.

    Args:
        data_dir: Directory to create config.toml in. Defaults to the file
            the settings loader reads (get_config_path()).

    Returns:
        Path to the config file.
    """
    config_path = data_dir / "config.toml" if data_dir is not None else get_config_path()

    if not config_path.exists():
        logger.info(f"Creating config file template at {config_path}")
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_template())

    return config_path


_settings: TorKeysSettings | None = None


def get_settings(**overrides: Any) -> TorKeysSettings:
    """
    Get the settings instance.

    Loaded from all sources on first call and cached until reset_settings().
    Passing overrides always builds a fresh instance.
    """
    global _settings
    if _settings is None or overrides:
        _settings = TorKeysSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None


__all__ = [
    "LoggingSettings",
    "OutputFormat",
    "OutputSettings",
    "TorKeysSettings",
    "ensure_config_file",
    "generate_config_template",
    "get_config_path",
    "get_default_data_dir",
    "get_settings",
    "reset_settings",
]
