"""Configuration management for configpanel.

Hierarchical loading: model defaults → TOML file → environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import toml
from pydantic import ValidationError

from configpanel.distro import current_release
from configpanel.exceptions import ConfigurationError
from configpanel.models import EngineConfig, ReleaseVariant
from configpanel.utils.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "configpanel.toml"

# Mapping of environment variables to config paths
ENV_MAPPINGS: dict[str, str] = {
    "CONFIGPANEL_SCHEMA_TEMPLATE": "paths.schema_template",
    "CONFIGPANEL_SETTINGS_PATH": "paths.settings_path",
    "CONFIGPANEL_LOCALES_DIR": "paths.locales_dir",
    "CONFIGPANEL_LOCALE": "i18n.locale",
    "CONFIGPANEL_RELEASE": "platform.release",
    "CONFIGPANEL_LOG_LEVEL": "observability.log_level",
    "CONFIGPANEL_LOG_FILE": "observability.log_file",
    "CONFIGPANEL_STRUCTURED_LOGGING": "observability.structured_logging",
}


class ConfigManager:
    """Loads and validates the engine configuration."""

    def __init__(self, config_file: str | Path | None = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for configpanel.toml

        Raises:
            ConfigurationError: If the file is malformed or the merged config is invalid

        """
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()

    def _find_config_file(self, config_file: str | Path | None) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        search_paths = [
            Path.cwd() / CONFIG_FILE_NAME,
            Path.home() / ".config" / "configpanel" / CONFIG_FILE_NAME,
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def _load_config(self) -> EngineConfig:
        """Load configuration from file and environment."""
        config_data: dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data = toml.load(f)
            except (OSError, toml.TomlDecodeError) as e:
                msg = f"Failed to load config file {self.config_file}: {e}"
                raise ConfigurationError(msg) from e
            logger.debug("Loaded engine config from %s", self.config_file)

        config_data = self._merge_config(config_data, self._get_env_config())

        try:
            return EngineConfig(**config_data)
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            parts = cfg_path.split(".")
            cur = env_config
            for p in parts[:-1]:
                cur = cur.setdefault(p, {})
            cur[parts[-1]] = raw

        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Merge configuration dictionaries recursively."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value

        return result

    def schema_path(self, entity: str) -> Path:
        """Path of the schema document of an entity."""
        return Path(self.config.paths.schema_path(entity))

    def release(self) -> ReleaseVariant:
        """Configured platform release, detected from the system when 'auto'."""
        if self.config.platform.release == "auto":
            return current_release()
        return ReleaseVariant(self.config.platform.release)
