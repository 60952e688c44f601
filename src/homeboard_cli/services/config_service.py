"""Configuration service for managing Homeboard CLI configuration.

The single source of truth for configuration: loads and saves
``config.json`` in the user config directory, creates defaults on first
run, and reads or writes individual settings by dotted key
(e.g. ``schedule.horizon_days``).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from homeboard_cli.adapters.sqlite.connection import default_db_path
from homeboard_cli.exceptions import ConfigError, ValidationError
from homeboard_cli.models.config_models import AppConfig
from homeboard_cli.utils.logger import get_logger

logger = get_logger("services.config_service")


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("homeboard-cli"))
        self.config_path = self.config_dir / "config.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, writing defaults on first run.

        Raises:
            ConfigError: If the file exists but cannot be parsed
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            logger.info("no config at %s, writing defaults", self.config_path)
            self._config = AppConfig()
            self.save_config()
        except OSError as e:
            raise ConfigError(f"Failed to load config {self.config_path}: {e}") from e
        except PydanticValidationError as e:
            message = e.errors()[0]["msg"]
            raise ConfigError(
                f"Failed to load config {self.config_path}: {message}. "
                "Run 'homeboard config reset' to restore defaults"
            ) from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk (owner read/write only)."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a setting
        """
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dot-separated key and save.

        String values from the command line are coerced by the config models
        (e.g. "30" for an integer setting).

        Raises:
            KeyError: If the key does not name a setting
            ValidationError: If the value is not valid for the setting
        """
        self._lookup(self.config, key)

        *parents, leaf = key.split(".")
        config_dict = self.config.model_dump()
        current = config_dict
        for part in parents:
            current = current[part]
        current[leaf] = None if value in ("", "none", "null") else value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except PydanticValidationError as e:
            message = e.errors()[0]["msg"]
            raise ValidationError(f"Invalid value for {key}: {message}") from e

        self.save_config()
        logger.info("config %s set to %r", key, value)
        return self._config

    def reset_config(self, key: str | None = None) -> AppConfig:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
        else:
            self.set(key, self._lookup(AppConfig(), key))
        return self.config

    def get_db_path(self) -> Path:
        """Database file configured for this user."""
        if self.config.database.path:
            return Path(self.config.database.path).expanduser()
        return default_db_path()

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(f"Unknown config key: {key}")
            value = getattr(value, part)
        if isinstance(value, BaseModel):
            raise KeyError(f"Config key is a section, not a setting: {key}")
        return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance.

    The file is read on first access to ``config``, so a broken file can
    still be replaced through ``reset_config``.
    """
    return ConfigService()
