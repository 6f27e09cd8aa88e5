"""Configuration loader with multi-source support."""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class ConfigLoader:
    """Loads configuration from multiple sources with priority.

    Priority (lowest to highest):
    1. defaults.toml (explicit path, ./config/defaults.toml, or user config dir)
    2. System config (/etc/<app>/config.toml or %PROGRAMDATA%\\<app>\\config.toml)
    3. User config (platformdirs user config dir)
    4. Environment variables: <APP>_<SECTION>_<KEY>, e.g.
       LIVEPHOTO_REPAIR_MATCHER_MAX_TIME_DELTA=2.5
    """

    def __init__(self, app_name: str = "livephoto-repair", config_class: Optional[Type[T]] = None) -> None:
        self.app_name = app_name
        self.config_class = config_class
        self._config: Optional[T] = None

    @property
    def env_prefix(self) -> str:
        return f"{self.app_name.upper().replace('-', '_')}_"

    def load(self, defaults_path: Optional[Path] = None) -> T:
        """Load configuration from all sources.

        Args:
            defaults_path: Optional path to defaults.toml file

        Returns:
            Validated configuration object

        Raises:
            ConfigurationError: If a config file cannot be parsed or validation fails
        """
        config_dict = self._load_defaults(defaults_path)

        system_config = self._load_system_config()
        if system_config:
            config_dict = self._deep_merge(config_dict, system_config)

        user_config = self._load_user_config()
        if user_config:
            config_dict = self._deep_merge(config_dict, user_config)

        config_dict = self._apply_env_overrides(config_dict)

        if self.config_class:
            try:
                self._config = self.config_class(**config_dict)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid configuration: {e}",
                    app_name=self.app_name,
                ) from e
        else:
            self._config = config_dict

        return self._config

    def _read_toml(self, path: Path) -> Dict[str, Any]:
        try:
            return toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}", path=str(path)) from e

    def _load_defaults(self, defaults_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load default configuration shipped with app."""
        if defaults_path is not None:
            if not defaults_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {defaults_path}",
                    path=str(defaults_path),
                )
            return self._read_toml(defaults_path)

        possible_paths = [
            Path.cwd() / "config" / "defaults.toml",
            Path(platformdirs.user_config_dir(appname=self.app_name, appauthor=False)) / "defaults.toml",
        ]

        for path in possible_paths:
            if path.exists():
                logger.debug(f"Loading defaults: {{'path': {str(path)!r}}}")
                return self._read_toml(path)

        return {}

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        """Load system-wide configuration."""
        if os.name == "nt":
            system_path = (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        else:
            system_path = Path(f"/etc/{self.app_name}/config.toml")

        if system_path.exists():
            logger.debug(f"Loading system config: {{'path': {str(system_path)!r}}}")
            return self._read_toml(system_path)

        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific configuration."""
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        user_config_path = Path(user_config_dir) / "config.toml"

        if user_config_path.exists():
            logger.debug(f"Loading user config: {{'path': {str(user_config_path)!r}}}")
            return self._read_toml(user_config_path)

        logger.debug(f"User config not found: {{'path': {str(user_config_path)!r}}}")
        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Override config with environment variables.

        Sections are one level deep, so only the first underscore after the
        prefix separates section from key: MATCHER_MAX_TIME_DELTA becomes
        matcher.max_time_delta.
        """
        prefix = self.env_prefix

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            key_path = env_key[len(prefix):].lower().split("_", 1)
            if len(key_path) != 2 or not all(key_path):
                logger.warning(f"Ignoring malformed config variable: {{'name': {env_key!r}}}")
                continue

            section, key = key_path
            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                logger.warning(f"Ignoring config variable for non-table entry: {{'name': {env_key!r}}}")
                continue
            current[key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type."""
        # "1"/"0" stay numeric so integer settings are not turned into booleans
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    @property
    def config(self) -> T:
        """Get loaded configuration."""
        if self._config is None:
            self._config = self.load()
        return self._config
