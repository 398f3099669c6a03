"""
Configuration Manager for the MQTT test client.

Responsibility: Load an optional YAML file, merge it over the defaults
(environment variables included) and validate the result into Settings.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_model import Settings

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file could not be used."""
    pass


class ConfigManager:
    """
    Configuration manager with YAML persistence.

    Precedence: explicit overrides > YAML file > environment > defaults.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config = self._get_default_config()
        self._settings: Optional[Settings] = None

        self._load_configuration()
        self._settings = self._validate(self.config)

        logger.info("ConfigManager initialized")

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_default_config(self) -> Dict[str, Any]:
        """Defaults including environment overrides, as a plain dict."""
        return self._validate({}).model_dump()

    def _load_configuration(self):
        """Load configuration from file."""
        if not self.config_path:
            return

        config_file = Path(self.config_path)
        if not config_file.exists():
            logger.info(f"Config file not found: {self.config_path}")
            return

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading configuration from {self.config_path}: {e}") from e

        if loaded_config:
            if not isinstance(loaded_config, dict):
                raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")
            self._merge_config(self.config, loaded_config)
            logger.info(f"Configuration loaded from {self.config_path}")

    def _merge_config(self, target: Dict[str, Any], source: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_config(target[key], value)
            else:
                target[key] = value

    def _validate(self, config: Dict[str, Any]) -> Settings:
        try:
            return Settings.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def apply_overrides(self, overrides: Dict[str, Any]) -> Settings:
        """
        Merges overrides (e.g. from the command line) and revalidates.

        Args:
            overrides: Nested dict, None values are ignored
        """
        cleaned = {
            section: {k: v for k, v in values.items() if v is not None}
            for section, values in overrides.items()
        }
        self._merge_config(self.config, cleaned)
        self._settings = self._validate(self.config)
        return self._settings

    def save_configuration(self, path: Optional[str] = None) -> bool:
        """Save current configuration to file."""
        target = path or self.config_path
        if not target:
            return False

        try:
            config_file = Path(target)
            config_file.parent.mkdir(parents=True, exist_ok=True)

            with open(config_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.config, f, default_flow_style=False, indent=2, sort_keys=False)

            logger.info(f"Configuration saved to {target}")
            return True

        except OSError as e:
            logger.error(f"Error saving configuration: {e}")
            return False
