"""
Configuration Service

Service class for persisting the AI provider settings
(provider, API key, model) in a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from prautomator.config.settings import (
    AI_PROVIDER,
    API_KEY,
    CONFIG_KEYS,
    DEFAULT_CONFIG,
    resolve_config_path,
)

logger = logging.getLogger("PRAutomator.ConfigService")


class ConfigService:
    """
    Service class for configuration management.

    Provides:
    - Configuration loading (falls back to defaults)
    - Configuration saving (every change is persisted immediately)
    - Completeness check
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Path to config file
        """
        self.config_path = Path(config_path) if config_path else resolve_config_path()
        self._config: Dict[str, Any] = self.load()

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        A missing or unreadable file yields the defaults so the CLI can
        still start and let the user repair the configuration.

        Returns:
            Configuration dictionary
        """
        config = dict(DEFAULT_CONFIG)
        if not self.config_path.exists():
            logger.debug("No config file at %s, using defaults", self.config_path)
            self._config = config
            return dict(config)

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            self._config = config
            return dict(config)

        if isinstance(data, dict):
            config.update(data)
        else:
            logger.warning("Ignoring config file %s: top level is not an object", self.config_path)

        self._config = config
        logger.debug("Configuration loaded from %s", self.config_path)
        return dict(config)

    def save(self) -> bool:
        """
        Save configuration to file.

        Returns:
            True if successful
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with self.config_path.open("w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4)
            logger.debug("Configuration saved to %s", self.config_path)
            return True
        except OSError as e:
            logger.error("Could not save config file %s: %s", self.config_path, e)
            return False

    def get(self, key: str, default: Any = "") -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Value returned when the key is unset or empty

        Returns:
            Configuration value
        """
        value = self._config.get(key)
        if value is None or value == "":
            return default
        return value

    def set(self, key: str, value: Any) -> bool:
        """Set a value and persist it."""
        self._config[key] = value
        return self.save()

    def delete(self, key: str) -> bool:
        """Remove a value and persist the change."""
        self._config.pop(key, None)
        return self.save()

    def clear(self) -> bool:
        """Reset to defaults and persist."""
        self._config = dict(DEFAULT_CONFIG)
        return self.save()

    def get_all(self) -> Dict[str, Any]:
        """
        Get the provider settings.

        Values are always strings, even when the file holds numbers
        or null.

        Returns:
            AI_PROVIDER, API_KEY and MODEL
        """
        settings: Dict[str, str] = {}
        for key in CONFIG_KEYS:
            value = self._config.get(key, DEFAULT_CONFIG[key])
            settings[key] = "" if value is None else str(value)
        return settings

    def is_complete(self) -> bool:
        """True when both a provider and an API key are configured."""
        return bool(self.get(API_KEY)) and bool(self.get(AI_PROVIDER))
