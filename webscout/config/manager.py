"""
Configuration manager for loading and managing system configuration.

This module provides the ConfigManager class that handles loading configuration
from environment variables, files, and default values with proper validation.
"""

import os
import json
import logging
from typing import Dict, Optional, Any
from pathlib import Path

from .models import SystemConfig, FetchSettings, SearchSettings
from .validation import validate_configuration
from .defaults import apply_configuration_defaults, get_default_system_config


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages system configuration loading and validation."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Optional directory path for configuration files
        """
        self.config_dir = Path(config_dir) if config_dir else Path("config")
        self._system_config: Optional[SystemConfig] = None

    def load_configuration(self) -> SystemConfig:
        """
        Load complete system configuration from all sources.

        Returns:
            SystemConfig object with all loaded settings
        """
        if self._system_config is None:
            self._system_config = self._build_system_config()
        return self._system_config

    def _build_system_config(self) -> SystemConfig:
        """Build system configuration from all sources."""
        file_config = self._load_settings_file()

        try:
            system_config = SystemConfig(
                fetch_settings=self._load_fetch_settings(file_config.get("fetch", {})),
                search_settings=self._load_search_settings(file_config.get("search", {}))
            )
        except ValueError as e:
            logger.warning("Configuration loading failed: %s. Using default configuration.", e)
            return get_default_system_config()

        self._apply_environment_overrides(system_config)

        system_config = apply_configuration_defaults(system_config)

        validation_errors = validate_configuration(system_config, raise_on_error=False)
        if validation_errors:
            logger.warning("Configuration validation warnings: %d issues found", len(validation_errors))
            for error in validation_errors[:5]:
                logger.warning("  - %s", error)

        return system_config

    def _load_settings_file(self) -> Dict[str, Any]:
        settings_file = self.config_dir / "settings.json"
        if not settings_file.exists():
            return {}

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", settings_file, e)
            return {}

        return data if isinstance(data, dict) else {}

    def _load_fetch_settings(self, file_values: Dict[str, Any]) -> FetchSettings:
        """Load fetch settings from the settings file, then environment variables."""
        settings = FetchSettings()
        self._update_from_dict(settings, file_values)

        if timeout := os.getenv("FETCH_TIMEOUT_SECONDS"):
            try:
                settings.timeout_seconds = float(timeout)
            except ValueError:
                pass  # Keep default

        if max_bytes := os.getenv("FETCH_MAX_CONTENT_BYTES"):
            try:
                settings.max_content_bytes = int(max_bytes)
            except ValueError:
                pass

        if user_agent := os.getenv("FETCH_USER_AGENT"):
            settings.user_agent = user_agent

        return settings

    def _load_search_settings(self, file_values: Dict[str, Any]) -> SearchSettings:
        """
        Load search settings from the settings file, then environment variables.

        The API key environment variable is not copied here; the search client
        reads it on every call so a removed key is noticed immediately.
        """
        settings = SearchSettings()
        self._update_from_dict(settings, file_values)

        if base_url := os.getenv("BRAVE_SEARCH_BASE_URL"):
            settings.base_url = base_url

        if timeout := os.getenv("SEARCH_TIMEOUT_SECONDS"):
            try:
                settings.timeout_seconds = float(timeout)
            except ValueError:
                pass

        return settings

    def _apply_environment_overrides(self, config: SystemConfig) -> None:
        if log_level := os.getenv("LOG_LEVEL"):
            config.log_level = log_level.upper()

        if enable_logging := os.getenv("ENABLE_LOGGING"):
            config.enable_logging = enable_logging.lower() in ("true", "1", "yes")

        if structured := os.getenv("ENABLE_STRUCTURED_LOGGING"):
            config.enable_structured_logging = structured.lower() in ("true", "1", "yes")

    @staticmethod
    def _update_from_dict(settings: Any, values: Dict[str, Any]) -> None:
        """Copy known keys from a dict onto a settings dataclass, keeping its field types."""
        for key, value in values.items():
            if not hasattr(settings, key) or value is None:
                continue
            current = getattr(settings, key)
            try:
                if isinstance(current, bool):
                    value = value if isinstance(value, bool) else str(value).lower() in ("true", "1", "yes")
                elif isinstance(current, (int, float)):
                    value = type(current)(value)
            except (TypeError, ValueError):
                continue
            setattr(settings, key, value)

_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_system_config() -> SystemConfig:
    """Get the current system configuration."""
    return get_config_manager().load_configuration()
