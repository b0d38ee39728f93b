"""
Default configuration values and factory functions.

This module provides default configurations and factory functions for creating
configuration objects with sensible defaults when values are missing or invalid.
"""

from .models import (
    FetchSettings,
    SearchSettings,
    SystemConfig,
    DEFAULT_MAX_CONTENT_BYTES,
    DEFAULT_SEARCH_BASE_URL,
    DEFAULT_USER_AGENT,
    SEARCH_API_KEY_ENV,
)
from .validation import VALID_LOG_LEVELS


def get_default_fetch_settings() -> FetchSettings:
    return FetchSettings(
        timeout_seconds=10.0,
        max_content_bytes=DEFAULT_MAX_CONTENT_BYTES,
        user_agent=DEFAULT_USER_AGENT,
        follow_redirects=True
    )


def get_default_search_settings() -> SearchSettings:
    return SearchSettings(
        api_key=None,  # Read from the environment per call
        base_url=DEFAULT_SEARCH_BASE_URL,
        timeout_seconds=10.0,
        max_results=20,
        api_key_env=SEARCH_API_KEY_ENV
    )


def get_default_system_config() -> SystemConfig:
    """
    Get complete default system configuration.

    Returns:
        SystemConfig with all default values
    """
    return SystemConfig(
        fetch_settings=get_default_fetch_settings(),
        search_settings=get_default_search_settings(),
        enable_logging=True,
        enable_structured_logging=True,
        log_level="INFO"
    )


def apply_configuration_defaults(config: SystemConfig) -> SystemConfig:
    """
    Apply default values to missing or invalid configuration fields.

    Args:
        config: SystemConfig to apply defaults to

    Returns:
        SystemConfig with defaults applied
    """
    defaults = get_default_system_config()

    if config.fetch_settings.timeout_seconds <= 0:
        config.fetch_settings.timeout_seconds = defaults.fetch_settings.timeout_seconds

    if config.fetch_settings.max_content_bytes <= 0:
        config.fetch_settings.max_content_bytes = defaults.fetch_settings.max_content_bytes

    if not config.fetch_settings.user_agent:
        config.fetch_settings.user_agent = defaults.fetch_settings.user_agent

    if not config.search_settings.base_url:
        config.search_settings.base_url = defaults.search_settings.base_url
    elif not config.search_settings.base_url.endswith("/"):
        config.search_settings.base_url += "/"

    if config.search_settings.timeout_seconds <= 0:
        config.search_settings.timeout_seconds = defaults.search_settings.timeout_seconds

    if not (1 <= config.search_settings.max_results <= 20):
        config.search_settings.max_results = defaults.search_settings.max_results

    if not config.log_level or config.log_level not in VALID_LOG_LEVELS:
        config.log_level = defaults.log_level

    return config


def create_test_config() -> SystemConfig:
    """Create configuration optimized for testing."""
    config = get_default_system_config()
    config.enable_logging = False
    config.log_level = "CRITICAL"
    config.fetch_settings.timeout_seconds = 1.0
    config.search_settings.timeout_seconds = 1.0
    return config
