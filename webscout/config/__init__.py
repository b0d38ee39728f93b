"""
Configuration management module for webscout.

This module provides configuration management capabilities including:
- Selector cascades for article field extraction
- Fetch limits and browser header settings
- Search API settings
- Environment variable and file-based configuration loading
- Configuration validation and defaults
"""

from .models import SelectorCandidate, FetchSettings, SearchSettings, SystemConfig
from .manager import ConfigManager, get_config_manager, get_system_config
from .selectors import (
    TITLE_CANDIDATES,
    AUTHOR_CANDIDATES,
    PUBLISHED_DATE_CANDIDATES,
    SOURCE_CANDIDATES,
    CONTENT_SELECTORS,
    get_field_candidates
)
from .validation import (
    ConfigValidator,
    ValidationError,
    ConfigurationError,
    validate_configuration
)
from .defaults import (
    get_default_fetch_settings,
    get_default_search_settings,
    get_default_system_config,
    apply_configuration_defaults,
    create_test_config
)

__all__ = [
    # Data models
    "SelectorCandidate",
    "FetchSettings",
    "SearchSettings",
    "SystemConfig",

    # Configuration manager
    "ConfigManager",
    "get_config_manager",
    "get_system_config",

    # Selector cascades
    "TITLE_CANDIDATES",
    "AUTHOR_CANDIDATES",
    "PUBLISHED_DATE_CANDIDATES",
    "SOURCE_CANDIDATES",
    "CONTENT_SELECTORS",
    "get_field_candidates",

    # Validation
    "ConfigValidator",
    "ValidationError",
    "ConfigurationError",
    "validate_configuration",

    # Defaults
    "get_default_fetch_settings",
    "get_default_search_settings",
    "get_default_system_config",
    "apply_configuration_defaults",
    "create_test_config"
]
