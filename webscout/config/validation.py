"""
Configuration validation utilities.

This module provides validation functions and error classes for configuration
management, ensuring that all configuration values are valid and complete.
"""

from typing import List, Any
from urllib.parse import urlparse

from .models import FetchSettings, SearchSettings, SystemConfig, SelectorCandidate
from .selectors import get_field_candidates, CONTENT_SELECTORS


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""
    pass


class ValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"Validation error for '{field}': {message}")


class ConfigValidator:
    """Validates configuration objects and provides detailed error reporting."""

    @staticmethod
    def validate_fetch_settings(settings: FetchSettings) -> List[ValidationError]:
        """
        Validate FetchSettings object.

        Args:
            settings: FetchSettings to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if settings.timeout_seconds <= 0:
            errors.append(ValidationError("timeout_seconds", "Timeout must be positive", settings.timeout_seconds))
        elif settings.timeout_seconds > 300:
            errors.append(ValidationError("timeout_seconds", "Timeout should not exceed 300 seconds", settings.timeout_seconds))

        if settings.max_content_bytes <= 0:
            errors.append(ValidationError("max_content_bytes", "Max content bytes must be positive", settings.max_content_bytes))

        if not settings.user_agent or not settings.user_agent.strip():
            errors.append(ValidationError("user_agent", "User agent cannot be empty"))

        return errors

    @staticmethod
    def validate_search_settings(settings: SearchSettings) -> List[ValidationError]:
        """
        Validate SearchSettings object.

        A missing API key is not a configuration error: searches report it
        per call instead.
        """
        errors = []

        if not ConfigValidator._is_valid_url(settings.base_url):
            errors.append(ValidationError("base_url", "Invalid URL format", settings.base_url))

        if settings.timeout_seconds <= 0:
            errors.append(ValidationError("timeout_seconds", "Timeout must be positive", settings.timeout_seconds))

        if not (1 <= settings.max_results <= 20):
            errors.append(ValidationError("max_results", "Max results must be between 1 and 20", settings.max_results))

        if not settings.api_key_env:
            errors.append(ValidationError("api_key_env", "API key environment variable name cannot be empty"))

        return errors

    @staticmethod
    def validate_selector_cascades() -> List[ValidationError]:
        """Validate the built-in selector cascades."""
        errors = []

        for field_name, candidates in get_field_candidates().items():
            if not candidates:
                errors.append(ValidationError(field_name, "Selector cascade cannot be empty"))
            for i, candidate in enumerate(candidates):
                if not ConfigValidator._is_valid_candidate(candidate):
                    errors.append(ValidationError(
                        f"{field_name}[{i}]",
                        "Invalid CSS selector syntax",
                        candidate.selector
                    ))

        for i, selector in enumerate(CONTENT_SELECTORS):
            if not ConfigValidator._is_valid_css_selector(selector):
                errors.append(ValidationError(f"content[{i}]", "Invalid CSS selector syntax", selector))

        return errors

    @staticmethod
    def validate_system_config(config: SystemConfig) -> List[ValidationError]:
        """
        Validate complete SystemConfig object.

        Args:
            config: SystemConfig to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for error in ConfigValidator.validate_fetch_settings(config.fetch_settings):
            errors.append(ValidationError(f"fetch_settings.{error.field}", error.message, error.value))

        for error in ConfigValidator.validate_search_settings(config.search_settings):
            errors.append(ValidationError(f"search_settings.{error.field}", error.message, error.value))

        errors.extend(ConfigValidator.validate_selector_cascades())

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(ValidationError("log_level", "Invalid log level", config.log_level))

        return errors

    @staticmethod
    def _is_valid_candidate(candidate: SelectorCandidate) -> bool:
        if candidate.attribute is not None and not candidate.attribute.strip():
            return False
        return ConfigValidator._is_valid_css_selector(candidate.selector)

    @staticmethod
    def _is_valid_css_selector(selector: str) -> bool:
        """Basic validation of CSS selector syntax."""
        if not selector or not selector.strip():
            return False

        # Not a full CSS parser; soupsieve reports anything subtler at query time
        invalid_chars = ['<', '{', '}']
        return not any(char in selector for char in invalid_chars)

    @staticmethod
    def _is_valid_url(url: str) -> bool:
        try:
            result = urlparse(url)
        except ValueError:
            return False
        return result.scheme in ("http", "https") and bool(result.netloc)


def validate_configuration(config: SystemConfig, raise_on_error: bool = False) -> List[ValidationError]:
    """
    Validate a complete system configuration.

    Args:
        config: SystemConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        List of validation errors (empty if valid)

    Raises:
        ConfigurationError: If validation fails and raise_on_error is True
    """
    errors = ConfigValidator.validate_system_config(config)

    if errors and raise_on_error:
        error_messages = [str(error) for error in errors]
        raise ConfigurationError("Configuration validation failed:\n" + "\n".join(error_messages))

    return errors
