"""
Configuration data models for webscout.

This module defines the core data structures used for configuration management,
including selector candidates for field extraction, fetch limits and search
API settings.
"""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/128.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "ja,en-US;q=0.9,en;q=0.8"
DEFAULT_MAX_CONTENT_BYTES = 10 * 1024 * 1024
DEFAULT_SEARCH_BASE_URL = "https://api.search.brave.com/res/v1/"
SEARCH_API_KEY_ENV = "BRAVE_SEARCH_API_KEY"


@dataclass(frozen=True)
class SelectorCandidate:
    """
    One rule of a selector cascade.

    Text candidates read the text of the first matching node; attribute
    candidates read ``attribute`` of the first matching node.
    """

    selector: str
    attribute: Optional[str] = None

    def __post_init__(self):
        if not self.selector or not self.selector.strip():
            raise ValueError("Selector cannot be empty")


@dataclass
class FetchSettings:
    """Configuration for outbound page fetches."""

    timeout_seconds: float = 10.0
    max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    follow_redirects: bool = True

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")
        if self.max_content_bytes <= 0:
            raise ValueError("Max content bytes must be positive")


@dataclass
class SearchSettings:
    """Configuration for the Brave Search API."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_SEARCH_BASE_URL
    timeout_seconds: float = 10.0
    max_results: int = 20
    api_key_env: str = SEARCH_API_KEY_ENV

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")
        if self.max_results < 1:
            raise ValueError("Max results must be at least 1")


@dataclass
class SystemConfig:
    """Overall system configuration combining all settings."""

    fetch_settings: FetchSettings = field(default_factory=FetchSettings)
    search_settings: SearchSettings = field(default_factory=SearchSettings)

    enable_logging: bool = True
    enable_structured_logging: bool = True
    log_level: str = "INFO"
