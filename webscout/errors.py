"""
Error taxonomy for fetch, extraction and search operations.

This module provides the failure kinds reported to callers, the exception
hierarchy raised inside the fetcher and search client, and classification
of transport errors from httpx into that hierarchy.
"""

from enum import Enum
from typing import Any, Dict, Optional

import httpx


class FailureKind(str, Enum):
    """Stable discriminant carried in ``errorType`` of failed results."""

    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_STATUS_ERROR = "HTTP_STATUS_ERROR"
    SIZE_EXCEEDED = "SIZE_EXCEEDED"
    INVALID_URL = "INVALID_URL"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    INSUFFICIENT_CONTENT = "INSUFFICIENT_CONTENT"
    SCRAPE_FAILED = "SCRAPE_FAILED"
    SEARCH_ERROR = "SEARCH_ERROR"
    NO_RESULTS = "NO_RESULTS"
    MALFORMED_URL = "MALFORMED_URL"


class WebToolError(Exception):
    """Base exception for web tool errors."""

    def __init__(
        self,
        message: str,
        error_type: FailureKind = FailureKind.NETWORK_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}


class FetchTimeoutError(WebToolError):
    """Raised when a request does not complete before its timeout."""

    def __init__(self, message: str = "Request timed out", timeout: Optional[float] = None):
        super().__init__(message, FailureKind.TIMEOUT, {"timeout_seconds": timeout})
        self.timeout = timeout


class FetchNetworkError(WebToolError):
    """Raised for DNS, connection and protocol level failures."""

    def __init__(self, message: str):
        super().__init__(message, FailureKind.NETWORK_ERROR)


class HttpStatusError(WebToolError):
    """Raised when the upstream answers with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(
            message or f"HTTP {status_code}",
            FailureKind.HTTP_STATUS_ERROR,
            {"status_code": status_code}
        )
        self.status_code = status_code


class SizeExceededError(WebToolError):
    """Raised when a response body grows past the configured ceiling."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Response exceeded maximum size of {max_bytes} bytes",
            FailureKind.SIZE_EXCEEDED,
            {"max_bytes": max_bytes}
        )
        self.max_bytes = max_bytes


class MissingCredentialError(WebToolError):
    """Raised when the search API key is not configured."""

    def __init__(self, env_var: str):
        super().__init__(
            f"Brave Search API key is not configured. Set the {env_var} environment variable.",
            FailureKind.MISSING_CREDENTIAL,
            {"env_var": env_var}
        )
        self.env_var = env_var


class InsufficientContentError(WebToolError):
    """Raised when extraction finishes without a title or body."""

    def __init__(self, message: str = "Article extraction produced no title or content"):
        super().__init__(message, FailureKind.INSUFFICIENT_CONTENT)


class MalformedUrlError(WebToolError):
    """Raised for an href that cannot be resolved to an absolute URL."""

    def __init__(self, href: str):
        super().__init__(f"Malformed URL: {href!r}", FailureKind.MALFORMED_URL, {"href": href})
        self.href = href


_STATUS_REASONS = {
    403: "Access forbidden (403) - possible bot detection",
    404: "Page not found (404)",
    429: "Rate limited (429) - too many requests",
}


def describe_status(status_code: int, reason: str = "") -> str:
    """Human readable description of an HTTP status."""
    if status_code in _STATUS_REASONS:
        return _STATUS_REASONS[status_code]
    return f"HTTP {status_code}: {reason}".rstrip(": ")


def classify_http_error(error: Exception, timeout: Optional[float] = None) -> WebToolError:
    """
    Classify httpx errors into web tool error types.

    Args:
        error: Original exception raised by httpx
        timeout: Timeout in seconds that applied to the request

    Returns:
        Classified WebToolError
    """
    if isinstance(error, WebToolError):
        return error

    if isinstance(error, httpx.TimeoutException):
        if timeout is not None:
            return FetchTimeoutError(f"Request timed out after {timeout:g}s", timeout)
        return FetchTimeoutError(timeout=timeout)

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return HttpStatusError(
            response.status_code,
            describe_status(response.status_code, response.reason_phrase)
        )

    if isinstance(error, httpx.TooManyRedirects):
        return FetchNetworkError("Too many redirects")

    if isinstance(error, httpx.ConnectError):
        return FetchNetworkError(f"Connection error - unable to reach server: {error}")

    if isinstance(error, httpx.InvalidURL):
        return WebToolError(f"Invalid URL: {error}", FailureKind.INVALID_URL)

    if isinstance(error, httpx.HTTPError):
        return FetchNetworkError(f"Request failed: {error}")

    return FetchNetworkError(f"Unexpected error: {error}")
