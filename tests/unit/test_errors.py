"""
Unit tests for error classification.
"""

import httpx
import pytest

from webscout.errors import (
    FailureKind,
    FetchNetworkError,
    FetchTimeoutError,
    HttpStatusError,
    MissingCredentialError,
    WebToolError,
    classify_http_error,
    describe_status,
)


REQUEST = httpx.Request("GET", "https://example.com/")


class TestDescribeStatus:

    @pytest.mark.parametrize("status_code, expected", [
        (403, "Access forbidden (403) - possible bot detection"),
        (404, "Page not found (404)"),
        (429, "Rate limited (429) - too many requests"),
        (500, "HTTP 500: Internal Server Error"),
        (599, "HTTP 599"),
    ])
    def test_descriptions(self, status_code, expected):
        reason = "Internal Server Error" if status_code == 500 else ""
        assert describe_status(status_code, reason) == expected


class TestClassifyHttpError:

    def test_timeout(self):
        error = classify_http_error(httpx.ConnectTimeout("slow", request=REQUEST), timeout=10)

        assert isinstance(error, FetchTimeoutError)
        assert error.error_type == FailureKind.TIMEOUT
        assert error.message == "Request timed out after 10s"

    def test_status_error(self):
        response = httpx.Response(404, request=REQUEST)
        error = classify_http_error(httpx.HTTPStatusError("nope", request=REQUEST, response=response))

        assert isinstance(error, HttpStatusError)
        assert error.status_code == 404
        assert error.message == "Page not found (404)"

    def test_too_many_redirects(self):
        error = classify_http_error(httpx.TooManyRedirects("loop", request=REQUEST))

        assert isinstance(error, FetchNetworkError)
        assert error.message == "Too many redirects"

    def test_connect_error(self):
        error = classify_http_error(httpx.ConnectError("refused", request=REQUEST))

        assert error.error_type == FailureKind.NETWORK_ERROR
        assert "unable to reach server" in error.message

    def test_invalid_url(self):
        error = classify_http_error(httpx.InvalidURL("bad"))
        assert error.error_type == FailureKind.INVALID_URL

    def test_already_classified(self):
        original = WebToolError("custom", FailureKind.SIZE_EXCEEDED)
        assert classify_http_error(original) is original

    def test_unexpected_error(self):
        error = classify_http_error(RuntimeError("boom"))
        assert error.message == "Unexpected error: boom"


def test_missing_credential_message():
    error = MissingCredentialError("BRAVE_SEARCH_API_KEY")

    assert error.error_type == FailureKind.MISSING_CREDENTIAL
    assert "BRAVE_SEARCH_API_KEY" in error.message
    assert error.details == {"env_var": "BRAVE_SEARCH_API_KEY"}
