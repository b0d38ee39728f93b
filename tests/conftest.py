"""
Shared fixtures for webscout tests.

Network access is replaced by ``httpx.MockTransport``; every transport
records the requests it served so tests can assert on them.
"""

import httpx
import pytest

from webscout.config.models import FetchSettings, SearchSettings


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it handled."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_client():
    """Factory for AsyncClients backed by a RecordingTransport."""

    def factory(handler):
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        client.recorded = transport.requests
        return client

    return factory


@pytest.fixture
def html_response():
    """Factory for a handler that answers every request with ``html``."""

    def factory(html, status_code=200, headers=None):
        def handler(request):
            response_headers = {"content-type": "text/html; charset=utf-8"}
            response_headers.update(headers or {})
            return httpx.Response(status_code, headers=response_headers, content=html.encode("utf-8"))

        return handler

    return factory


@pytest.fixture
def fetch_settings():
    return FetchSettings(timeout_seconds=2.0, max_content_bytes=1024 * 1024)


@pytest.fixture
def search_settings():
    return SearchSettings(api_key="test-key", timeout_seconds=2.0)


