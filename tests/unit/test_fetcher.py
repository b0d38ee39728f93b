"""
Unit tests for HTTP fetcher functionality.
"""

import asyncio

import httpx
import pytest

from webscout.config.models import FetchSettings, DEFAULT_USER_AGENT
from webscout.errors import FailureKind
from webscout.scraper.fetcher import HTTPFetcher, FetchResult


class TestHTTPFetcher:
    """Test cases for HTTPFetcher class."""

    def test_init_with_defaults(self):
        """Test fetcher initialization with default values."""
        fetcher = HTTPFetcher()
        assert fetcher.timeout == 10.0
        assert fetcher.max_bytes == 10485760
        assert fetcher.settings.user_agent == DEFAULT_USER_AGENT

    def test_browser_headers(self):
        """Test the browser-like header set."""
        headers = HTTPFetcher().get_headers()

        assert "Chrome/128" in headers["User-Agent"]
        assert headers["Accept"].startswith("text/html,application/xhtml+xml")
        assert headers["Accept-Language"] == "ja,en-US;q=0.9,en;q=0.8"
        assert headers["Cache-Control"] == "no-cache"
        assert headers["Sec-Fetch-Dest"] == "document"
        assert headers["Sec-Fetch-Mode"] == "navigate"
        assert headers["Sec-Fetch-Site"] == "none"
        assert headers["Sec-Fetch-User"] == "?1"

    def test_extra_headers_override(self):
        """Test caller headers layered over the defaults."""
        headers = HTTPFetcher().get_headers({"Accept-Language": "en", "X-Test": "1"})
        assert headers["Accept-Language"] == "en"
        assert headers["X-Test"] == "1"

    @pytest.mark.asyncio
    async def test_invalid_url_handling(self, make_client, html_response):
        """Test handling of invalid URLs without touching the network."""
        client = make_client(html_response("<html></html>"))
        fetcher = HTTPFetcher(client=client)

        for url in ("", "not-a-url", "ftp://example.com/file"):
            result = await fetcher.fetch(url)
            assert not result.success
            assert result.error_type == FailureKind.INVALID_URL
            assert "Invalid URL format" in result.error_message

        assert client.recorded == []

    @pytest.mark.asyncio
    async def test_successful_fetch(self, make_client, html_response, fetch_settings):
        """Test successful HTTP fetch."""
        html = "<html><body><p>日本語のテキスト</p></body></html>"
        client = make_client(html_response(html))
        fetcher = HTTPFetcher(fetch_settings, client=client)

        result = await fetcher.fetch("https://example.com/page")

        assert isinstance(result, FetchResult)
        assert result.success
        assert result.status_code == 200
        assert result.content == html
        assert result.url == "https://example.com/page"
        assert result.content_type.startswith("text/html")
        assert result.error_type is None

        request = client.recorded[0]
        assert request.method == "GET"
        assert request.headers["Sec-Fetch-User"] == "?1"
        assert request.headers["Accept-Language"] == "ja,en-US;q=0.9,en;q=0.8"

    @pytest.mark.asyncio
    async def test_redirect_reports_final_url(self, make_client, fetch_settings):
        """Test that the final URL after redirects is reported."""
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"location": "https://example.com/new"})
            return httpx.Response(200, text="<html>moved</html>")

        fetcher = HTTPFetcher(fetch_settings, client=make_client(handler))
        result = await fetcher.fetch("https://example.com/old")

        assert result.success
        assert result.url == "https://example.com/new"
        assert result.content == "<html>moved</html>"

    @pytest.mark.asyncio
    async def test_http_error_handling(self, make_client, html_response, fetch_settings):
        """Test handling of HTTP errors."""
        fetcher = HTTPFetcher(fetch_settings, client=make_client(html_response("gone", status_code=404)))

        result = await fetcher.fetch("https://example.com/nonexistent")

        assert not result.success
        assert result.status_code == 404
        assert result.error_type == FailureKind.HTTP_STATUS_ERROR
        assert "404" in result.error_message

    @pytest.mark.asyncio
    async def test_server_error_message(self, make_client, html_response, fetch_settings):
        fetcher = HTTPFetcher(fetch_settings, client=make_client(html_response("boom", status_code=503)))

        result = await fetcher.fetch("https://example.com/")

        assert result.error_message == "HTTP 503: Service Unavailable"

    @pytest.mark.asyncio
    async def test_transport_timeout(self, make_client, fetch_settings):
        """Test handling of a timeout raised by the transport."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = HTTPFetcher(fetch_settings, client=make_client(handler))
        result = await fetcher.fetch("https://slow.example.com/")

        assert not result.success
        assert result.error_type == FailureKind.TIMEOUT
        assert "timed out" in result.error_message

    @pytest.mark.asyncio
    async def test_overall_timeout(self, make_client, fetch_settings):
        """Test that the timeout bounds the whole request."""
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, text="late")

        fetcher = HTTPFetcher(fetch_settings, client=make_client(handler))
        result = await fetcher.fetch("https://slow.example.com/", timeout=0.05)

        assert not result.success
        assert result.error_type == FailureKind.TIMEOUT
        assert result.error_message == "Request timed out after 0.05s"

    @pytest.mark.asyncio
    async def test_connection_error(self, make_client, fetch_settings):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        fetcher = HTTPFetcher(fetch_settings, client=make_client(handler))
        result = await fetcher.fetch("https://unreachable.example/")

        assert not result.success
        assert result.error_type == FailureKind.NETWORK_ERROR
        assert "unable to reach server" in result.error_message

    @pytest.mark.asyncio
    async def test_declared_size_exceeded(self, make_client, html_response):
        """Test the size ceiling against the declared content length."""
        settings = FetchSettings(max_content_bytes=100)
        fetcher = HTTPFetcher(settings, client=make_client(html_response("x" * 500)))

        result = await fetcher.fetch("https://example.com/big")

        assert not result.success
        assert result.error_type == FailureKind.SIZE_EXCEEDED
        assert "100 bytes" in result.error_message

    @pytest.mark.asyncio
    async def test_streamed_size_exceeded(self, make_client):
        """Test the size ceiling on a chunked body without a length."""
        async def chunks():
            for _ in range(5):
                yield b"y" * 64

        def handler(request):
            return httpx.Response(200, headers={"content-type": "text/html"}, content=chunks())

        settings = FetchSettings(max_content_bytes=200)
        fetcher = HTTPFetcher(settings, client=make_client(handler))

        result = await fetcher.fetch("https://example.com/stream")

        assert not result.success
        assert result.error_type == FailureKind.SIZE_EXCEEDED

    @pytest.mark.asyncio
    async def test_body_at_limit_is_accepted(self, make_client, html_response):
        settings = FetchSettings(max_content_bytes=10)
        fetcher = HTTPFetcher(settings, client=make_client(html_response("0123456789")))

        result = await fetcher.fetch("https://example.com/exact")

        assert result.success
        assert result.content == "0123456789"

    @pytest.mark.asyncio
    async def test_declared_charset_is_used(self, make_client):
        """Test decoding with the charset from the content type."""
        body = "ニュース".encode("shift_jis")

        def handler(request):
            return httpx.Response(200, headers={"content-type": "text/html; charset=shift_jis"}, content=body)

        fetcher = HTTPFetcher(client=make_client(handler))
        result = await fetcher.fetch("https://example.jp/")

        assert result.success
        assert result.content == "ニュース"
        assert result.encoding == "shift_jis"
