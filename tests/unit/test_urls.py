"""
Unit tests for URL resolution.
"""

import pytest

from webscout.errors import FailureKind, MalformedUrlError
from webscout.scraper.urls import resolve_url, resolve_url_strict


BASE = "https://a.example/news/story.html"


class TestResolveUrl:

    def test_relative_parent_path(self):
        assert resolve_url("../x.png", BASE) == "https://a.example/x.png"

    def test_root_relative_path(self):
        assert resolve_url("/img/a.jpg", BASE) == "https://a.example/img/a.jpg"

    def test_sibling_path(self):
        assert resolve_url("photo.jpg", BASE) == "https://a.example/news/photo.jpg"

    def test_absolute_url_passthrough(self):
        assert resolve_url("https://cdn.example/y.png", BASE) == "https://cdn.example/y.png"

    def test_protocol_relative(self):
        assert resolve_url("//cdn.example/z.png", BASE) == "https://cdn.example/z.png"

    @pytest.mark.parametrize("href", [
        "",
        "   ",
        None,
        "http://bad:port/",
        "http://[::1/",
    ])
    def test_malformed_returns_none(self, href):
        assert resolve_url(href, BASE) is None

    @pytest.mark.parametrize("href", [
        "mailto:editor@a.example",
        "tel:+81-3-0000-0000",
        "javascript:void(0)",
        "data:image/png;base64,AAAA",
    ])
    def test_absolute_non_web_url_kept(self, href):
        assert resolve_url(href, BASE) == href

    def test_strict_raises(self):
        with pytest.raises(MalformedUrlError) as exc_info:
            resolve_url_strict("http://[::1/", BASE)

        assert exc_info.value.error_type == FailureKind.MALFORMED_URL
        assert exc_info.value.href == "http://[::1/"
