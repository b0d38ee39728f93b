"""
Unit tests for the generic page scraper.
"""

import pytest

from webscout.errors import FailureKind
from webscout.scraper.fetcher import HTTPFetcher
from webscout.scraper.scraper import PageLink, PageResult, PageScraper


PAGE_HTML = """
<html>
<head>
    <title>  Example Page  </title>
    <meta name="description" content="First description">
    <meta property="og:type" content="website">
    <meta charset="utf-8">
    <meta name="description" content="Second description">
    <link rel="stylesheet" href="/style.css">
</head>
<body>
    <noscript>Enable JavaScript</noscript>
    <div class="item">  Alpha  </div>
    <p>Intro   text</p>
    <script>console.log("hidden")</script>
    <div class="item">Beta</div>
    <a href="/about">About   us</a>
    <a href="https://other.example/page">Other</a>
    <a name="anchor">No href</a>
    <a href="javascript:void(0)">Script link</a>
</body>
</html>
"""


class TestScrapeHtml:
    """Test cases for scraping an HTML body."""

    def test_body_text_without_noise(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/home")

        assert page.content == "Alpha Intro text Beta About us Other No href Script link"
        assert "hidden" not in page.content
        assert "Enable JavaScript" not in page.content
        assert page.title == "Example Page"

    def test_selector_joins_matches(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/", selector=".item")
        assert page.content == "Alpha\nBeta"

    def test_selector_without_matches(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/", selector=".missing")
        assert page.content == ""

    def test_metadata_last_wins(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/")

        assert page.metadata == {
            "description": "Second description",
            "og:type": "website",
        }

    def test_links_only_on_request(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/")
        assert page.links is None

    def test_links_resolved_and_href_required(self):
        page = PageScraper().scrape_html(PAGE_HTML, "https://site.example/home", extract_links=True)

        assert page.links == [
            PageLink(text="About us", href="https://site.example/about"),
            PageLink(text="Other", href="https://other.example/page"),
            PageLink(text="Script link", href="javascript:void(0)"),
        ]

    def test_empty_page(self):
        page = PageScraper().scrape_html("", "https://site.example/")

        assert page.content == ""
        assert page.title is None
        assert page.metadata == {}

    def test_empty_title_is_omitted(self):
        page = PageScraper().scrape_html("<title> </title><body>x</body>", "https://site.example/")
        assert page.title is None

    def test_title_joins_every_title_element(self):
        html = """
        <html><head><title>News</title></head>
        <body><svg><title>Logo</title></svg><p>x</p></body></html>
        """
        page = PageScraper().scrape_html(html, "https://site.example/")
        assert page.title == "NewsLogo"

    def test_non_web_links_are_kept(self):
        html = """
        <body>
            <a href="mailto:ed@a.example">Mail</a>
            <a href="tel:+123">Call</a>
            <a href="http://[::1/">Broken</a>
            <a href="/x">X</a>
        </body>
        """
        page = PageScraper().scrape_html(html, "https://a.example/", extract_links=True)

        assert page.links == [
            PageLink(text="Mail", href="mailto:ed@a.example"),
            PageLink(text="Call", href="tel:+123"),
            PageLink(text="X", href="https://a.example/x"),
        ]


class TestScrapePage:
    """Test cases for the fetch-and-scrape operation."""

    @pytest.mark.asyncio
    async def test_successful_scrape(self, make_client, html_response, fetch_settings):
        scraper = PageScraper(HTTPFetcher(fetch_settings, client=make_client(html_response(PAGE_HTML))))

        result = await scraper.scrape_page("https://site.example/", extract_links=True)

        assert isinstance(result, PageResult)
        assert result.success
        assert result.message == "Web page scraped successfully."

        data = result.to_dict()
        assert data["title"] == "Example Page"
        assert data["metadata"]["og:type"] == "website"
        assert data["links"][0] == {"text": "About us", "href": "https://site.example/about"}

    @pytest.mark.asyncio
    async def test_empty_page_is_success(self, make_client, html_response, fetch_settings):
        scraper = PageScraper(HTTPFetcher(fetch_settings, client=make_client(html_response(""))))

        result = await scraper.scrape_page("https://site.example/blank")

        assert result.success
        assert result.to_dict() == {
            "success": True,
            "message": "Web page scraped successfully.",
            "content": "",
            "metadata": {},
        }

    @pytest.mark.asyncio
    async def test_fetch_failure(self, make_client, html_response, fetch_settings):
        scraper = PageScraper(HTTPFetcher(fetch_settings, client=make_client(html_response("", status_code=403))))

        result = await scraper.scrape_page("https://site.example/private")

        assert not result.success
        assert result.error_type == FailureKind.SCRAPE_FAILED
        assert result.message == "Failed to scrape web page: Access forbidden (403) - possible bot detection"

    @pytest.mark.asyncio
    async def test_invalid_selector(self, make_client, html_response, fetch_settings):
        scraper = PageScraper(HTTPFetcher(fetch_settings, client=make_client(html_response(PAGE_HTML))))

        result = await scraper.scrape_page("https://site.example/", selector="div[")

        assert not result.success
        assert result.error_type == FailureKind.SCRAPE_FAILED
        assert "invalid selector" in result.message

    @pytest.mark.asyncio
    async def test_timeout_is_passed_in_seconds(self, make_client, html_response, fetch_settings):
        fetcher = HTTPFetcher(fetch_settings, client=make_client(html_response(PAGE_HTML)))
        calls = []
        original_fetch = fetcher.fetch

        async def spy_fetch(url, **kwargs):
            calls.append(kwargs)
            return await original_fetch(url, **kwargs)

        fetcher.fetch = spy_fetch
        await PageScraper(fetcher).scrape_page("https://site.example/", timeout_ms=2500)

        assert calls == [{"timeout": 2.5}]
