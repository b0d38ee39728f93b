"""
Generic web page scraper.

This module combines the HTTP fetcher and the document parser to turn any
page into plain text content, its title, its meta tags and optionally its
links. Unlike article extraction, an empty page is still a successful
result; only a failed fetch is reported as failure.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from soupsieve import SelectorSyntaxError

from .fetcher import HTTPFetcher
from .parser import ParsedDocument, parse_document, clean_text
from .urls import resolve_url
from ..config.selectors import PAGE_NOISE_SELECTOR
from ..errors import FailureKind
from ..postprocess.formatter import format_result


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10000


@dataclass
class PageLink:
    """Hyperlink with an absolute href."""

    text: str
    href: str


@dataclass
class PageContent:
    """Content scraped from a web page."""

    content: str = ""
    title: Optional[str] = None
    links: Optional[List[PageLink]] = None
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class PageResult:
    """Outcome of a page scrape."""

    success: bool
    message: str
    content: Optional[str] = None
    title: Optional[str] = None
    links: Optional[List[PageLink]] = None
    metadata: Optional[Dict[str, str]] = None
    error_type: Optional[FailureKind] = None

    @classmethod
    def from_page(cls, page: PageContent) -> "PageResult":
        return cls(
            success=True,
            message="Web page scraped successfully.",
            content=page.content,
            title=page.title,
            links=page.links,
            metadata=page.metadata
        )

    def to_dict(self) -> dict:
        return format_result(self)


class PageScraper:
    """
    Scrapes text, title, metadata and links from web pages.
    """

    def __init__(self, fetcher: Optional[HTTPFetcher] = None):
        """
        Initialize page scraper.

        Args:
            fetcher: HTTP fetcher; a default one is created if omitted
        """
        self.fetcher = fetcher or HTTPFetcher()

    async def scrape_page(
        self,
        url: str,
        selector: Optional[str] = None,
        extract_links: bool = False,
        timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> PageResult:
        """
        Fetch and scrape a web page.

        Args:
            url: URL of the page
            selector: Optional CSS selector restricting the content
            extract_links: Whether to collect the page's links
            timeout_ms: Request timeout in milliseconds

        Returns:
            PageResult with the scraped content on success
        """
        logger.info("Starting page scrape: %s", url)

        fetch_result = await self.fetcher.fetch(url, timeout=timeout_ms / 1000)
        if not fetch_result.success:
            logger.error("Page fetch failed for %s: %s", url, fetch_result.error_message)
            return PageResult(
                success=False,
                message=f"Failed to scrape web page: {fetch_result.error_message}",
                error_type=FailureKind.SCRAPE_FAILED
            )

        try:
            page = self.scrape_html(fetch_result.content, fetch_result.url, selector, extract_links)
        except SelectorSyntaxError as e:
            logger.error("Invalid selector %r: %s", selector, e)
            return PageResult(
                success=False,
                message=f"Failed to scrape web page: invalid selector {selector!r}",
                error_type=FailureKind.SCRAPE_FAILED
            )

        logger.info(
            "Page scraped from %s: %d chars, %d meta tags",
            fetch_result.url, len(page.content), len(page.metadata)
        )
        return PageResult.from_page(page)

    def scrape_html(
        self,
        html: str,
        url: str,
        selector: Optional[str] = None,
        extract_links: bool = False
    ) -> PageContent:
        """
        Scrape an HTML body.

        Args:
            html: Raw HTML content
            url: URL of the document, used as base for relative links
            selector: Optional CSS selector restricting the content
            extract_links: Whether to collect links

        Returns:
            PageContent

        Raises:
            SelectorSyntaxError: If ``selector`` is not valid CSS
        """
        doc = parse_document(html, url)

        if selector:
            content = "\n".join(node.get_text().strip() for node in doc.select(selector))
        else:
            body = doc.select_one("body") or doc.soup
            content = doc.node_text(body, PAGE_NOISE_SELECTOR)

        # Text of every title element, including stray ones such as SVG titles
        title = "".join(node.get_text() for node in doc.select("title")).strip()

        return PageContent(
            content=content,
            title=title or None,
            links=self._extract_links(doc) if extract_links else None,
            metadata=self._extract_metadata(doc)
        )

    def _extract_metadata(self, doc: ParsedDocument) -> Dict[str, str]:
        """Map meta ``name``/``property`` to ``content``; later tags overwrite earlier ones."""
        metadata = {}
        for node in doc.select("meta"):
            key = node.get("name") or node.get("property")
            value = node.get("content")
            if key and value:
                metadata[key] = value
        return metadata

    def _extract_links(self, doc: ParsedDocument) -> List[PageLink]:
        links = []
        for node in doc.select("a[href]"):
            href = resolve_url(node.get("href"), doc.base_url)
            if href is None:
                continue
            links.append(PageLink(text=clean_text(node.get_text()), href=href))
        return links
