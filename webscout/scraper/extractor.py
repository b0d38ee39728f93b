"""
News article extraction.

This module composes the HTTP fetcher, the document parser and the selector
cascades into a single operation: URL in, structured article (or a failure)
out. Title, author, publish date, source and body are each resolved through
an ordered cascade of generic selectors, so no per-site configuration is
needed.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import Tag

from .fetcher import HTTPFetcher
from .parser import ParsedDocument, parse_document, resolve_field, resolve_content
from .urls import resolve_url
from ..config.selectors import (
    TITLE_CANDIDATES,
    AUTHOR_CANDIDATES,
    PUBLISHED_DATE_CANDIDATES,
    SOURCE_CANDIDATES,
    CONTENT_SELECTORS,
    CONTENT_FALLBACK_SELECTOR,
    IMAGE_FALLBACK_SELECTOR,
    ARTICLE_NOISE_SELECTOR,
)
from ..errors import FailureKind, InsufficientContentError
from ..postprocess.formatter import format_result


logger = logging.getLogger(__name__)

IMAGE_SOURCE_ATTRIBUTES = ("data-src", "src")


@dataclass
class ArticleImage:
    """Image found in the article body."""

    url: str
    alt: Optional[str] = None


@dataclass
class Article:
    """
    Extracted article.

    Only constructed when both title and content are non-empty.
    """

    title: str
    content: str
    author: Optional[str] = None
    published_date: Optional[str] = None
    source: Optional[str] = None
    images: Optional[List[ArticleImage]] = None

    def __post_init__(self):
        if not self.title or not self.content:
            raise InsufficientContentError()


@dataclass
class ArticleResult:
    """Outcome of an article extraction."""

    success: bool
    message: str
    article: Optional[Article] = None
    error_type: Optional[FailureKind] = None

    def to_dict(self) -> dict:
        return format_result(self)


class ArticleExtractor:
    """
    Extracts articles from arbitrary news pages.

    Uses an ordered cascade per field; the first selector yielding a
    non-empty value wins.
    """

    def __init__(self, fetcher: Optional[HTTPFetcher] = None):
        """
        Initialize article extractor.

        Args:
            fetcher: HTTP fetcher; a default one is created if omitted
        """
        self.fetcher = fetcher or HTTPFetcher()

    async def extract_article(self, url: str, extract_images: bool = False) -> ArticleResult:
        """
        Fetch a page and extract its article.

        Args:
            url: URL of the news article
            extract_images: Whether to collect images from the article body

        Returns:
            ArticleResult with the article on success
        """
        logger.info("Starting article extraction: %s", url)

        fetch_result = await self.fetcher.fetch(url)
        if not fetch_result.success:
            logger.error("Article fetch failed for %s: %s", url, fetch_result.error_message)
            return ArticleResult(
                success=False,
                message=f"Failed to extract article: {fetch_result.error_message}",
                error_type=FailureKind.EXTRACTION_FAILED
            )

        try:
            article = self.extract_from_html(fetch_result.content, fetch_result.url, extract_images)
        except InsufficientContentError:
            logger.warning("Insufficient article content at %s", fetch_result.url)
            return ArticleResult(
                success=False,
                message="Failed to extract article. The site format may not be supported.",
                error_type=FailureKind.INSUFFICIENT_CONTENT
            )

        logger.info(
            "Article extracted from %s: %d chars, %d images",
            fetch_result.url, len(article.content), len(article.images or [])
        )
        return ArticleResult(
            success=True,
            message="Article extracted successfully.",
            article=article
        )

    def extract_from_html(self, html: str, url: str, extract_images: bool = False) -> Article:
        """
        Extract an article from an HTML body.

        Deterministic: the same HTML and URL always give an equal Article.

        Args:
            html: Raw HTML content
            url: URL of the document, used as base for relative image URLs
            extract_images: Whether to collect images

        Returns:
            Article

        Raises:
            InsufficientContentError: If title or content is empty after all fallbacks
        """
        doc = parse_document(html, url)

        title = resolve_field(doc, TITLE_CANDIDATES)
        author = resolve_field(doc, AUTHOR_CANDIDATES)
        published_date = resolve_field(doc, PUBLISHED_DATE_CANDIDATES)
        source = resolve_field(doc, SOURCE_CANDIDATES) or self._hostname(url)

        content, content_node = resolve_content(doc, CONTENT_SELECTORS, ARTICLE_NOISE_SELECTOR)
        if not content:
            content, _ = resolve_content(doc, (CONTENT_FALLBACK_SELECTOR,), ARTICLE_NOISE_SELECTOR)

        if not title or not content:
            raise InsufficientContentError()

        images = self._extract_images(doc, content_node) if extract_images else []

        return Article(
            title=title,
            content=content,
            author=author,
            published_date=published_date,
            source=source,
            images=images or None
        )

    def _extract_images(self, doc: ParsedDocument, scope: Optional[Tag]) -> List[ArticleImage]:
        """
        Collect images inside ``scope``, or from the broad fallback set.

        Images whose source cannot be resolved are skipped.
        """
        if scope is not None:
            candidates = scope.select("img")
        else:
            candidates = doc.select(IMAGE_FALLBACK_SELECTOR)

        images = []
        for node in candidates:
            src = None
            for attribute in IMAGE_SOURCE_ATTRIBUTES:
                src = doc.node_attribute(node, attribute)
                if src:
                    break
            if not src:
                continue

            absolute_url = resolve_url(src, doc.base_url)
            if absolute_url is None:
                continue

            images.append(ArticleImage(
                url=absolute_url,
                alt=doc.node_attribute(node, "alt") or None
            ))

        return images

    @staticmethod
    def _hostname(url: str) -> Optional[str]:
        try:
            return urlparse(url).hostname or None
        except ValueError:
            return None
