"""
Web page scraping module for webscout.

This module provides async HTTP fetching with browser headers and size
limits, HTML parsing with selector cascades, article extraction and generic
page scraping.
"""

__all__ = [
    'HTTPFetcher',
    'FetchResult',
    'ParsedDocument',
    'parse_document',
    'resolve_field',
    'resolve_url',
    'ArticleExtractor',
    'Article',
    'ArticleImage',
    'ArticleResult',
    'PageScraper',
    'PageContent',
    'PageLink',
    'PageResult'
]

_EXPORTS = {
    'HTTPFetcher': '.fetcher',
    'FetchResult': '.fetcher',
    'ParsedDocument': '.parser',
    'parse_document': '.parser',
    'resolve_field': '.parser',
    'resolve_url': '.urls',
    'ArticleExtractor': '.extractor',
    'Article': '.extractor',
    'ArticleImage': '.extractor',
    'ArticleResult': '.extractor',
    'PageScraper': '.scraper',
    'PageContent': '.scraper',
    'PageLink': '.scraper',
    'PageResult': '.scraper',
}


def __getattr__(name):
    # Lazy imports keep httpx/bs4 out of the import path until first use
    if name in _EXPORTS:
        from importlib import import_module
        return getattr(import_module(_EXPORTS[name], __name__), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
