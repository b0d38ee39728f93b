"""
Selector cascades for article field extraction.

Each cascade is an ordered tuple of candidates; the first candidate that
yields non-empty text (or a non-empty attribute) wins. The order is part of
the extraction contract and must not be rearranged.
"""

from .models import SelectorCandidate


TITLE_CANDIDATES = (
    SelectorCandidate("h1"),
    SelectorCandidate('meta[property="og:title"]', "content"),
    SelectorCandidate("title"),
)

AUTHOR_CANDIDATES = (
    SelectorCandidate('[rel="author"]'),
    SelectorCandidate('meta[name="author"]', "content"),
    SelectorCandidate(".author"),
    SelectorCandidate(".byline"),
)

PUBLISHED_DATE_CANDIDATES = (
    SelectorCandidate('meta[property="article:published_time"]', "content"),
    SelectorCandidate("time[datetime]", "datetime"),
    SelectorCandidate('[itemprop="datePublished"]', "content"),
    SelectorCandidate(".date"),
)

# The URL hostname is the final fallback for the source and is applied by
# the extractor, since it does not come from the document.
SOURCE_CANDIDATES = (
    SelectorCandidate('meta[property="og:site_name"]', "content"),
)

CONTENT_SELECTORS = (
    "article",
    '[itemprop="articleBody"]',
    ".article-body",
    ".entry-content",
    ".post-content",
    ".story-body",
    "#article-body",
    ".article__body",
)

CONTENT_FALLBACK_SELECTOR = "main"

# Used for image lookup when no content selector matched
IMAGE_FALLBACK_SELECTOR = "article img, .article img, .entry-content img"

# Stripped from a matched content node before reading its text
ARTICLE_NOISE_SELECTOR = "script, style"

# Stripped from <body> when scraping a page without an explicit selector
PAGE_NOISE_SELECTOR = "script, style, meta, link, noscript"


def get_field_candidates() -> dict[str, tuple[SelectorCandidate, ...]]:
    """Get every field cascade keyed by field name."""
    return {
        "title": TITLE_CANDIDATES,
        "author": AUTHOR_CANDIDATES,
        "published_date": PUBLISHED_DATE_CANDIDATES,
        "source": SOURCE_CANDIDATES,
    }
