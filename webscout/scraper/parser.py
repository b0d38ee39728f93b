"""
HTML parsing and selector cascade resolution.

This module wraps BeautifulSoup in a read-only document type and provides
the generic cascade resolver used by both article extraction and page
scraping: given an ordered list of selector candidates, the first one that
yields non-empty text (or a non-empty attribute) wins.
"""

import copy
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..config.models import SelectorCandidate


_WHITESPACE = re.compile(r'\s+')


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace to a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(' ', text).strip()


@dataclass(frozen=True)
class ParsedDocument:
    """
    Queryable tree over one HTML body.

    Queries never mutate the tree; text extraction that strips descendants
    works on a copy of the node.
    """

    soup: BeautifulSoup
    base_url: str = ""

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def node_text(self, node: Tag, strip_selector: Optional[str] = None) -> str:
        """
        Whitespace-collapsed text of a node.

        Args:
            node: Node to read
            strip_selector: Descendants matching this selector are excluded

        Returns:
            Cleaned text, possibly empty
        """
        if strip_selector:
            node = copy.copy(node)
            for descendant in node.select(strip_selector):
                descendant.decompose()
        return clean_text(node.get_text())

    def node_attribute(self, node: Tag, attribute: str) -> str:
        value = node.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        return clean_text(value)

    def first_text(self, selector: str, strip_selector: Optional[str] = None) -> Tuple[str, Optional[Tag]]:
        """Text of the first node matching ``selector`` whose text is non-empty."""
        for node in self.select(selector):
            text = self.node_text(node, strip_selector)
            if text:
                return text, node
        return "", None

    def first_attribute(self, selector: str, attribute: str) -> Optional[str]:
        for node in self.select(selector):
            value = self.node_attribute(node, attribute)
            if value:
                return value
        return None


def parse_document(html: Optional[str], base_url: str = "") -> ParsedDocument:
    """
    Parse an HTML body into a ParsedDocument.

    Non-HTML or empty input parses to an empty tree rather than failing.

    Args:
        html: Raw HTML content
        base_url: URL the document was fetched from

    Returns:
        ParsedDocument over the body
    """
    return ParsedDocument(BeautifulSoup(html or "", 'html.parser'), base_url)


def resolve_candidate(doc: ParsedDocument, candidate: SelectorCandidate) -> Optional[str]:
    """Evaluate a single candidate, returning its value or None."""
    if candidate.attribute:
        return doc.first_attribute(candidate.selector, candidate.attribute)
    text, _ = doc.first_text(candidate.selector)
    return text or None


def resolve_field(doc: ParsedDocument, candidates: Iterable[SelectorCandidate]) -> Optional[str]:
    """
    Resolve a field through an ordered cascade of candidates.

    Candidates are evaluated in order and evaluation stops at the first
    non-empty value.

    Args:
        doc: Parsed document
        candidates: Ordered selector candidates

    Returns:
        The first non-empty value, or None when every candidate is empty
    """
    for candidate in candidates:
        value = resolve_candidate(doc, candidate)
        if value:
            return value
    return None


def resolve_content(
    doc: ParsedDocument,
    selectors: Iterable[str],
    strip_selector: Optional[str] = None
) -> Tuple[str, Optional[Tag]]:
    """
    Resolve body text through an ordered list of structural selectors.

    For each selector only its first matching node is considered.

    Returns:
        Tuple of (text, matched node); ("", None) when nothing matched
    """
    for selector in selectors:
        node = doc.select_one(selector)
        if node is None:
            continue
        text = doc.node_text(node, strip_selector)
        if text:
            return text, node
    return "", None
