"""
Search module for webscout.

This module runs queries against the Brave Search API and normalizes the
four vertical-specific response shapes into typed results.
"""

from .models import (
    SearchType,
    SafeSearch,
    TimeRange,
    SearchResult,
    WebResult,
    NewsResult,
    VideoResult,
    ImageResult,
    SearchResponse
)
from .normalizer import normalize_results, extract_related_queries
from .client import BraveSearchClient

__all__ = [
    'SearchType',
    'SafeSearch',
    'TimeRange',
    'SearchResult',
    'WebResult',
    'NewsResult',
    'VideoResult',
    'ImageResult',
    'SearchResponse',
    'normalize_results',
    'extract_related_queries',
    'BraveSearchClient'
]
