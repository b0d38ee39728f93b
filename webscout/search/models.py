"""
Search result models.

One result type per search vertical, all sharing the ``title``/``url``
base. A SearchResponse holds results of a single vertical only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..errors import FailureKind
from ..postprocess.formatter import format_result


class SearchType(str, Enum):
    WEB = "web"
    NEWS = "news"
    VIDEOS = "videos"
    IMAGES = "images"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    SearchType.WEB: "web",
    SearchType.NEWS: "news",
    SearchType.VIDEOS: "video",
    SearchType.IMAGES: "image",
}


class SafeSearch(str, Enum):
    STRICT = "strict"
    MODERATE = "moderate"
    OFF = "off"


class TimeRange(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @property
    def freshness(self) -> Optional[str]:
        """Upstream freshness token; None means the parameter is omitted."""
        return _FRESHNESS.get(self)


_FRESHNESS = {
    TimeRange.DAY: "pd",
    TimeRange.WEEK: "pw",
    TimeRange.MONTH: "pm",
    TimeRange.YEAR: "py",
}


@dataclass
class SearchResult:
    title: str
    url: str


@dataclass
class WebResult(SearchResult):
    snippet: str = ""
    description: str = ""


@dataclass
class NewsResult(SearchResult):
    description: str = ""
    publish_date: Optional[str] = None
    source: Optional[str] = None


@dataclass
class VideoResult(SearchResult):
    description: str = ""
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = None
    provider: Optional[str] = None


@dataclass
class ImageResult(SearchResult):
    thumbnail_url: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class SearchResponse:
    """
    Outcome of one search query.

    ``error_type`` tells the two kinds of failure apart: NO_RESULTS for a
    query that went through but produced nothing usable, and the transport
    or credential kind otherwise. ``results`` is only set on success.
    """

    success: bool
    message: str
    search_type: SearchType
    results: Optional[List[SearchResult]] = None
    related_queries: Optional[List[str]] = None
    error_type: Optional[FailureKind] = None

    def to_dict(self) -> dict:
        return format_result(self)
