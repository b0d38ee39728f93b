"""
Normalization of raw search API payloads.

Each vertical has its own payload shape and its own mapping function. A
mapper returns None for an item that lacks the required fields, and the
item is skipped; one malformed item never fails the batch. An unrecognized
payload simply yields no results.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .models import (
    SearchType,
    SearchResult,
    WebResult,
    NewsResult,
    VideoResult,
    ImageResult,
)


logger = logging.getLogger(__name__)


def _string(item: Mapping[str, Any], *keys: str) -> Optional[str]:
    """First non-empty string value among ``keys``."""
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _nested(item: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = item.get(key)
    return value if isinstance(value, Mapping) else {}


def _integer(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _thumbnail(item: Mapping[str, Any]) -> Optional[str]:
    """Thumbnail as a nested object's url, or a bare string."""
    thumbnail = item.get("thumbnail")
    if isinstance(thumbnail, Mapping):
        url = thumbnail.get("url")
        if isinstance(url, str) and url:
            return url
    elif isinstance(thumbnail, str) and thumbnail:
        return thumbnail
    return None


def normalize_web_item(item: Mapping[str, Any]) -> Optional[WebResult]:
    title = _string(item, "title")
    url = _string(item, "url")
    if not title or not url:
        return None

    snippet = _string(item, "description", "snippet") or ""
    return WebResult(title=title, url=url, snippet=snippet, description=snippet)


def normalize_news_item(item: Mapping[str, Any]) -> Optional[NewsResult]:
    title = _string(item, "title")
    url = _string(item, "url")
    if not title or not url:
        return None

    return NewsResult(
        title=title,
        url=url,
        description=_string(item, "description") or "",
        publish_date=_string(item, "published_time", "publishTime"),
        source=_string(item, "source")
    )


def normalize_video_item(item: Mapping[str, Any]) -> Optional[VideoResult]:
    title = _string(item, "title")
    url = _string(item, "url")
    if not title or not url:
        return None

    video = _nested(item, "video")
    return VideoResult(
        title=title,
        url=url,
        description=_string(item, "description") or "",
        thumbnail_url=_thumbnail(item),
        duration=_string(item, "duration") or _string(video, "duration"),
        provider=_string(item, "provider") or _string(video, "publisher")
    )


def normalize_image_item(item: Mapping[str, Any]) -> Optional[ImageResult]:
    title = _string(item, "title", "alt")
    url = _string(item, "url")
    if not title or not url:
        return None

    thumbnail_url = _thumbnail(item) or _string(item, "image", "src") or url
    return ImageResult(
        title=title,
        url=url,
        thumbnail_url=thumbnail_url,
        width=_integer(item.get("width")),
        height=_integer(item.get("height"))
    )


_ITEM_NORMALIZERS: Dict[SearchType, Callable[[Mapping[str, Any]], Optional[SearchResult]]] = {
    SearchType.WEB: normalize_web_item,
    SearchType.NEWS: normalize_news_item,
    SearchType.VIDEOS: normalize_video_item,
    SearchType.IMAGES: normalize_image_item,
}


def _raw_items(search_type: SearchType, payload: Mapping[str, Any]) -> List[Any]:
    # Web results are nested under "web"; the other verticals are top level
    container = _nested(payload, "web") if search_type == SearchType.WEB else payload
    items = container.get("results")
    return items if isinstance(items, list) else []


def normalize_results(search_type: SearchType, payload: Any) -> List[SearchResult]:
    """
    Map a raw payload of one vertical to typed results.

    Args:
        search_type: Vertical the payload belongs to
        payload: Decoded JSON response body

    Returns:
        Results in upstream order, malformed items skipped
    """
    if not isinstance(payload, Mapping):
        logger.warning("Unrecognized %s payload of type %s", search_type.value, type(payload).__name__)
        return []

    normalize_item = _ITEM_NORMALIZERS[SearchType(search_type)]
    results = []
    skipped = 0

    for item in _raw_items(SearchType(search_type), payload):
        result = normalize_item(item) if isinstance(item, Mapping) else None
        if result is None:
            skipped += 1
            continue
        results.append(result)

    if skipped:
        logger.debug("Skipped %d malformed %s items", skipped, search_type.value)

    return results


def extract_related_queries(payload: Any) -> List[str]:
    """Related queries from ``query.related``, in upstream order."""
    if not isinstance(payload, Mapping):
        return []
    related = _nested(payload, "query").get("related")
    if not isinstance(related, list):
        return []
    return [query for query in related if isinstance(query, str)]
