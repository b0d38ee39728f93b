"""
Tool entry points for webscout.

This module exposes the three operations called by the agent layer
(article extraction, page scraping and search) and a dispatcher that
validates raw tool-call arguments before running the matching operation.
Every operation returns a plain ``{success, message, ...}`` dictionary;
failures are reported in that structure and never raised to the caller.
"""

import json
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from .config.logging import get_logger, configure_logging, LogContext
from .config.manager import get_system_config
from .config.models import SystemConfig
from .scraper.fetcher import HTTPFetcher
from .scraper.extractor import ArticleExtractor
from .scraper.scraper import PageScraper, DEFAULT_TIMEOUT_MS
from .search.client import BraveSearchClient
from .search.models import SearchType, SafeSearch, TimeRange


logger = get_logger(__name__, LogContext(component="handler"))

TOOL_NEWS_EXTRACTOR = "news-extractor"
TOOL_WEB_SCRAPER = "web-scraper"
TOOL_WEB_SEARCH = "web-search"

_logging_configured = False


class HandlerError(Exception):
    """Custom exception for handler-level errors."""

    def __init__(self, message: str, error_type: str = "HANDLER_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_type = error_type


def setup_logging(config: SystemConfig) -> None:
    """
    Install log handlers from the configuration, once per process.

    With logging disabled the host application's logging setup is left
    untouched.
    """
    global _logging_configured
    if _logging_configured or not config.enable_logging:
        return
    configure_logging(config.log_level, config.enable_structured_logging)
    _logging_configured = True


async def extract_article(
    url: str,
    extract_images: bool = False,
    config: Optional[SystemConfig] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    Extract a news article.

    Returns:
        ``{success, message, article?}``
    """
    config = config or get_system_config()
    extractor = ArticleExtractor(HTTPFetcher(config.fetch_settings, client=client))

    with logger.timed_operation("extract_article", url=url):
        result = await extractor.extract_article(url, extract_images)

    return result.to_dict()


async def scrape_page(
    url: str,
    selector: Optional[str] = None,
    extract_links: bool = False,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    config: Optional[SystemConfig] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    Scrape a web page.

    Returns:
        ``{success, message, content?, title?, links?, metadata?}``
    """
    config = config or get_system_config()
    scraper = PageScraper(HTTPFetcher(config.fetch_settings, client=client))

    with logger.timed_operation("scrape_page", url=url):
        result = await scraper.scrape_page(url, selector, extract_links, timeout_ms)

    return result.to_dict()


async def search(
    query: str,
    search_type: str = "web",
    num_results: int = 30,
    language: Optional[str] = "ja",
    country: Optional[str] = None,
    safe_search: str = "moderate",
    time_range: str = "all",
    config: Optional[SystemConfig] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    Search one vertical of the Brave Search API.

    Returns:
        ``{success, message, searchType, results?, relatedQueries?, errorType?}``
    """
    config = config or get_system_config()
    search_client = BraveSearchClient(config.search_settings, client=client)

    with logger.timed_operation("search", search_type=search_type):
        response = await search_client.search(
            query,
            search_type=search_type,
            num_results=num_results,
            language=language,
            country=country,
            safe_search=safe_search,
            time_range=time_range
        )

    return response.to_dict()


def parse_bool(name: str, value: Any, default: bool) -> bool:
    """Coerce a tool argument to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(value, (int, float)):
        return bool(value)
    raise HandlerError(f"Argument '{name}' must be boolean", "VALIDATION_ERROR")


def parse_int(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise HandlerError(f"Argument '{name}' must be a number", "VALIDATION_ERROR")
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise HandlerError(f"Argument '{name}' must be a number", "VALIDATION_ERROR")


def parse_string(name: str, value: Any, required: bool = False, default: Optional[str] = None) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise HandlerError(f"Missing required argument: {name}", "VALIDATION_ERROR")
        return default
    if not isinstance(value, str):
        raise HandlerError(f"Argument '{name}' must be a string", "VALIDATION_ERROR")
    return value.strip()


def parse_choice(name: str, value: Any, choices: type, default: str) -> str:
    value = parse_string(name, value, default=default)
    allowed = [choice.value for choice in choices]
    if value not in allowed:
        raise HandlerError(
            f"Argument '{name}' must be one of {', '.join(allowed)}",
            "VALIDATION_ERROR"
        )
    return value


def parse_tool_arguments(tool: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate raw tool arguments and apply defaults.

    Args:
        tool: Tool id
        arguments: Raw arguments with camelCase keys

    Returns:
        Keyword arguments for the matching operation

    Raises:
        HandlerError: If the tool is unknown or an argument is invalid
    """
    if not isinstance(arguments, dict):
        raise HandlerError("Tool arguments must be an object", "VALIDATION_ERROR")

    if tool == TOOL_NEWS_EXTRACTOR:
        return {
            "url": parse_string("url", arguments.get("url"), required=True),
            "extract_images": parse_bool("extractImages", arguments.get("extractImages"), False),
        }

    if tool == TOOL_WEB_SCRAPER:
        timeout_ms = parse_int("timeout", arguments.get("timeout"), DEFAULT_TIMEOUT_MS)
        if timeout_ms <= 0:
            raise HandlerError("Argument 'timeout' must be positive", "VALIDATION_ERROR")
        return {
            "url": parse_string("url", arguments.get("url"), required=True),
            "selector": parse_string("selector", arguments.get("selector")),
            "extract_links": parse_bool("extractLinks", arguments.get("extractLinks"), False),
            "timeout_ms": timeout_ms,
        }

    if tool == TOOL_WEB_SEARCH:
        return {
            "query": parse_string("query", arguments.get("query"), required=True),
            "search_type": parse_choice("searchType", arguments.get("searchType"), SearchType, "web"),
            "num_results": parse_int("numResults", arguments.get("numResults"), 30),
            "language": parse_string("language", arguments.get("language"), default="ja"),
            "country": parse_string("country", arguments.get("country")),
            "safe_search": parse_choice("safeSearch", arguments.get("safeSearch"), SafeSearch, "moderate"),
            "time_range": parse_choice("timeRange", arguments.get("timeRange"), TimeRange, "all"),
        }

    raise HandlerError(f"Unknown tool: {tool}", "UNKNOWN_TOOL")


_TOOLS: Dict[str, Callable[..., Awaitable[Dict[str, Any]]]] = {
    TOOL_NEWS_EXTRACTOR: extract_article,
    TOOL_WEB_SCRAPER: scrape_page,
    TOOL_WEB_SEARCH: search,
}


def parse_tool_call(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse a tool-call event of the form ``{"tool": ..., "arguments": ...}``.

    ``arguments`` may also be a JSON encoded string.

    Raises:
        HandlerError: If the event is malformed
    """
    if not isinstance(event, dict):
        raise HandlerError("Tool call must be an object", "VALIDATION_ERROR")

    tool = event.get("tool")
    if not isinstance(tool, str) or not tool:
        raise HandlerError("Missing required field: tool", "VALIDATION_ERROR")

    arguments = event.get("arguments", {})
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as e:
            raise HandlerError(f"Invalid JSON in tool arguments: {e}", "VALIDATION_ERROR")

    return {"tool": tool, "arguments": parse_tool_arguments(tool, arguments or {})}


async def handle_tool_call(
    event: Dict[str, Any],
    config: Optional[SystemConfig] = None,
    client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    """
    Validate and dispatch a tool call.

    Args:
        event: ``{"tool": <tool id>, "arguments": {...}}``
        config: Optional configuration; the global one is used otherwise
        client: Optional shared AsyncClient for outbound requests

    Returns:
        The operation's result dictionary, or a failure dictionary with
        ``errorType`` when the call itself is invalid
    """
    request_id = event.get("request_id") if isinstance(event, dict) else None
    request_id = request_id or f"req_{uuid.uuid4().hex[:12]}"
    config = config or get_system_config()
    setup_logging(config)
    log = logger.bind(request_id=request_id)

    try:
        call = parse_tool_call(event)
    except HandlerError as e:
        log.warning("Rejected tool call", error_type=e.error_type, error_message=e.message)
        return {"success": False, "message": e.message, "errorType": e.error_type}

    log = log.bind(tool=call["tool"])
    log.info("Dispatching tool call")

    try:
        return await _TOOLS[call["tool"]](**call["arguments"], config=config, client=client)
    except Exception as e:
        log.error("Unexpected error in tool call", error=e)
        return {
            "success": False,
            "message": f"Internal error: {e}",
            "errorType": "INTERNAL_ERROR"
        }
