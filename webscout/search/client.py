"""Brave Search API client for the web, news, videos and images verticals."""

import asyncio
import os
from typing import Any, Dict, Optional, Union
from urllib.parse import urljoin

import httpx

from .models import SearchType, SafeSearch, TimeRange, SearchResponse
from .normalizer import normalize_results, extract_related_queries
from ..config.logging import get_logger, LogContext
from ..config.models import SearchSettings
from ..errors import (
    FailureKind,
    WebToolError,
    FetchTimeoutError,
    HttpStatusError,
    MissingCredentialError,
    classify_http_error,
    describe_status,
)


logger = get_logger(__name__, LogContext(component="search_client"))

MAX_RESULTS_CAP = 20


class BraveSearchClient:
    """Runs one query against one vertical and normalizes the response."""

    _ENDPOINTS: Dict[SearchType, str] = {
        SearchType.WEB: "web/search",
        SearchType.NEWS: "news/search",
        SearchType.VIDEOS: "videos/search",
        SearchType.IMAGES: "images/search",
    }

    def __init__(
        self,
        settings: Optional[SearchSettings] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.settings = settings or SearchSettings()
        self._client = client

    def get_api_key(self) -> Optional[str]:
        """API key from settings, else from the environment at call time."""
        return self.settings.api_key or os.environ.get(self.settings.api_key_env) or None

    def clamp_count(self, num_results: int) -> int:
        upper = min(self.settings.max_results, MAX_RESULTS_CAP)
        return max(1, min(int(num_results), upper))

    def endpoint(self, search_type: SearchType) -> str:
        base_url = self.settings.base_url
        if not base_url.endswith("/"):
            base_url += "/"
        return urljoin(base_url, self._ENDPOINTS[search_type])

    def build_params(
        self,
        query: str,
        search_type: SearchType,
        num_results: int,
        language: Optional[str],
        country: Optional[str],
        safe_search: SafeSearch,
        time_range: TimeRange
    ) -> Dict[str, Any]:
        """
        Build upstream query parameters.

        ``search_lang`` is only sent for web searches; ``country`` falls back
        to the language code. Codes that are not two letters are ignored.
        """
        params: Dict[str, Any] = {
            "q": query,
            "count": self.clamp_count(num_results),
        }

        if search_type == SearchType.WEB and language and len(language) == 2:
            params["search_lang"] = language.lower()

        if country and len(country) == 2:
            params["country"] = country.lower()
        elif language and len(language) == 2:
            params["country"] = language.lower()

        params["safesearch"] = SafeSearch(safe_search).value

        freshness = TimeRange(time_range).freshness
        if freshness:
            params["freshness"] = freshness

        params["spellcheck"] = 1
        return params

    async def search(
        self,
        query: str,
        search_type: Union[SearchType, str] = SearchType.WEB,
        num_results: int = 30,
        language: Optional[str] = "ja",
        country: Optional[str] = None,
        safe_search: Union[SafeSearch, str] = SafeSearch.MODERATE,
        time_range: Union[TimeRange, str] = TimeRange.ALL
    ) -> SearchResponse:
        """
        Search one vertical.

        Never raises for transport or credential problems; those come back
        as a failed SearchResponse with ``error_type`` set.
        """
        search_type = SearchType(search_type)
        name = search_type.display_name

        api_key = self.get_api_key()
        if not api_key:
            error = MissingCredentialError(self.settings.api_key_env)
            logger.error("Search API key not configured", search_type=search_type.value)
            return SearchResponse(
                success=False,
                message=error.message,
                search_type=search_type,
                error_type=error.error_type
            )

        url = self.endpoint(search_type)
        params = self.build_params(
            query, search_type, num_results, language, country,
            SafeSearch(safe_search), TimeRange(time_range)
        )
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": api_key,
        }
        logger.info(
            "Starting search",
            search_type=search_type.value,
            endpoint=url,
            params={k: v for k, v in params.items() if k != "q"}
        )

        try:
            payload = await self._request(url, params, headers)
        except WebToolError as e:
            logger.warning(
                "Search request failed",
                search_type=search_type.value,
                error_type=e.error_type.value,
                error_message=e.message
            )
            return SearchResponse(
                success=False,
                message=f"{name.capitalize()} search failed: {e.message}",
                search_type=search_type,
                error_type=FailureKind.SEARCH_ERROR
            )

        results = normalize_results(search_type, payload)
        related_queries = extract_related_queries(payload)

        if not results:
            logger.info(
                "Search returned no results",
                search_type=search_type.value,
                payload_keys=list(payload.keys()) if isinstance(payload, dict) else None
            )
            return SearchResponse(
                success=False,
                message=f"No {name} results found",
                search_type=search_type,
                related_queries=related_queries or None,
                error_type=FailureKind.NO_RESULTS
            )

        logger.info("Search completed", search_type=search_type.value, result_count=len(results))
        return SearchResponse(
            success=True,
            message=f"Retrieved {len(results)} {name} results",
            search_type=search_type,
            results=results,
            related_queries=related_queries or None
        )

    async def _request(self, url: str, params: Dict[str, Any], headers: Dict[str, str]) -> Any:
        timeout = self.settings.timeout_seconds
        try:
            return await asyncio.wait_for(self._get_json(url, params, headers), timeout=timeout)
        except asyncio.TimeoutError:
            raise FetchTimeoutError(f"Request timed out after {timeout:g}s", timeout)
        except httpx.HTTPStatusError as e:
            detail = self._log_upstream_error(e.response)
            status_code = e.response.status_code
            message = describe_status(status_code, e.response.reason_phrase)
            if detail:
                message = f"{message} - {detail}"
            raise HttpStatusError(status_code, message) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise classify_http_error(e, timeout) from e

    async def _get_json(self, url: str, params: Dict[str, Any], headers: Dict[str, str]) -> Any:
        if self._client is not None:
            response = await self._client.get(url, params=params, headers=headers, timeout=self.settings.timeout_seconds)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, params=params, headers=headers, timeout=self.settings.timeout_seconds)

        logger.info("Search response received", status_code=response.status_code)
        response.raise_for_status()

        try:
            return response.json()
        except ValueError:
            # An unreadable body is handled like an unknown schema: no results
            logger.warning("Search response is not JSON", content_type=response.headers.get("content-type"))
            return None

    @staticmethod
    def _log_upstream_error(response: httpx.Response) -> Optional[str]:
        """
        Log the upstream error body, including validation details.

        Returns:
            The upstream ``error.detail`` message, if any
        """
        try:
            data = response.json()
        except ValueError:
            logger.error("Search API error", status_code=response.status_code, body=response.text[:500])
            return None

        error = data.get("error") if isinstance(data, dict) else None
        if not isinstance(error, dict):
            error = {}
        meta = error.get("meta")
        logger.error(
            "Search API error",
            status_code=response.status_code,
            error_data=data,
            validation_errors=meta.get("errors") if isinstance(meta, dict) else None
        )

        detail = error.get("detail")
        return detail if isinstance(detail, str) and detail else None
