"""
HTTP client for fetching web pages with browser-like headers.

This module provides an async HTTP client that sends browser-identifying
headers to reduce bot blocking, bounds every request by a timeout and a
response-size ceiling, and reports failures as typed results instead of
raising. Retry policy is left to callers.
"""

import asyncio
import time
from typing import Optional, Dict
from dataclasses import dataclass, field

import httpx

from ..config.logging import get_logger, LogContext
from ..config.models import FetchSettings
from ..errors import (
    FailureKind,
    WebToolError,
    HttpStatusError,
    SizeExceededError,
    FetchTimeoutError,
    classify_http_error,
    describe_status,
)


logger = get_logger(__name__, LogContext(component="http_fetcher"))


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation."""

    url: str
    content: str = ""
    status_code: int = 0
    content_type: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    encoding: Optional[str] = None
    fetch_time_ms: int = 0
    success: bool = True
    error_type: Optional[FailureKind] = None
    error_message: Optional[str] = None


class HTTPFetcher:
    """
    Async HTTP client with browser headers, timeout and size ceiling.

    A client passed in is reused and left open; otherwise each fetch opens
    and closes its own ``httpx.AsyncClient`` so concurrent fetches share
    nothing.
    """

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize HTTP fetcher with configuration.

        Args:
            settings: Fetch settings (timeout, size ceiling, user agent)
            client: Optional shared AsyncClient
        """
        self.settings = settings or FetchSettings()
        self._client = client

    @property
    def timeout(self) -> float:
        return self.settings.timeout_seconds

    @property
    def max_bytes(self) -> int:
        return self.settings.max_content_bytes

    def get_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Build the browser header set, with caller headers layered on top.

        Args:
            extra: Additional or overriding headers

        Returns:
            Dictionary of HTTP headers
        """
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;q=0.9,"
                "image/avif,image/webp,image/apng,*/*;q=0.8,"
                "application/signed-exchange;v=b3;q=0.7"
            ),
            "Accept-Language": self.settings.accept_language,
            "Cache-Control": "no-cache",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Sec-Fetch-User": "?1",
        }
        if extra:
            headers.update(extra)
        return headers

    async def fetch(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        max_bytes: Optional[int] = None
    ) -> FetchResult:
        """
        Fetch a URL.

        Args:
            url: URL to fetch
            headers: Extra headers merged over the browser header set
            timeout: Timeout in seconds for the whole request
            max_bytes: Response-size ceiling in bytes

        Returns:
            FetchResult containing the decoded body or the failure
        """
        timeout = timeout if timeout is not None else self.timeout
        max_bytes = max_bytes if max_bytes is not None else self.max_bytes
        start_time = time.monotonic()

        if not url or not isinstance(url, str) or not url.startswith(('http://', 'https://')):
            logger.error("Invalid URL format", url=url)
            return FetchResult(
                url=url or "",
                success=False,
                error_type=FailureKind.INVALID_URL,
                error_message="Invalid URL format"
            )

        request_headers = self.get_headers(headers)
        logger.info("Starting HTTP fetch", url=url, timeout=timeout, max_bytes=max_bytes)

        try:
            result = await asyncio.wait_for(
                self._fetch_with_client(url, request_headers, timeout, max_bytes),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            error = FetchTimeoutError(f"Request timed out after {timeout:g}s", timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = classify_http_error(e, timeout)
        except WebToolError as e:
            error = e
        else:
            result.fetch_time_ms = int((time.monotonic() - start_time) * 1000)
            logger.info(
                "HTTP fetch completed successfully",
                url=result.url,
                status_code=result.status_code,
                content_type=result.content_type,
                content_length=len(result.content),
                total_time_ms=result.fetch_time_ms
            )
            return result

        fetch_time_ms = int((time.monotonic() - start_time) * 1000)
        logger.warning(
            "HTTP fetch failed",
            url=url,
            error_type=error.error_type.value,
            final_error=error.message,
            total_time_ms=fetch_time_ms
        )

        return FetchResult(
            url=url,
            status_code=getattr(error, "status_code", 0),
            fetch_time_ms=fetch_time_ms,
            success=False,
            error_type=error.error_type,
            error_message=error.message
        )

    async def _fetch_with_client(
        self,
        url: str,
        headers: Dict[str, str],
        timeout: float,
        max_bytes: int
    ) -> FetchResult:
        if self._client is not None:
            return await self._stream(self._client, url, headers, timeout, max_bytes)

        async with httpx.AsyncClient() as client:
            return await self._stream(client, url, headers, timeout, max_bytes)

    async def _stream(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: Dict[str, str],
        timeout: float,
        max_bytes: int
    ) -> FetchResult:
        """Stream the body, aborting once it grows past ``max_bytes``."""
        attempt_start = time.monotonic()

        async with client.stream(
            "GET",
            url,
            headers=headers,
            timeout=timeout,
            follow_redirects=self.settings.follow_redirects
        ) as response:
            content_type = response.headers.get("content-type")
            logger.log_http_request(
                method="GET",
                url=str(response.url),
                status_code=response.status_code,
                duration_ms=int((time.monotonic() - attempt_start) * 1000),
                success=response.is_success,
                content_type=content_type,
                redirected=str(response.url) != url
            )

            if not response.is_success:
                raise HttpStatusError(
                    response.status_code,
                    describe_status(response.status_code, response.reason_phrase)
                )

            declared_length = response.headers.get("content-length", "")
            if declared_length.isdigit() and int(declared_length) > max_bytes:
                raise SizeExceededError(max_bytes)

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > max_bytes:
                    raise SizeExceededError(max_bytes)

            encoding = response.encoding or "utf-8"
            try:
                text = bytes(body).decode(encoding, errors="replace")
            except LookupError:
                encoding = "utf-8"
                text = bytes(body).decode(encoding, errors="replace")

            return FetchResult(
                url=str(response.url),  # Final URL after redirects
                content=text,
                status_code=response.status_code,
                content_type=content_type,
                headers=dict(response.headers),
                encoding=encoding,
                success=True
            )
