"""
Async HTTP client shared by all fetch strategies.

Built on httpx with:
- Browser-like default headers (reduces bot-blocking)
- A bounded total timeout per request
- Redirect following

No retries and no caching: fallback between candidate URLs is the
strategies' job and every invocation sees live data.
"""

import asyncio
from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/125 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "application/rss+xml;q=0.9,*/*;q=0.8"
    ),
    "Accept-Language": "en-GB,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Upgrade-Insecure-Requests": "1",
}

DEFAULT_TIMEOUT = 20.0


class HttpClient:
    """
    Async HTTP client with per-request timeouts.

    Usage:
        async with HttpClient() as client:
            response = await client.get("https://example.com/feed")
            if response.is_success:
                body = response.text
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Total time budget per request in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.timeout = timeout
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers=BROWSER_HEADERS,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        GET request bounded by the client timeout.

        Non-2xx responses are returned, not raised; callers inspect
        ``response.is_success``.

        Args:
            url: URL to fetch
            **kwargs: Additional httpx arguments (params, headers)

        Returns:
            httpx.Response object

        Raises:
            asyncio.TimeoutError: If the request exceeds the timeout
            httpx.HTTPError: On transport failures
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        logger.debug("http_get", url=url)

        response = await asyncio.wait_for(
            self._client.get(url, **kwargs),
            timeout=self.timeout,
        )

        logger.debug("http_response", url=url, status=response.status_code)
        return response

    async def get_text(self, url: str, **kwargs) -> str:
        """GET request returning text content, raising on non-2xx."""
        response = await self.get(url, **kwargs)
        response.raise_for_status()
        return response.text
