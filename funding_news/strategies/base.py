"""
Base class for fetch strategies.

A strategy retrieves one source and normalizes its entries into
NormalizedItem records. Each implementation isolates its own failure
modes: expected problems (HTTP error status, empty pages) are recorded
as error strings on the FetchResult, anything else propagates to the
dispatcher which converts it into an error sentinel.
"""

from abc import ABC, abstractmethod
from datetime import tzinfo
from typing import Optional

import structlog

from funding_news.core.http_client import HttpClient
from funding_news.core.models import FetchResult

logger = structlog.get_logger(__name__)


def describe_error(error: BaseException) -> str:
    """Readable error text; timeouts and some httpx errors have no message."""
    return str(error) or type(error).__name__


class FetchError(Exception):
    """Raised when a strategy exhausts every way of fetching a source."""

    def __init__(self, url: str, errors: list[str]):
        self.url = url
        self.errors = list(errors)
        detail = "; ".join(self.errors) if self.errors else "no candidates"
        super().__init__(f"All candidates failed for {url}: {detail}")


class FetchStrategy(ABC):
    """
    Abstract base class for fetch strategies.

    Variants:
    - ReportApiStrategy: JSON report API
    - ListingStrategy: HTML listing page scraper
    - FeedStrategy: RSS/Atom feed reader with fallback URLs
    """

    def __init__(self, http_client: Optional[HttpClient] = None):
        """
        Initialize strategy.

        Args:
            http_client: Shared HTTP client (creates own if not provided)
        """
        self.http_client = http_client
        self._owns_client = http_client is None
        self.logger = logger.bind(strategy=self.__class__.__name__)

    async def __aenter__(self) -> "FetchStrategy":
        """Enter async context."""
        if self._owns_client:
            self.http_client = HttpClient()
            await self.http_client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._owns_client and self.http_client:
            await self.http_client.__aexit__(exc_type, exc_val, exc_tb)

    @abstractmethod
    async def fetch(self, source_url: str, cap: int, zone: tzinfo) -> FetchResult:
        """
        Fetch and normalize up to ``cap`` items from one source.

        Args:
            source_url: Configured source URL
            cap: Maximum number of items to return
            zone: Target timezone for published dates

        Returns:
            FetchResult with at most ``cap`` items
        """
        pass

    def _require_client(self) -> HttpClient:
        if not self.http_client:
            raise RuntimeError("Strategy not initialized. Use 'async with' context.")
        return self.http_client
