"""
Concurrent fetch dispatcher.

Routes each configured source to a strategy through an ordered list of
(predicate, strategy) routes, runs every source concurrently and
guarantees exactly one FetchResult per source, in input order.
"""

import asyncio
from datetime import tzinfo
from typing import Callable, Optional
from urllib.parse import urlparse

import structlog

from funding_news.core.http_client import HttpClient
from funding_news.core.models import FetchResult, SourceSpec

from .base import FetchError, FetchStrategy, describe_error
from .feed import FeedStrategy
from .listing import ListingStrategy
from .report_api import ReportApiStrategy

logger = structlog.get_logger(__name__)


Route = tuple[Callable[[str], bool], FetchStrategy]


def host_contains(fragment: str) -> Callable[[str], bool]:
    """Predicate matching URLs whose host contains ``fragment``."""
    def predicate(url: str) -> bool:
        return fragment in (urlparse(url).hostname or "")
    return predicate


def default_routes(http_client: HttpClient) -> list[Route]:
    """Report API, then listing page; everything else is a feed."""
    return [
        (host_contains("reliefweb.int"), ReportApiStrategy(http_client=http_client)),
        (host_contains("donortracker.org"), ListingStrategy(http_client=http_client)),
    ]


class FetchDispatcher:
    """
    Dispatch sources to fetch strategies.

    Usage:
        async with HttpClient() as client:
            dispatcher = FetchDispatcher(client)
            results = await dispatcher.dispatch(sources, zone)
    """

    def __init__(
        self,
        http_client: HttpClient,
        routes: Optional[list[Route]] = None,
        default: Optional[FetchStrategy] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            http_client: Shared HTTP client (must already be entered)
            routes: Ordered (predicate, strategy) pairs; first match wins
            default: Strategy used when no route matches
        """
        self.http_client = http_client
        self.routes = routes if routes is not None else default_routes(http_client)
        self.default = default or FeedStrategy(http_client=http_client)

    def select(self, url: str) -> FetchStrategy:
        """Pick the strategy for a source URL."""
        for predicate, strategy in self.routes:
            if predicate(url):
                return strategy
        return self.default

    async def dispatch(self, sources: list[SourceSpec], zone: tzinfo) -> list[FetchResult]:
        """
        Fetch all sources concurrently.

        Never raises: a failing source yields a FetchResult holding a
        single error sentinel.

        Args:
            sources: Sources in output order
            zone: Target timezone for published dates

        Returns:
            One FetchResult per source, result[i] for sources[i]
        """
        logger.info("dispatch_started", sources=len(sources))

        results = await asyncio.gather(
            *(self._fetch_one(source, zone) for source in sources)
        )

        logger.info(
            "dispatch_complete",
            sources=len(results),
            items=sum(len(r.fetched_items) for r in results),
            failed=sum(1 for r in results if r.errors),
        )
        return list(results)

    async def _fetch_one(self, source: SourceSpec, zone: tzinfo) -> FetchResult:
        try:
            strategy = self.select(source.url)
            result = await strategy.fetch(source.url, source.cap, zone)
            result.items = result.items[:source.cap]
            return result
        except FetchError as e:
            logger.warning("source_failed", url=source.url, errors=e.errors)
            return FetchResult.failed(source.url, e.errors or [str(e)])
        except Exception as e:
            logger.error("source_failed", url=source.url, error=describe_error(e))
            return FetchResult.failed(source.url, [describe_error(e)])
