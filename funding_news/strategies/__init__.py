"""
Fetch strategies for news sources.

Strategies handle retrieval and normalization of a single source; the
dispatcher routes sources to them and runs them concurrently.

Strategies:
- ReportApiStrategy: JSON report API (ReliefWeb)
- ListingStrategy: HTML listing scraper (Donor Tracker)
- FeedStrategy: RSS/Atom feeds with fallback URLs (default)
"""

from .base import FetchError, FetchStrategy
from .dispatcher import FetchDispatcher, host_contains
from .feed import FeedStrategy
from .listing import CardExtractor, ListingStrategy
from .report_api import ReportApiStrategy

__all__ = [
    "FetchError",
    "FetchStrategy",
    "FetchDispatcher",
    "host_contains",
    "FeedStrategy",
    "CardExtractor",
    "ListingStrategy",
    "ReportApiStrategy",
]
