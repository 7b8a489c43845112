"""
Relevance filtering and ranking.

An item is kept when it is funding-related and reasonably fresh, or
region-related and provably fresh:

    (is_funding and funding_eligible) or (is_regional and region_eligible)

Funding items get a fixed 7-day window and are kept even without a
date; regional items must carry a date inside the configured window.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .core.keywords import DEFAULT_REGION_WORDS, FUNDING_TRIGGERS, match_any
from .core.models import NormalizedItem

FUNDING_WINDOW_DAYS = 7


def is_within_days(dt: Optional[datetime], days: int, now: datetime) -> bool:
    """True when dt is not older than ``days`` before ``now``."""
    if dt is None:
        return False
    return dt >= now - timedelta(days=days)


@dataclass(frozen=True)
class Classification:
    is_funding: bool
    is_regional: bool
    funding_eligible: bool
    region_eligible: bool

    @property
    def included(self) -> bool:
        return (self.is_funding and self.funding_eligible) or (
            self.is_regional and self.region_eligible
        )


class RelevanceFilter:
    """
    Classify items and apply the recency windows.

    Args:
        max_age_days: Window for region-relevant items
        regions: Region keywords (defaults to DEFAULT_REGION_WORDS)
        now: Evaluation instant (aware datetime)
    """

    def __init__(
        self,
        max_age_days: int,
        now: datetime,
        regions: Optional[list[str]] = None,
    ):
        self.max_age_days = max_age_days
        self.regions = regions or DEFAULT_REGION_WORDS
        self.now = now

    def classify(self, item: NormalizedItem) -> Classification:
        text = item.match_text.lower()
        return Classification(
            is_funding=match_any(text, FUNDING_TRIGGERS),
            is_regional=match_any(text, self.regions),
            funding_eligible=(
                item.published_at is None
                or is_within_days(item.published_at, FUNDING_WINDOW_DAYS, self.now)
            ),
            region_eligible=is_within_days(item.published_at, self.max_age_days, self.now),
        )

    def accepts(self, item: NormalizedItem) -> bool:
        if item.is_error:
            return False
        return self.classify(item).included

    def apply(self, items: list[NormalizedItem]) -> list[NormalizedItem]:
        """Keep accepted items, preserving input order."""
        return [item for item in items if self.accepts(item)]


def rank_items(items: list[NormalizedItem]) -> list[NormalizedItem]:
    """
    Order items newest first; undated items go last in their input order.

    Python's sort is stable (also with reverse=True), so equal
    timestamps keep their input order.
    """
    dated = [item for item in items if item.published_at is not None]
    undated = [item for item in items if item.published_at is None]
    dated.sort(key=lambda item: item.published_at, reverse=True)
    return dated + undated


def filter_and_rank(
    items: list[NormalizedItem],
    max_age_days: int,
    now: datetime,
    regions: Optional[list[str]] = None,
) -> list[NormalizedItem]:
    """Convenience wrapper: RelevanceFilter.apply followed by rank_items."""
    relevance = RelevanceFilter(max_age_days=max_age_days, now=now, regions=regions)
    return rank_items(relevance.apply(items))
