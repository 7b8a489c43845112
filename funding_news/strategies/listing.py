"""
HTML listing strategy (Donor Tracker policy updates).

The listing markup changes often, so the per-card extraction rule lives
in a separate CardExtractor that can be swapped without touching the
candidate-URL fallback logic.
"""

import re
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from funding_news.core.dates import parse_date
from funding_news.core.models import FetchResult, NormalizedItem

from .base import FetchStrategy, describe_error


@dataclass
class Card:
    """Raw fields pulled out of one listing card."""
    title: str
    internal_url: str = ""
    external_url: str = ""
    raw_date: str = ""


class CardExtractor:
    """
    Selector-based card extraction.

    Cards are repeating regions (views rows, articles, cards). Within a
    card the internal detail link is the first link whose path contains
    ``/policy-``; the original article is the first absolute link that
    leaves the listing's domain.
    """

    card_selector = ".views-row, article, .card"
    internal_link_selector = 'a[href*="/policy-"]'
    date_selector = "time[datetime]"

    def extract(self, soup: BeautifulSoup, page_url: str) -> list[Card]:
        """
        Extract cards from a parsed listing page.

        Args:
            soup: Parsed HTML
            page_url: URL the page was fetched from

        Returns:
            Cards in document order (unfiltered)
        """
        listing_host = urlparse(page_url).netloc.lower()
        cards = []

        for element in soup.select(self.card_selector):
            internal = element.select_one(self.internal_link_selector)
            internal_url = self._absolute(internal.get("href", ""), page_url) if internal else ""

            title = ""
            if internal:
                title = internal.get_text(" ", strip=True)
            if not title:
                first_link = element.find("a", href=True)
                if first_link:
                    title = first_link.get_text(" ", strip=True)

            time_tag = element.select_one(self.date_selector)

            cards.append(
                Card(
                    title=re.sub(r"\s+", " ", title).strip(),
                    internal_url=internal_url,
                    external_url=self._external_link(element, page_url, listing_host),
                    raw_date=time_tag.get("datetime", "") if time_tag else "",
                )
            )

        return cards

    def _external_link(self, element: Tag, page_url: str, listing_host: str) -> str:
        for link in element.find_all("a", href=True):
            url = self._absolute(link["href"], page_url)
            if not url:
                continue
            host = urlparse(url).netloc.lower()
            if host and not _same_site(host, listing_host):
                return url
        return ""

    @staticmethod
    def _absolute(href: str, page_url: str) -> str:
        """Resolve http(s) and root-relative links; ignore anchors, mailto, etc."""
        href = (href or "").strip()
        if href.startswith(("http://", "https://")):
            return href
        if href.startswith("/"):
            return urljoin(page_url, href)
        return ""


def _same_site(host: str, listing_host: str) -> bool:
    bare = listing_host.removeprefix("www.")
    return host == bare or host.endswith("." + bare)


class ListingStrategy(FetchStrategy):
    """Scrape policy updates from the Donor Tracker listing page."""

    SOURCE_LABEL = "Donor Tracker - Policy Updates"
    MATCH_LABEL = "DonorTracker"

    CANDIDATE_URLS = [
        "https://donortracker.org/policy_updates",
        "https://donortracker.org/policy-updates",
    ]

    def __init__(self, http_client=None, extractor: Optional[CardExtractor] = None):
        """
        Initialize listing strategy.

        Args:
            http_client: Shared HTTP client
            extractor: Card extraction rule (defaults to CardExtractor)
        """
        super().__init__(http_client=http_client)
        self.extractor = extractor or CardExtractor()

    def candidate_urls(self, source_url: str) -> list[str]:
        """Configured URL first, then the known listing locations."""
        candidates = []
        for url in [source_url, *self.CANDIDATE_URLS]:
            if url and url not in candidates:
                candidates.append(url)
        return candidates

    async def fetch(self, source_url: str, cap: int, zone: tzinfo) -> FetchResult:
        client = self._require_client()
        result = FetchResult(source_label=self.SOURCE_LABEL)

        if cap <= 0:
            return result

        for candidate in self.candidate_urls(source_url):
            try:
                response = await client.get(candidate)
                if not response.is_success:
                    result.errors.append(f"{candidate} -> HTTP {response.status_code}")
                    continue

                soup = BeautifulSoup(response.text, "lxml")
                items = self._to_items(self.extractor.extract(soup, candidate), cap, zone)
            except Exception as e:
                self.logger.warning("listing_fetch_failed", url=candidate, error=describe_error(e))
                result.errors.append(f"{candidate} -> {describe_error(e)}")
                continue

            if items:
                result.items = items
                self.logger.info("listing_fetched", url=candidate, count=len(items))
                return result

            result.errors.append(f"{candidate} -> no items matched selectors")

        return result

    def _to_items(self, cards: list[Card], cap: int, zone: tzinfo) -> list[NormalizedItem]:
        """Convert cards to items, dropping unusable and repeated cards."""
        items: list[NormalizedItem] = []
        seen_urls: set[str] = set()

        for card in cards:
            if len(items) >= cap:
                break

            url = card.internal_url or card.external_url
            if not card.title or not url or url in seen_urls:
                continue
            seen_urls.add(url)

            original_url = card.external_url if card.internal_url and card.external_url else None

            items.append(
                NormalizedItem(
                    title=card.title,
                    url=url,
                    source=self.SOURCE_LABEL,
                    published_at=parse_date(card.raw_date, zone),
                    match_text=f"{card.title} {self.MATCH_LABEL}",
                    original_url=original_url,
                )
            )

        return items
