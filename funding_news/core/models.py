"""
Data models for the headlines pipeline.

All records are created fresh per invocation and never shared between
concurrent fetches.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


NO_TITLE = "(no title)"
ERROR_SOURCE = "error"


@dataclass(frozen=True)
class SourceSpec:
    """One configured source with its per-source item cap."""
    url: str
    cap: int = 10


@dataclass(frozen=True)
class NormalizedItem:
    """
    Canonical cross-source news record.

    match_text is only used for keyword classification and never
    rendered. It is empty for error sentinels, which are marked by
    is_error and are the only items allowed an empty url.
    """

    title: str
    url: str
    source: str
    published_at: Optional[datetime] = None
    match_text: str = ""
    original_url: Optional[str] = None
    is_error: bool = False

    @classmethod
    def error_sentinel(cls, url: str) -> "NormalizedItem":
        """Placeholder item recorded for a source that failed to fetch."""
        return cls(
            title=f"Failed to fetch: {url}",
            url="",
            source=ERROR_SOURCE,
            is_error=True,
        )

    @property
    def published_iso(self) -> Optional[str]:
        return self.published_at.isoformat() if self.published_at else None

    def to_dict(self) -> dict:
        """Convert to the public output shape."""
        data = {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "published": self.published_iso,
        }
        if self.original_url:
            data["originalUrl"] = self.original_url
        return data


@dataclass
class FetchResult:
    """Outcome of fetching one source: its items and any recorded errors."""

    source_label: str
    items: list[NormalizedItem] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, url: str, errors: list[str]) -> "FetchResult":
        return cls(
            source_label=url,
            items=[NormalizedItem.error_sentinel(url)],
            errors=list(errors),
        )

    @property
    def fetched_items(self) -> list[NormalizedItem]:
        """Items excluding error sentinels."""
        return [item for item in self.items if not item.is_error]
