"""
JSON report API strategy (ReliefWeb).

Requests the newest reports, sorted by date, in a single call.
"""

from datetime import tzinfo
from typing import Optional

from funding_news.core.dates import parse_date
from funding_news.core.models import FetchResult, NormalizedItem, NO_TITLE

from .base import FetchStrategy


class ReportApiStrategy(FetchStrategy):
    """Fetch the most recent reports from the ReliefWeb API."""

    ENDPOINT = "https://api.reliefweb.int/v1/reports"
    APP_NAME = "news-dashboard"
    SOURCE_LABEL = "ReliefWeb Updates"
    MATCH_LABEL = "ReliefWeb"

    # Preference order for the publish date
    DATE_FIELDS = ("created", "original")

    async def fetch(self, source_url: str, cap: int, zone: tzinfo) -> FetchResult:
        client = self._require_client()
        result = FetchResult(source_label=self.SOURCE_LABEL)

        params = {
            "appname": self.APP_NAME,
            "profile": "simple",
            "sort[]": "date:desc",
            "limit": cap,
        }
        response = await client.get(
            self.ENDPOINT,
            params=params,
            headers={"Accept": "application/json"},
        )

        if not response.is_success:
            self.logger.warning(
                "report_api_http_error",
                url=source_url,
                status=response.status_code,
            )
            result.errors.append(f"HTTP {response.status_code}")
            return result

        payload = response.json()
        for record in (payload.get("data") or [])[:cap]:
            item = self._to_item(record, zone)
            if item is None:
                continue
            result.items.append(item)

        self.logger.info("report_api_fetched", count=len(result.items))
        return result

    def _to_item(self, record: dict, zone: tzinfo) -> Optional[NormalizedItem]:
        """Map one API record to a NormalizedItem; None when it has no url."""
        fields = record.get("fields") or {}
        url = fields.get("url")
        if not url:
            self.logger.debug("report_skipped", reason="no url")
            return None

        title = fields.get("title") or NO_TITLE
        dates = fields.get("date") or {}

        raw_date = next(
            (dates[name] for name in self.DATE_FIELDS if dates.get(name)),
            None,
        )

        return NormalizedItem(
            title=title,
            url=url,
            source=self.SOURCE_LABEL,
            published_at=parse_date(raw_date, zone),
            match_text=f"{title} {self.MATCH_LABEL}",
        )
