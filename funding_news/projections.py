"""
Output views over one dispatch result.

All functions are pure: they take the per-source FetchResults (and the
ranked items where relevant) and build JSON-ready dicts. Error sentinels
never appear in rendered item lists; source failures show up in the
``errors`` lists instead.
"""

from datetime import datetime

from .core.models import FetchResult, NormalizedItem


def headlines_view(ranked: list[NormalizedItem], timezone: str) -> dict:
    """Primary output: ranked headlines."""
    news = [item.to_dict() for item in ranked]
    return {"news": news, "count": len(news), "timezone": timezone}


def raw_view(results: list[FetchResult], fetched_at: datetime) -> dict:
    """Unfiltered items grouped by source, with errors."""
    sources = []
    for result in results:
        items = [item.to_dict() for item in result.fetched_items]
        sources.append({
            "source": result.source_label,
            "count": len(items),
            "errors": list(result.errors),
            "items": items,
        })

    return {
        "mode": "raw",
        "fetchedAt": fetched_at.isoformat(),
        "sources": sources,
    }


def debug_view(
    results: list[FetchResult],
    ranked: list[NormalizedItem],
    timezone: str,
    fetched_at: datetime,
) -> dict:
    """Filtered output plus per-source fetch counters and errors."""
    per_source = [
        {
            "source": result.source_label,
            "fetched": len(result.fetched_items),
            "errors": list(result.errors),
        }
        for result in results
    ]
    news = [item.to_dict() for item in ranked]

    return {
        "mode": "debug",
        "fetchedAt": fetched_at.isoformat(),
        "timezone": timezone,
        "perSource": per_source,
        "news": news,
        "count": len(news),
    }


def error_view(error: str) -> dict:
    """Success-shaped empty payload for pipeline-level failures."""
    return {"news": [], "count": 0, "error": error}
