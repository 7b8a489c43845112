"""
Pipeline orchestrator for funding headlines.

Coordinates:
- Configuration loading (file or URL)
- Concurrent dispatch to fetch strategies
- Relevance filtering and ranking
- Output projection (headlines, raw, debug)

Pipeline-level failures never escape run(); they become a
success-shaped empty payload carrying the error message.
"""

from datetime import datetime, timezone
from typing import Optional

import httpx
import structlog

from . import BUILD, __version__
from .config.loader import HeadlinesConfig, load_config, load_config_from_url
from .core.dates import resolve_zone
from .core.http_client import DEFAULT_TIMEOUT, HttpClient
from .core.models import FetchResult
from .projections import debug_view, error_view, headlines_view, raw_view
from .relevance import filter_and_rank
from .strategies.dispatcher import FetchDispatcher

logger = structlog.get_logger(__name__)


MODES = ("headlines", "raw", "debug")


class HeadlinesPipeline:
    """
    Stateless headline pipeline; every run fetches live data.

    Usage:
        pipeline = HeadlinesPipeline(config_path="sources.json")
        payload = await pipeline.run(mode="debug")
    """

    def __init__(
        self,
        config: Optional[HeadlinesConfig] = None,
        config_path: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize pipeline.

        Args:
            config: Ready config (skips loading)
            config_path: Path or http(s) URL of the config document
            timeout: Per-fetch timeout in seconds
            transport: Optional httpx transport for the shared client
        """
        self.config = config
        self.config_path = config_path
        self.timeout = timeout
        self.transport = transport

    async def run(self, mode: Optional[str] = None, now: Optional[datetime] = None) -> dict:
        """
        Run the pipeline and build the requested view.

        Args:
            mode: "headlines" (default), "raw" or "debug"
            now: Evaluation instant (defaults to current time; naive values
                are read as UTC)

        Returns:
            JSON-ready payload
        """
        try:
            return await self._run(mode or "headlines", now)
        except Exception as e:
            logger.exception("pipeline_failed", error=str(e))
            return error_view(str(e) or type(e).__name__)

    async def _run(self, mode: str, now: Optional[datetime]) -> dict:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")

        async with HttpClient(timeout=self.timeout, transport=self.transport) as client:
            config = await self._load_config(client)
            zone = resolve_zone(config.timezone)
            now = _aware(now or datetime.now(timezone.utc)).astimezone(zone)

            logger.info(
                "pipeline_started",
                mode=mode,
                sources=len(config.sources),
                timezone=config.timezone,
            )

            results = await FetchDispatcher(client).dispatch(config.sources, zone)

        if mode == "raw":
            return raw_view(results, fetched_at=now.astimezone(timezone.utc))

        ranked = filter_and_rank(
            flatten(results),
            max_age_days=config.max_age_days,
            now=now,
            regions=config.regions,
        )

        logger.info("pipeline_complete", mode=mode, count=len(ranked))

        if mode == "debug":
            return debug_view(
                results,
                ranked,
                timezone=config.timezone,
                fetched_at=now.astimezone(timezone.utc),
            )
        return headlines_view(ranked, timezone=config.timezone)

    async def _load_config(self, client: HttpClient) -> HeadlinesConfig:
        if self.config is not None:
            return self.config
        if self.config_path and self.config_path.startswith(("http://", "https://")):
            return await load_config_from_url(self.config_path, client)
        return load_config(self.config_path)


def _aware(now: datetime) -> datetime:
    """Naive instants are read as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def flatten(results: list[FetchResult]) -> list:
    """All items across sources, in source order."""
    return [item for result in results for item in result.items]


def version_report(now: Optional[datetime] = None) -> dict:
    """Build/version payload."""
    return {
        "ok": True,
        "version": __version__,
        "build": BUILD,
        "now": (now or datetime.now(timezone.utc)).isoformat(),
    }
