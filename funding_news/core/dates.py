"""
Date normalization for heterogeneous feed and API timestamps.

Handles, in priority order:
- ISO 8601 calendar dates ("2024-05-01", "2024-05-01T10:00:00Z")
- RFC 2822 message dates ("Wed, 01 May 2024 10:00:00 +0000")
- Anything python-dateutil can make sense of ("May 1, 2024")

Stricter formats are tried first so that ambiguous strings are not
misread by the permissive fallback.
"""

from datetime import datetime, tzinfo
from email.utils import parsedate_to_datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from dateutil import parser as date_parser

logger = structlog.get_logger(__name__)


def resolve_zone(name: Optional[str]) -> ZoneInfo:
    """
    Resolve an IANA zone name.

    Raises:
        ValueError: If the zone is unknown
    """
    try:
        return ZoneInfo(name or "UTC")
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def _in_zone(dt: datetime, zone: tzinfo) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_rfc2822(text: str) -> Optional[datetime]:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def _parse_generic(text: str) -> Optional[datetime]:
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


_PARSERS = (_parse_iso, _parse_rfc2822, _parse_generic)


def parse_date(text: Optional[str], zone: tzinfo) -> Optional[datetime]:
    """
    Parse a raw timestamp into an aware datetime in the target zone.

    Args:
        text: Raw date string (may be None or empty)
        zone: Target timezone

    Returns:
        Zoned datetime or None if no format matches
    """
    if not text:
        return None

    text = text.strip()
    if not text:
        return None

    for parse in _PARSERS:
        dt = parse(text)
        if dt is None:
            continue
        try:
            return _in_zone(dt, zone)
        except (OverflowError, ValueError):
            continue

    logger.debug("unparseable_date", text=text)
    return None
