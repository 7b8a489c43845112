"""Tests for date normalization."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from funding_news.core.dates import parse_date, resolve_zone


AMSTERDAM = ZoneInfo("Europe/Amsterdam")


class TestParseDate:
    """Tests for parse_date function."""

    def test_iso_with_offset(self, utc):
        """Test ISO timestamp with Z suffix."""
        result = parse_date("2024-05-01T10:00:00Z", utc)
        assert result == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_iso_converted_to_target_zone(self):
        """Test zoned ISO timestamp is converted, not reinterpreted."""
        result = parse_date("2024-05-01T10:00:00+00:00", AMSTERDAM)
        assert result.tzinfo == AMSTERDAM
        assert result.hour == 12

    def test_naive_date_in_target_zone(self):
        """Test plain calendar date is read in the target zone."""
        result = parse_date("2024-05-01", AMSTERDAM)
        assert result == datetime(2024, 5, 1, tzinfo=AMSTERDAM)

    def test_rfc2822(self, utc):
        """Test RSS-style message date."""
        result = parse_date("Wed, 01 May 2024 10:00:00 +0000", utc)
        assert result == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_rfc2822_gmt(self):
        """Test message date with GMT zone name."""
        result = parse_date("Fri, 14 Jun 2024 08:00:00 GMT", AMSTERDAM)
        assert result.hour == 10

    def test_generic_fallback(self, utc):
        """Test format only the permissive parser understands."""
        result = parse_date("2024/05/01 10:00", utc)
        assert result == datetime(2024, 5, 1, 10, 0, tzinfo=utc)

    def test_surrounding_whitespace(self, utc):
        result = parse_date("  2024-05-01  ", utc)
        assert result == datetime(2024, 5, 1, tzinfo=utc)

    def test_garbage_returns_none(self, utc):
        """Test unparseable text returns None."""
        assert parse_date("garbage text", utc) is None

    def test_empty_string(self, utc):
        assert parse_date("", utc) is None
        assert parse_date("   ", utc) is None

    def test_none_input(self, utc):
        assert parse_date(None, utc) is None


class TestResolveZone:
    """Tests for resolve_zone function."""

    def test_known_zone(self):
        assert resolve_zone("Europe/Amsterdam") == AMSTERDAM

    def test_default_utc(self):
        assert resolve_zone(None) == ZoneInfo("UTC")

    def test_unknown_zone(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            resolve_zone("Mars/Olympus_Mons")
