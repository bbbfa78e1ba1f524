"""
Tests for time helpers.
"""

import pytest
from datetime import datetime, timedelta, timezone

from astralis.utils.time_utils import (
    add_months,
    format_date,
    format_rfc3339,
    local_now,
    parse_rfc3339,
    start_of_day,
)


class TestParseRFC3339:
    """Test strict timestamp parsing."""

    def test_utc_designator(self):
        assert parse_rfc3339("2024-03-01T14:30:00Z") == datetime(
            2024, 3, 1, 14, 30, tzinfo=timezone.utc
        )

    def test_numeric_offset(self):
        value = parse_rfc3339("2024-03-01T09:30:00-05:00")
        assert value.utcoffset() == timedelta(hours=-5)
        assert value == datetime(2024, 3, 1, 14, 30, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        assert parse_rfc3339("2024-03-01T14:30:00.5Z").microsecond == 500000

    def test_long_fraction_is_truncated(self):
        assert parse_rfc3339("2024-03-01T14:30:00.123456789Z").microsecond == 123456

    @pytest.mark.parametrize(
        "value",
        [
            "2024-03-01",
            "2024-03-01T14:30Z",
            "2024-03-01T14:30:00",
            "2024-03-01 14:30:00Z",
            "yesterday",
            "",
        ],
    )
    def test_rejects_non_rfc3339(self, value):
        with pytest.raises(ValueError):
            parse_rfc3339(value)

    def test_rejects_impossible_date(self):
        with pytest.raises(ValueError):
            parse_rfc3339("2024-02-30T00:00:00Z")


class TestFormatting:
    """Test timestamp and date formatting."""

    def test_utc_uses_designator(self):
        value = datetime(2024, 3, 1, 14, 30, tzinfo=timezone.utc)
        assert format_rfc3339(value) == "2024-03-01T14:30:00Z"

    def test_offset_is_kept(self):
        value = datetime(2024, 3, 1, 9, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_rfc3339(value) == "2024-03-01T09:30:00-05:00"

    def test_none(self):
        assert format_rfc3339(None) is None

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 1, 23, 59)) == "2024-03-01"


class TestCalendarArithmetic:
    """Test month and day helpers."""

    def test_add_month(self):
        assert add_months(datetime(2024, 3, 15), 1) == datetime(2024, 4, 15)

    def test_subtract_month_across_year(self):
        assert add_months(datetime(2024, 1, 15), -1) == datetime(2023, 12, 15)

    def test_month_end_is_clamped(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)

    def test_start_of_day_keeps_timezone(self):
        tz = timezone(timedelta(hours=2))
        value = datetime(2024, 3, 1, 17, 45, 12, 999, tzinfo=tz)

        assert start_of_day(value) == datetime(2024, 3, 1, tzinfo=tz)

    def test_local_now_is_aware(self):
        assert local_now().tzinfo is not None
