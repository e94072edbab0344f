# backend/modules/dashboard/tests/test_time_window.py

from datetime import date, datetime, timedelta, timezone

import pytest

from modules.dashboard.exceptions import InvalidDateError
from modules.dashboard.services.time_window import (
    parse_iso_datetime,
    resolve_time_window,
    start_of_day,
    start_of_month,
    trailing_days,
)

NOW = datetime(2026, 3, 18, 14, 30)


class TestResolveTimeWindow:
    """Test default and explicit window bounds"""

    def test_defaults_to_month_to_date(self):
        window = resolve_time_window(None, None, NOW)

        assert window.start == datetime(2026, 3, 1)
        assert window.end == NOW

    def test_empty_strings_use_defaults(self):
        window = resolve_time_window("", "", NOW)

        assert window.start == datetime(2026, 3, 1)
        assert window.end == NOW

    def test_explicit_dates(self):
        window = resolve_time_window("2026-01-01", "2026-02-15T18:00:00", NOW)

        assert window.start == datetime(2026, 1, 1)
        assert window.end == datetime(2026, 2, 15, 18, 0)

    def test_date_only_end_is_midnight(self):
        window = resolve_time_window(None, "2026-03-10", NOW)

        assert window.end == datetime(2026, 3, 10, 0, 0)

    def test_inverted_bounds_are_accepted(self):
        window = resolve_time_window("2026-03-10", "2026-03-01", NOW)

        assert window.start > window.end

    @pytest.mark.parametrize("field,kwargs", [
        ("start_date", {"start_date": "not-a-date", "end_date": None}),
        ("end_date", {"start_date": None, "end_date": "2026-13-45"}),
    ])
    def test_unparseable_date_raises(self, field, kwargs):
        with pytest.raises(InvalidDateError) as exc_info:
            resolve_time_window(now=NOW, **kwargs)

        assert exc_info.value.error_code == "INVALID_DATE"
        assert exc_info.value.details["field"] == field


class TestParseIsoDatetime:
    def test_aware_datetime_becomes_local_naive(self):
        aware = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

        parsed = parse_iso_datetime(aware.isoformat(), "start_date")

        assert parsed.tzinfo is None
        assert parsed == aware.astimezone().replace(tzinfo=None)

    def test_zulu_suffix_is_utc(self):
        parsed = parse_iso_datetime("2025-01-01T00:00:00Z", "start_date")

        utc = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert parsed == utc.astimezone().replace(tzinfo=None)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_iso_datetime(" 2026-03-01 ", "start_date") == datetime(2026, 3, 1)


class TestCalendarHelpers:
    def test_start_of_day_and_month(self):
        assert start_of_day(NOW) == datetime(2026, 3, 18)
        assert start_of_month(NOW) == datetime(2026, 3, 1)

    def test_trailing_days_oldest_first(self):
        days = trailing_days(date(2026, 3, 18), 7)

        assert len(days) == 7
        assert days[0] == date(2026, 3, 12)
        assert days[-1] == date(2026, 3, 18)
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_trailing_days_crosses_month_boundary(self):
        days = trailing_days(date(2026, 3, 2), 7)

        assert days[0] == date(2026, 2, 24)
