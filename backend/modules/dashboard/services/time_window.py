# backend/modules/dashboard/services/time_window.py

"""
Resolution of the dashboard date filters into concrete instants.

All instants are naive datetimes in the server's local time, which is how
order and payment timestamps are stored.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from ..exceptions import InvalidDateError
from ..schemas.dashboard_schemas import TimeWindow


def parse_iso_datetime(value: str, field: str) -> datetime:
    """Parse an ISO date or datetime string into a local naive datetime."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (TypeError, ValueError, AttributeError):
        raise InvalidDateError(field, value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def start_of_month(moment: datetime) -> datetime:
    return datetime.combine(moment.date().replace(day=1), time.min)


def resolve_time_window(
    start_date: Optional[str],
    end_date: Optional[str],
    now: datetime,
) -> TimeWindow:
    """
    Build the window for a dashboard request.

    Missing start defaults to the first day of the current month, missing
    end defaults to ``now``. No ordering check is made between the bounds.
    """
    start = (
        parse_iso_datetime(start_date, "start_date")
        if start_date
        else start_of_month(now)
    )
    end = parse_iso_datetime(end_date, "end_date") if end_date else now
    return TimeWindow(start=start, end=end)


def trailing_days(today: date, days: int) -> List[date]:
    """Calendar days ending at ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
