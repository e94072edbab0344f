# backend/modules/dashboard/services/trend_service.py

"""
Trend series builder for the dashboard charts.

Series have a fixed shape regardless of data: the daily series always has
one point per trailing calendar day and the revenue series one point per
month label, zero-filled where nothing matched.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, time
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from modules.courier.enums.courier_enums import OrderStatus, PaymentStatus

from ..constants import (
    DAILY_TREND_DAYS,
    MONTH_LABELS,
    REVENUE_MONTH_LABELS,
    TOP_OPERATORS_LIMIT,
    UNKNOWN_OPERATOR_LABEL,
    WEEKDAY_LABELS,
)
from ..schemas.dashboard_schemas import ChartPoint, StatusCount, TimeWindow
from .query_set import AggregateQuerySet
from .scope_gate import DashboardScope
from .time_window import trailing_days

logger = logging.getLogger(__name__)

_STATUS_ORDER = {status.value: index for index, status in enumerate(OrderStatus)}


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]


def bucket_daily_counts(
    created_times: Iterable[datetime], today: date, days: int = DAILY_TREND_DAYS
) -> List[ChartPoint]:
    """Count timestamps per calendar day for the ``days`` days ending today."""
    counts: Dict[date, int] = defaultdict(int)
    for created_at in created_times:
        counts[created_at.date()] += 1

    return [
        ChartPoint(x=weekday_label(day), y=counts.get(day, 0))
        for day in trailing_days(today, days)
    ]


def bucket_monthly_revenue(
    totals_by_month: Mapping[int, Decimal],
    labels: Sequence[str] = REVENUE_MONTH_LABELS,
) -> List[ChartPoint]:
    """Map month-number sums onto the fixed month labels."""
    by_label: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for month_number, total in totals_by_month.items():
        by_label[MONTH_LABELS[month_number - 1]] += total

    return [ChartPoint(x=label, y=by_label.get(label, Decimal("0"))) for label in labels]


def order_status_counts(rows: Iterable[Tuple[Optional[str], int]]) -> List[StatusCount]:
    """Status breakdown in lifecycle order; unknown statuses go last."""
    counted = [(status, count) for status, count in rows if status is not None]
    counted.sort(key=lambda row: (_STATUS_ORDER.get(row[0], len(_STATUS_ORDER)), row[0]))
    return [StatusCount(label=status, value=count) for status, count in counted]


def top_operator_counts(
    rows: Iterable[Tuple[Optional[str], int]],
    names: Mapping[str, str],
    limit: int = TOP_OPERATORS_LIMIT,
) -> List[ChartPoint]:
    """Busiest operators by order count, ties kept in grouping order."""
    ranked = sorted(
        ((operator_id, count) for operator_id, count in rows if operator_id),
        key=lambda row: row[1],
        reverse=True,
    )
    return [
        ChartPoint(x=names.get(operator_id) or UNKNOWN_OPERATOR_LABEL, y=count)
        for operator_id, count in ranked[:limit]
    ]


class TrendSeriesBuilder:
    """Builds the calendar-bucketed series for a scope"""

    def __init__(
        self,
        queries: AggregateQuerySet,
        daily_days: int = DAILY_TREND_DAYS,
        top_operators_limit: int = TOP_OPERATORS_LIMIT,
    ):
        self.queries = queries
        self.daily_days = daily_days
        self.top_operators_limit = top_operators_limit

    async def orders_by_day(
        self, scope: DashboardScope, window: TimeWindow, now: datetime
    ) -> List[ChartPoint]:
        """Orders per day over the trailing days ending today, oldest first.

        Only orders inside the request window are counted.
        """
        today = now.date()
        first_day = trailing_days(today, self.daily_days)[0]
        created_from = max(window.start, datetime.combine(first_day, time.min))
        criteria = self.queries.order_criteria(
            scope, window, created_from=created_from
        )
        created_times = await self.queries.order_store.order_created_times(criteria)
        return bucket_daily_counts(created_times, today, self.daily_days)

    async def orders_by_status(self, scope: DashboardScope) -> List[StatusCount]:
        rows = await self.queries.count_by_grouped_field(scope, "status")
        return order_status_counts(rows)

    async def revenue_by_month(self, scope: DashboardScope) -> List[ChartPoint]:
        """Completed revenue per month label across all years."""
        criteria = self.queries.payment_criteria(
            scope, statuses=[PaymentStatus.COMPLETED.value]
        )
        totals = await self.queries.payment_store.sum_amount_by_month(criteria)
        return bucket_monthly_revenue(totals)

    async def orders_by_operator(self, scope: DashboardScope) -> List[ChartPoint]:
        rows = await self.queries.count_by_grouped_field(scope, "operator_id")
        names = await self.queries.directory_store.operator_names(
            operator_id for operator_id, _ in rows if operator_id
        )
        return top_operator_counts(rows, names, self.top_operators_limit)
