# backend/modules/dashboard/services/role_strategies.py

"""
Per-role dashboard strategies.

Each strategy declares the scalar aggregates and trend series its role
sees, fans them out together and assembles the response. A strategy is
picked once per request from ``ROLE_STRATEGIES``.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Awaitable, Callable, Dict

from modules.courier.enums.courier_enums import (
    DriverStatus, OperatorStatus, PaymentStatus, UserStatus
)

from ..constants import (
    ACTIVE_ORDER_STATUSES,
    COMPLETED_ORDER_STATUSES,
    DRIVER_IN_PROGRESS_STATUSES,
    IN_TRANSIT_ORDER_STATUSES,
    PENDING_ORDER_STATUSES,
)
from ..schemas.dashboard_schemas import (
    CustomerStats,
    DashboardResponse,
    DashboardTrends,
    DispatcherStats,
    DriverStats,
    OperatorStats,
    PlatformStats,
    RoleBucket,
    TimeWindow,
)
from .query_set import AggregateQuerySet, gather_named
from .scope_gate import DashboardScope
from .time_window import start_of_day
from .trend_service import TrendSeriesBuilder

logger = logging.getLogger(__name__)

COMPLETED_PAYMENTS = frozenset({PaymentStatus.COMPLETED.value})


@dataclass(frozen=True)
class StrategyContext:
    """Everything a strategy needs for one request"""

    scope: DashboardScope
    window: TimeWindow
    now: datetime
    queries: AggregateQuerySet
    trends: TrendSeriesBuilder

    @property
    def today_start(self) -> datetime:
        return start_of_day(self.now)


def assemble_response(stats, results: Dict[str, object], trend_keys) -> DashboardResponse:
    """Merge scalar stats and the named trend series into one payload."""
    trends = None
    if trend_keys:
        trends = DashboardTrends(**{key: results[key] for key in trend_keys})
    return DashboardResponse(stats=stats, trends=trends)


async def platform_strategy(ctx: StrategyContext) -> DashboardResponse:
    scope, queries, trends = ctx.scope, ctx.queries, ctx.trends
    directory = queries.directory_store

    results = await gather_named({
        "total_orders": queries.count_orders(scope),
        "active_orders": queries.count_orders(scope, statuses=ACTIVE_ORDER_STATUSES),
        "completed_orders": queries.count_orders(
            scope, statuses=COMPLETED_ORDER_STATUSES
        ),
        "total_operators": directory.count_operators(
            status=OperatorStatus.ACTIVE.value, operator_id=scope.operator_id
        ),
        "total_vehicles": directory.count_vehicles(operator_id=scope.operator_id),
        "total_drivers": directory.count_drivers(
            status=DriverStatus.AVAILABLE.value, operator_id=scope.operator_id
        ),
        "total_customers": directory.count_customers(status=UserStatus.ACTIVE.value),
        "total_revenue": queries.sum_payment_amount(
            scope, COMPLETED_PAYMENTS, ctx.window
        ),
        "orders_by_day": trends.orders_by_day(scope, ctx.window, ctx.now),
        "orders_by_status": trends.orders_by_status(scope),
        "revenue_by_month": trends.revenue_by_month(scope),
        "orders_by_operator": trends.orders_by_operator(scope),
    })

    stats = PlatformStats(
        total_orders=results["total_orders"],
        active_orders=results["active_orders"],
        completed_orders=results["completed_orders"],
        total_operators=results["total_operators"],
        total_vehicles=results["total_vehicles"],
        total_drivers=results["total_drivers"],
        total_customers=results["total_customers"],
        total_revenue=results["total_revenue"],
    )
    return assemble_response(
        stats,
        results,
        ("orders_by_day", "orders_by_status", "revenue_by_month", "orders_by_operator"),
    )


async def operator_admin_strategy(ctx: StrategyContext) -> DashboardResponse:
    scope, window, queries, trends = ctx.scope, ctx.window, ctx.queries, ctx.trends

    results = await gather_named({
        "total_orders": queries.count_orders(scope, window),
        "active_orders": queries.count_orders(
            scope, window, statuses=ACTIVE_ORDER_STATUSES
        ),
        "completed_orders": queries.count_orders(
            scope, window, statuses=COMPLETED_ORDER_STATUSES
        ),
        "total_revenue": queries.sum_payment_amount(scope, COMPLETED_PAYMENTS, window),
        "orders_by_day": trends.orders_by_day(scope, window, ctx.now),
        "orders_by_status": trends.orders_by_status(scope),
        "revenue_by_month": trends.revenue_by_month(scope),
    })

    stats = OperatorStats(
        total_orders=results["total_orders"],
        active_orders=results["active_orders"],
        completed_orders=results["completed_orders"],
        total_revenue=results["total_revenue"],
    )
    return assemble_response(
        stats, results, ("orders_by_day", "orders_by_status", "revenue_by_month")
    )


async def dispatcher_strategy(ctx: StrategyContext) -> DashboardResponse:
    scope, window, queries, trends = ctx.scope, ctx.window, ctx.queries, ctx.trends

    results = await gather_named({
        "pending_orders": queries.count_orders(
            scope, window, statuses=PENDING_ORDER_STATUSES
        ),
        "in_transit_orders": queries.count_orders(
            scope, window, statuses=IN_TRANSIT_ORDER_STATUSES
        ),
        "completed_today": queries.count_orders(
            scope,
            window,
            statuses=COMPLETED_ORDER_STATUSES,
            updated_from=ctx.today_start,
        ),
        "active_orders": queries.count_orders(
            scope, window, statuses=ACTIVE_ORDER_STATUSES
        ),
        "orders_by_day": trends.orders_by_day(scope, window, ctx.now),
        "orders_by_status": trends.orders_by_status(scope),
    })

    stats = DispatcherStats(
        pending_orders=results["pending_orders"],
        in_transit_orders=results["in_transit_orders"],
        completed_today=results["completed_today"],
        active_orders=results["active_orders"],
    )
    return assemble_response(stats, results, ("orders_by_day", "orders_by_status"))


async def driver_strategy(ctx: StrategyContext) -> DashboardResponse:
    scope, window, queries = ctx.scope, ctx.window, ctx.queries

    vehicle_ids = await queries.directory_store.driver_vehicle_ids(scope.user_id)
    if vehicle_ids is None:
        logger.info(f"No driver record for user {scope.user_id}, returning empty stats")
        return DashboardResponse(stats=DriverStats())

    results = await gather_named({
        "today_deliveries": queries.count_driver_scoped(
            scope, vehicle_ids, created_from=ctx.today_start
        ),
        "completed": queries.count_driver_scoped(
            scope,
            vehicle_ids,
            window,
            statuses=COMPLETED_ORDER_STATUSES,
            updated_from=ctx.today_start,
        ),
        "in_progress": queries.count_driver_scoped(
            scope, vehicle_ids, window, statuses=DRIVER_IN_PROGRESS_STATUSES
        ),
        "total_this_month": queries.count_driver_scoped(scope, vehicle_ids, window),
    })

    return DashboardResponse(stats=DriverStats(**results))


async def customer_strategy(ctx: StrategyContext) -> DashboardResponse:
    scope, window, queries, trends = ctx.scope, ctx.window, ctx.queries, ctx.trends

    results = await gather_named({
        "total_orders": queries.count_orders(scope, window),
        "in_transit_orders": queries.count_orders(
            scope, window, statuses=IN_TRANSIT_ORDER_STATUSES
        ),
        "completed_orders": queries.count_orders(
            scope, window, statuses=COMPLETED_ORDER_STATUSES
        ),
        "pending_orders": queries.count_orders(
            scope, window, statuses=PENDING_ORDER_STATUSES
        ),
        # the customer's daily series spans every operator
        "orders_by_day": trends.orders_by_day(
            replace(scope, operator_id=None), window, ctx.now
        ),
    })

    stats = CustomerStats(
        total_orders=results["total_orders"],
        in_transit_orders=results["in_transit_orders"],
        completed_orders=results["completed_orders"],
        pending_orders=results["pending_orders"],
    )
    return assemble_response(stats, results, ("orders_by_day",))


RoleStrategy = Callable[[StrategyContext], Awaitable[DashboardResponse]]

ROLE_STRATEGIES: Dict[RoleBucket, RoleStrategy] = {
    RoleBucket.PLATFORM: platform_strategy,
    RoleBucket.OPERATOR_ADMIN: operator_admin_strategy,
    RoleBucket.DISPATCHER: dispatcher_strategy,
    RoleBucket.DRIVER: driver_strategy,
    RoleBucket.CUSTOMER: customer_strategy,
}
