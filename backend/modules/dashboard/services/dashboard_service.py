# backend/modules/dashboard/services/dashboard_service.py

"""
Service for role-scoped dashboard analytics.

Resolves the viewer, the time window and the tenant scope, then hands the
request to the strategy registered for the viewer's role.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from core.config import Settings, get_settings

from ..schemas.dashboard_schemas import DashboardQuery, DashboardResponse, ViewerContext
from .query_set import AggregateQuerySet
from .role_resolver import SQLRoleResolver
from .role_strategies import ROLE_STRATEGIES, StrategyContext
from .scope_gate import resolve_scope
from .sql_stores import SQLDirectoryStore, SQLOrderStore, SQLPaymentStore
from .stores import DirectoryStore, OrderStore, PaymentStore, RoleResolver
from .time_window import resolve_time_window
from .trend_service import TrendSeriesBuilder

logger = logging.getLogger(__name__)


class DashboardService:
    """Computes dashboard stats and trends for a viewer"""

    def __init__(
        self,
        order_store: OrderStore,
        payment_store: PaymentStore,
        directory_store: DirectoryStore,
        role_resolver: RoleResolver,
        clock: Callable[[], datetime] = datetime.now,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.role_resolver = role_resolver
        self.clock = clock
        self.queries = AggregateQuerySet(order_store, payment_store, directory_store)
        self.trends = TrendSeriesBuilder(
            self.queries,
            daily_days=settings.dashboard_daily_trend_days,
            top_operators_limit=settings.dashboard_top_operators_limit,
        )

    @classmethod
    def from_session_factory(
        cls, session_factory: sessionmaker, **kwargs
    ) -> "DashboardService":
        """Wire the service to SQL-backed stores"""
        return cls(
            order_store=SQLOrderStore(session_factory),
            payment_store=SQLPaymentStore(session_factory),
            directory_store=SQLDirectoryStore(session_factory),
            role_resolver=SQLRoleResolver(session_factory),
            **kwargs,
        )

    async def get_dashboard(
        self, user_id: str, query: Optional[DashboardQuery] = None
    ) -> DashboardResponse:
        """Get the dashboard for an authenticated user"""
        viewer = await self.role_resolver.resolve(user_id)
        return await self.get_dashboard_for_viewer(viewer, query)

    async def get_dashboard_for_viewer(
        self, viewer: ViewerContext, query: Optional[DashboardQuery] = None
    ) -> DashboardResponse:
        """Get the dashboard for an already resolved viewer"""
        query = query or DashboardQuery()
        now = self.clock()

        window = resolve_time_window(query.start_date, query.end_date, now)
        scope = resolve_scope(viewer, query.operator_id)
        strategy = ROLE_STRATEGIES[scope.bucket]

        logger.info(
            f"Building {scope.bucket.value} dashboard for user {viewer.user_id} "
            f"(operator={scope.operator_id}, window={window.start.isoformat()} "
            f"to {window.end.isoformat()})"
        )

        return await strategy(
            StrategyContext(
                scope=scope,
                window=window,
                now=now,
                queries=self.queries,
                trends=self.trends,
            )
        )
