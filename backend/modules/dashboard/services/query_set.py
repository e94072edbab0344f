# backend/modules/dashboard/services/query_set.py

"""
Aggregate query set: the count and sum primitives behind dashboard stats.

No primitive depends on another's result, so callers issue them together
through ``gather_named`` and only wait on the full set.
"""

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Any, Awaitable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .scope_gate import DashboardScope
from .stores import (
    DirectoryStore,
    OrderCriteria,
    OrderStore,
    PaymentCriteria,
    PaymentStore,
)
from ..schemas.dashboard_schemas import TimeWindow


async def gather_named(awaitables: Dict[str, Awaitable[Any]]) -> Dict[str, Any]:
    """
    Run named awaitables concurrently and return their results by name.

    The first failure fails the whole set; sub-queries still pending are
    cancelled since none of them has side effects.
    """
    tasks = {name: asyncio.ensure_future(aw) for name, aw in awaitables.items()}
    try:
        results = await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            if not task.done():
                task.cancel()
        raise
    return dict(zip(tasks.keys(), results))


class AggregateQuerySet:
    """Scope- and window-parameterised reads over the stores"""

    def __init__(
        self,
        order_store: OrderStore,
        payment_store: PaymentStore,
        directory_store: DirectoryStore,
    ):
        self.order_store = order_store
        self.payment_store = payment_store
        self.directory_store = directory_store

    @staticmethod
    def order_criteria(
        scope: DashboardScope,
        window: Optional[TimeWindow] = None,
        statuses: Optional[Iterable[str]] = None,
        vehicle_ids: Optional[Iterable[str]] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        updated_from: Optional[datetime] = None,
    ) -> OrderCriteria:
        """Combine the scope predicate, optional window and extra filters.

        Explicit ``created_from``/``created_to`` replace the window bound on
        that side.
        """
        return OrderCriteria(
            operator_id=scope.operator_id,
            customer_id=scope.customer_id,
            vehicle_ids=tuple(vehicle_ids) if vehicle_ids is not None else None,
            statuses=frozenset(statuses) if statuses is not None else None,
            created_from=created_from if created_from is not None else (
                window.start if window else None
            ),
            created_to=created_to if created_to is not None else (
                window.end if window else None
            ),
            updated_from=updated_from,
        )

    @staticmethod
    def payment_criteria(
        scope: DashboardScope,
        window: Optional[TimeWindow] = None,
        statuses: Optional[Iterable[str]] = None,
    ) -> PaymentCriteria:
        return PaymentCriteria(
            operator_id=scope.operator_id,
            customer_id=scope.customer_id,
            statuses=frozenset(statuses) if statuses is not None else None,
            created_from=window.start if window else None,
            created_to=window.end if window else None,
        )

    async def count_orders(
        self,
        scope: DashboardScope,
        window: Optional[TimeWindow] = None,
        statuses: Optional[FrozenSet[str]] = None,
        updated_from: Optional[datetime] = None,
    ) -> int:
        """Count of non-deleted orders, optionally restricted to statuses"""
        return await self.order_store.count_orders(
            self.order_criteria(scope, window, statuses, updated_from=updated_from)
        )

    async def sum_payment_amount(
        self,
        scope: DashboardScope,
        statuses: FrozenSet[str],
        window: Optional[TimeWindow] = None,
    ) -> Decimal:
        """Sum of payment amounts for a status set, windowed by created_at"""
        return await self.payment_store.sum_amount(
            self.payment_criteria(scope, window, statuses)
        )

    async def count_by_grouped_field(
        self,
        scope: DashboardScope,
        field: str,
        window: Optional[TimeWindow] = None,
    ) -> List[Tuple[Optional[str], int]]:
        """Grouped order count by ``status`` or ``operator_id``"""
        return await self.order_store.count_orders_by(
            field, self.order_criteria(scope, window)
        )

    async def count_driver_scoped(
        self,
        scope: DashboardScope,
        vehicle_ids: Iterable[str],
        window: Optional[TimeWindow] = None,
        statuses: Optional[FrozenSet[str]] = None,
        created_from: Optional[datetime] = None,
        updated_from: Optional[datetime] = None,
    ) -> int:
        """Order count restricted to the driver's vehicles"""
        return await self.order_store.count_orders(
            self.order_criteria(
                scope,
                window,
                statuses,
                vehicle_ids=vehicle_ids,
                created_from=created_from,
                updated_from=updated_from,
            )
        )
