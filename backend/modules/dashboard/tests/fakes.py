# backend/modules/dashboard/tests/fakes.py

"""In-memory stores mirroring the SQL filters, for dashboard tests."""

import asyncio
import itertools
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from modules.courier.enums.courier_enums import (
    DriverStatus, OperatorStatus, PaymentStatus, UserStatus
)
from modules.dashboard.schemas.dashboard_schemas import ViewerContext
from modules.dashboard.services.stores import (
    DirectoryStore, OrderCriteria, OrderStore, PaymentCriteria, PaymentStore,
    RoleResolver,
)

# Wednesday afternoon; the trailing week runs Thu 12th to Wed 18th
NOW = datetime(2026, 3, 18, 14, 30)
OPERATOR_X = "op-x"
OPERATOR_Y = "op-y"

_ids = itertools.count(1)


@dataclass
class FakeOrder:
    status: str
    customer_id: str = "customer-1"
    operator_id: Optional[str] = OPERATOR_X
    vehicle_id: Optional[str] = None
    created_at: datetime = datetime(2026, 3, 10, 9, 0)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: f"order-{next(_ids)}")

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = self.created_at


@dataclass
class FakePayment:
    amount: Decimal
    status: str = PaymentStatus.COMPLETED.value
    operator_id: Optional[str] = OPERATOR_X
    customer_id: Optional[str] = "customer-1"
    created_at: datetime = datetime(2026, 3, 10, 9, 0)
    deleted_at: Optional[datetime] = None


def _in_range(value: datetime, lower: Optional[datetime], upper: Optional[datetime]) -> bool:
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


class InFlightTracker:
    """Records how many store calls were running at once"""

    def __init__(self):
        self.current = 0
        self.peak = 0
        self.calls = 0

    async def enter(self):
        self.current += 1
        self.calls += 1
        self.peak = max(self.peak, self.current)
        # Yield so sibling sub-queries can start before this one returns
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.current -= 1


class FakeOrderStore(OrderStore):
    def __init__(self, orders: List[FakeOrder], tracker: InFlightTracker):
        self.orders = orders
        self.tracker = tracker

    def _matching(self, criteria: OrderCriteria) -> List[FakeOrder]:
        matched = []
        for order in self.orders:
            if order.deleted_at is not None:
                continue
            if criteria.operator_id and order.operator_id != criteria.operator_id:
                continue
            if criteria.customer_id and order.customer_id != criteria.customer_id:
                continue
            if criteria.vehicle_ids is not None and order.vehicle_id not in criteria.vehicle_ids:
                continue
            if criteria.statuses is not None and order.status not in criteria.statuses:
                continue
            if not _in_range(order.created_at, criteria.created_from, criteria.created_to):
                continue
            if criteria.updated_from is not None and order.updated_at < criteria.updated_from:
                continue
            matched.append(order)
        return matched

    async def count_orders(self, criteria: OrderCriteria) -> int:
        await self.tracker.enter()
        return len(self._matching(criteria))

    async def count_orders_by(
        self, field: str, criteria: OrderCriteria
    ) -> List[Tuple[Optional[str], int]]:
        await self.tracker.enter()
        counts: Dict[Optional[str], int] = {}
        for order in self._matching(criteria):
            key = getattr(order, field)
            counts[key] = counts.get(key, 0) + 1
        return list(counts.items())

    async def order_created_times(self, criteria: OrderCriteria) -> List[datetime]:
        await self.tracker.enter()
        return [order.created_at for order in self._matching(criteria)]


class FakePaymentStore(PaymentStore):
    def __init__(self, payments: List[FakePayment], tracker: InFlightTracker):
        self.payments = payments
        self.tracker = tracker

    def _matching(self, criteria: PaymentCriteria) -> List[FakePayment]:
        return [
            payment for payment in self.payments
            if payment.deleted_at is None
            and (not criteria.operator_id or payment.operator_id == criteria.operator_id)
            and (not criteria.customer_id or payment.customer_id == criteria.customer_id)
            and (criteria.statuses is None or payment.status in criteria.statuses)
            and _in_range(payment.created_at, criteria.created_from, criteria.created_to)
        ]

    async def sum_amount(self, criteria: PaymentCriteria) -> Decimal:
        await self.tracker.enter()
        return sum((p.amount for p in self._matching(criteria)), Decimal("0"))

    async def sum_amount_by_month(self, criteria: PaymentCriteria) -> Dict[int, Decimal]:
        await self.tracker.enter()
        totals: Dict[int, Decimal] = {}
        for payment in self._matching(criteria):
            month = payment.created_at.month
            totals[month] = totals.get(month, Decimal("0")) + payment.amount
        return totals


class FakeDirectoryStore(DirectoryStore):
    def __init__(self, tracker: InFlightTracker):
        self.tracker = tracker
        self.operators: Dict[str, Dict[str, str]] = {
            OPERATOR_X: {"name": "Express Co", "status": OperatorStatus.ACTIVE.value},
            OPERATOR_Y: {"name": "Swift Ltd", "status": OperatorStatus.ACTIVE.value},
        }
        # (vehicle_id, operator_id)
        self.vehicles: List[Tuple[str, str]] = [
            ("veh-1", OPERATOR_X), ("veh-2", OPERATOR_X), ("veh-3", OPERATOR_Y),
        ]
        # (status, operator_id)
        self.drivers: List[Tuple[str, str]] = [
            (DriverStatus.AVAILABLE.value, OPERATOR_X),
            (DriverStatus.OFF_DUTY.value, OPERATOR_X),
            (DriverStatus.AVAILABLE.value, OPERATOR_Y),
        ]
        self.customer_statuses: List[str] = [
            UserStatus.ACTIVE.value, UserStatus.ACTIVE.value, UserStatus.INACTIVE.value,
        ]
        # driver user id -> assigned vehicle ids
        self.driver_vehicles: Dict[str, List[str]] = {}

    async def count_operators(self, status=None, operator_id=None) -> int:
        await self.tracker.enter()
        return sum(
            1 for op_id, op in self.operators.items()
            if (status is None or op["status"] == status)
            and (operator_id is None or op_id == operator_id)
        )

    async def count_vehicles(self, operator_id=None) -> int:
        await self.tracker.enter()
        return sum(1 for _, owner in self.vehicles if operator_id is None or owner == operator_id)

    async def count_drivers(self, status=None, operator_id=None) -> int:
        await self.tracker.enter()
        return sum(
            1 for driver_status, owner in self.drivers
            if (status is None or driver_status == status)
            and (operator_id is None or owner == operator_id)
        )

    async def count_customers(self, status=None) -> int:
        await self.tracker.enter()
        return sum(1 for s in self.customer_statuses if status is None or s == status)

    async def operator_names(self, operator_ids: Iterable[str]) -> Dict[str, str]:
        await self.tracker.enter()
        return {
            op_id: self.operators[op_id]["name"]
            for op_id in operator_ids if op_id in self.operators
        }

    async def driver_vehicle_ids(self, user_id: str) -> Optional[List[str]]:
        await self.tracker.enter()
        vehicles = self.driver_vehicles.get(user_id)
        return list(vehicles) if vehicles is not None else None


class FakeRoleResolver(RoleResolver):
    def __init__(self):
        self.viewers: Dict[str, ViewerContext] = {}

    def add(self, user_id: str, role_code: str, operator_id: Optional[str] = None):
        self.viewers[user_id] = ViewerContext(
            user_id=user_id, role_code=role_code, operator_id=operator_id
        )

    async def resolve(self, user_id: str) -> ViewerContext:
        return self.viewers.get(
            user_id, ViewerContext(user_id=user_id, role_code="CUSTOMER")
        )


def viewer(role_code: str, user_id: str = "user-1", operator_id: Optional[str] = None):
    return ViewerContext(user_id=user_id, role_code=role_code, operator_id=operator_id)


def make_orders(statuses: Dict[str, int], **kwargs) -> List[FakeOrder]:
    """Build ``count`` orders per status sharing the given attributes"""
    built = []
    for status, count in statuses.items():
        built.extend(FakeOrder(status=status, **kwargs) for _ in range(count))
    return built
