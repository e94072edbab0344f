# backend/modules/dashboard/services/stores.py

"""
Read interfaces the dashboard consumes.

The analytics engine never touches persistence directly: it asks these
stores for counts, sums and groupings. Implementations must exclude
soft-deleted rows from every answer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..schemas.dashboard_schemas import ViewerContext


@dataclass(frozen=True)
class OrderCriteria:
    """
    Filter for order aggregates.

    ``vehicle_ids`` of ``None`` means no vehicle filter; an empty tuple
    matches no order. Datetime bounds are inclusive.
    """

    operator_id: Optional[str] = None
    customer_id: Optional[str] = None
    vehicle_ids: Optional[Tuple[str, ...]] = None
    statuses: Optional[FrozenSet[str]] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    updated_from: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentCriteria:
    """Filter for payment aggregates; bounds apply to ``created_at``."""

    operator_id: Optional[str] = None
    customer_id: Optional[str] = None
    statuses: Optional[FrozenSet[str]] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None


GROUPABLE_ORDER_FIELDS = frozenset({"status", "operator_id"})


class OrderStore(ABC):
    """Aggregate reads over non-deleted orders"""

    @abstractmethod
    async def count_orders(self, criteria: OrderCriteria) -> int:
        """Number of orders matching the criteria"""

    @abstractmethod
    async def count_orders_by(
        self, field: str, criteria: OrderCriteria
    ) -> List[Tuple[Optional[str], int]]:
        """``(value, count)`` pairs grouped by ``status`` or ``operator_id``"""

    @abstractmethod
    async def order_created_times(self, criteria: OrderCriteria) -> List[datetime]:
        """``created_at`` of every matching order"""


class PaymentStore(ABC):
    """Aggregate reads over non-deleted payments"""

    @abstractmethod
    async def sum_amount(self, criteria: PaymentCriteria) -> Decimal:
        """Sum of matching payment amounts, zero when nothing matches"""

    @abstractmethod
    async def sum_amount_by_month(self, criteria: PaymentCriteria) -> Dict[int, Decimal]:
        """Sums keyed by calendar month number (1-12) of ``created_at``, any year"""


class DirectoryStore(ABC):
    """Counts and lookups over operators, vehicles, drivers and customers"""

    @abstractmethod
    async def count_operators(
        self, status: Optional[str] = None, operator_id: Optional[str] = None
    ) -> int:
        """Number of operators, optionally with a status or a single id"""

    @abstractmethod
    async def count_vehicles(self, operator_id: Optional[str] = None) -> int:
        """Number of vehicles, optionally owned by one operator"""

    @abstractmethod
    async def count_drivers(
        self, status: Optional[str] = None, operator_id: Optional[str] = None
    ) -> int:
        """Number of drivers, optionally with a status or owning operator"""

    @abstractmethod
    async def count_customers(self, status: Optional[str] = None) -> int:
        """Number of users flagged as customers"""

    @abstractmethod
    async def operator_names(self, operator_ids: Iterable[str]) -> Dict[str, str]:
        """Display names for the given operator ids that exist"""

    @abstractmethod
    async def driver_vehicle_ids(self, user_id: str) -> Optional[List[str]]:
        """Vehicles assigned to the driver owned by ``user_id``; None without a driver"""


class RoleResolver(ABC):
    """Resolves who is asking"""

    @abstractmethod
    async def resolve(self, user_id: str) -> ViewerContext:
        """Role code and operator of the user"""
