# backend/modules/dashboard/services/sql_stores.py

"""
SQLAlchemy implementations of the dashboard store interfaces.

Each primitive opens its own session and runs in a worker thread, so the
dashboard can issue its sub-queries concurrently without sharing a
connection between them.
"""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from sqlalchemy import extract, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from modules.courier.models.courier_models import (
    Driver, Operator, Order, Payment, User, Vehicle, VehicleDriver
)

from ..exceptions import DependencyUnavailableError
from ..utils.query_monitor import monitor_query_performance
from .stores import (
    GROUPABLE_ORDER_FIELDS,
    DirectoryStore,
    OrderCriteria,
    OrderStore,
    PaymentCriteria,
    PaymentStore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class SQLStoreBase:
    """Runs one read per session on a worker thread"""

    store_name = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _execute(self, work: Callable[[Session], T]) -> T:
        session = self.session_factory()
        try:
            return work(session)
        except SQLAlchemyError as e:
            logger.error(f"{self.store_name} query failed: {e}")
            raise DependencyUnavailableError(self.store_name, str(e)) from e
        finally:
            session.close()

    async def _run(self, work: Callable[[Session], T]) -> T:
        return await asyncio.to_thread(self._execute, work)


def _apply_order_criteria(stmt, criteria: OrderCriteria):
    stmt = stmt.where(Order.deleted_at.is_(None))
    if criteria.operator_id:
        stmt = stmt.where(Order.operator_id == criteria.operator_id)
    if criteria.customer_id:
        stmt = stmt.where(Order.customer_id == criteria.customer_id)
    if criteria.vehicle_ids is not None:
        stmt = stmt.where(Order.vehicle_id.in_(list(criteria.vehicle_ids)))
    if criteria.statuses is not None:
        stmt = stmt.where(Order.status.in_(sorted(criteria.statuses)))
    if criteria.created_from is not None:
        stmt = stmt.where(Order.created_at >= criteria.created_from)
    if criteria.created_to is not None:
        stmt = stmt.where(Order.created_at <= criteria.created_to)
    if criteria.updated_from is not None:
        stmt = stmt.where(Order.updated_at >= criteria.updated_from)
    return stmt


def _apply_payment_criteria(stmt, criteria: PaymentCriteria):
    stmt = stmt.where(Payment.deleted_at.is_(None))
    if criteria.operator_id:
        stmt = stmt.where(Payment.operator_id == criteria.operator_id)
    if criteria.customer_id:
        stmt = stmt.where(Payment.customer_id == criteria.customer_id)
    if criteria.statuses is not None:
        stmt = stmt.where(Payment.status.in_(sorted(criteria.statuses)))
    if criteria.created_from is not None:
        stmt = stmt.where(Payment.created_at >= criteria.created_from)
    if criteria.created_to is not None:
        stmt = stmt.where(Payment.created_at <= criteria.created_to)
    return stmt


class SQLOrderStore(SQLStoreBase, OrderStore):
    store_name = "orders"

    @monitor_query_performance("orders.count")
    async def count_orders(self, criteria: OrderCriteria) -> int:
        stmt = _apply_order_criteria(select(func.count(Order.id)), criteria)
        return await self._run(lambda db: int(db.execute(stmt).scalar() or 0))

    @monitor_query_performance("orders.count_by")
    async def count_orders_by(
        self, field: str, criteria: OrderCriteria
    ) -> List[Tuple[Optional[str], int]]:
        if field not in GROUPABLE_ORDER_FIELDS:
            raise ValueError(f"Orders cannot be grouped by '{field}'")

        column = getattr(Order, field)
        stmt = _apply_order_criteria(
            select(column, func.count(Order.id)), criteria
        ).group_by(column)

        def work(db: Session):
            return [(value, int(count)) for value, count in db.execute(stmt).all()]

        return await self._run(work)

    @monitor_query_performance("orders.created_times")
    async def order_created_times(self, criteria: OrderCriteria) -> List[datetime]:
        stmt = _apply_order_criteria(select(Order.created_at), criteria)
        return await self._run(lambda db: list(db.execute(stmt).scalars().all()))


class SQLPaymentStore(SQLStoreBase, PaymentStore):
    store_name = "payments"

    @monitor_query_performance("payments.sum")
    async def sum_amount(self, criteria: PaymentCriteria) -> Decimal:
        stmt = _apply_payment_criteria(select(func.sum(Payment.amount)), criteria)
        return await self._run(lambda db: _to_decimal(db.execute(stmt).scalar()))

    @monitor_query_performance("payments.sum_by_month")
    async def sum_amount_by_month(self, criteria: PaymentCriteria) -> Dict[int, Decimal]:
        month = extract("month", Payment.created_at)
        stmt = _apply_payment_criteria(
            select(month, func.sum(Payment.amount)), criteria
        ).group_by(month)

        def work(db: Session) -> Dict[int, Decimal]:
            return {
                int(month_number): _to_decimal(total)
                for month_number, total in db.execute(stmt).all()
                if month_number is not None
            }

        return await self._run(work)


class SQLDirectoryStore(SQLStoreBase, DirectoryStore):
    store_name = "directory"

    @monitor_query_performance("directory.count_operators")
    async def count_operators(
        self, status: Optional[str] = None, operator_id: Optional[str] = None
    ) -> int:
        stmt = select(func.count(Operator.id)).where(Operator.deleted_at.is_(None))
        if status:
            stmt = stmt.where(Operator.status == status)
        if operator_id:
            stmt = stmt.where(Operator.id == operator_id)
        return await self._run(lambda db: int(db.execute(stmt).scalar() or 0))

    @monitor_query_performance("directory.count_vehicles")
    async def count_vehicles(self, operator_id: Optional[str] = None) -> int:
        stmt = select(func.count(Vehicle.id)).where(Vehicle.deleted_at.is_(None))
        if operator_id:
            stmt = stmt.where(Vehicle.operator_id == operator_id)
        return await self._run(lambda db: int(db.execute(stmt).scalar() or 0))

    @monitor_query_performance("directory.count_drivers")
    async def count_drivers(
        self, status: Optional[str] = None, operator_id: Optional[str] = None
    ) -> int:
        stmt = select(func.count(Driver.id)).where(Driver.deleted_at.is_(None))
        if status:
            stmt = stmt.where(Driver.status == status)
        if operator_id:
            stmt = stmt.where(Driver.operator_id == operator_id)
        return await self._run(lambda db: int(db.execute(stmt).scalar() or 0))

    @monitor_query_performance("directory.count_customers")
    async def count_customers(self, status: Optional[str] = None) -> int:
        stmt = select(func.count(User.id)).where(
            User.deleted_at.is_(None), User.is_customer.is_(True)
        )
        if status:
            stmt = stmt.where(User.status == status)
        return await self._run(lambda db: int(db.execute(stmt).scalar() or 0))

    @monitor_query_performance("directory.operator_names")
    async def operator_names(self, operator_ids: Iterable[str]) -> Dict[str, str]:
        ids = [operator_id for operator_id in operator_ids if operator_id]
        if not ids:
            return {}
        stmt = select(Operator.id, Operator.name).where(Operator.id.in_(ids))
        return await self._run(
            lambda db: {row.id: row.name for row in db.execute(stmt).all()}
        )

    @monitor_query_performance("directory.driver_vehicle_ids")
    async def driver_vehicle_ids(self, user_id: str) -> Optional[List[str]]:
        def work(db: Session) -> Optional[List[str]]:
            driver_id = db.execute(
                select(Driver.id)
                .where(Driver.user_id == user_id, Driver.deleted_at.is_(None))
                .order_by(Driver.created_at, Driver.id)
                .limit(1)
            ).scalar()
            if driver_id is None:
                return None

            return list(
                db.execute(
                    select(VehicleDriver.vehicle_id)
                    .where(VehicleDriver.driver_id == driver_id)
                    .order_by(VehicleDriver.assigned_at, VehicleDriver.id)
                ).scalars().all()
            )

        return await self._run(work)
