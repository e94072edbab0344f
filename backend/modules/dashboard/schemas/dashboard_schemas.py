# backend/modules/dashboard/schemas/dashboard_schemas.py

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Union
from datetime import datetime
from decimal import Decimal
from enum import Enum


class RoleBucket(str, Enum):
    """Strategy selected for a viewer's role code"""

    PLATFORM = "platform"
    OPERATOR_ADMIN = "operator_admin"
    DISPATCHER = "dispatcher"
    DRIVER = "driver"
    CUSTOMER = "customer"


class CamelModel(BaseModel):
    """Serialises snake_case attributes with camelCase keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardQuery(BaseModel):
    """Query parameters accepted by GET /dashboard"""

    start_date: Optional[str] = Field(
        None, description="Start date for filtering (ISO format)", examples=["2025-01-01"]
    )
    end_date: Optional[str] = Field(
        None, description="End date for filtering (ISO format)", examples=["2025-12-31"]
    )
    operator_id: Optional[str] = Field(
        None, description="Operator filter, honoured for platform roles only"
    )


class ViewerContext(BaseModel):
    """Identity of the user requesting the dashboard"""

    user_id: str
    role_code: str
    operator_id: Optional[str] = None


class TimeWindow(BaseModel):
    """Inclusive instant range applied to windowed aggregates"""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime


# Trend series points


class ChartPoint(BaseModel):
    """One bar or line point: category label and value"""

    x: str
    y: Union[int, Decimal]


class StatusCount(BaseModel):
    """Order count for one status"""

    label: str
    value: int


# Role-specific stats


class PlatformStats(CamelModel):
    total_orders: int = 0
    active_orders: int = 0
    completed_orders: int = 0
    total_operators: int = 0
    total_vehicles: int = 0
    total_drivers: int = 0
    total_customers: int = 0
    total_revenue: Decimal = Decimal("0")


class OperatorStats(CamelModel):
    total_orders: int = 0
    active_orders: int = 0
    completed_orders: int = 0
    total_revenue: Decimal = Decimal("0")


class DispatcherStats(CamelModel):
    pending_orders: int = 0
    in_transit_orders: int = 0
    completed_today: int = 0
    active_orders: int = 0


class DriverStats(CamelModel):
    today_deliveries: int = 0
    completed: int = 0
    in_progress: int = 0
    total_this_month: int = 0


class CustomerStats(CamelModel):
    total_orders: int = 0
    in_transit_orders: int = 0
    completed_orders: int = 0
    pending_orders: int = 0


DashboardStats = Union[PlatformStats, OperatorStats, DispatcherStats, DriverStats, CustomerStats]


class DashboardTrends(CamelModel):
    """Trend series; a role only fills the series it defines"""

    orders_by_day: Optional[List[ChartPoint]] = None
    orders_by_status: Optional[List[StatusCount]] = None
    revenue_by_month: Optional[List[ChartPoint]] = None
    orders_by_operator: Optional[List[ChartPoint]] = None


class DashboardResponse(BaseModel):
    """Dashboard payload: scalar stats plus optional trend series"""

    stats: DashboardStats
    trends: Optional[DashboardTrends] = None

    def to_payload(self) -> dict:
        """Wire representation with camelCase keys and absent series dropped"""
        return self.model_dump(by_alias=True, exclude_none=True)
