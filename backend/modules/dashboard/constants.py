# backend/modules/dashboard/constants.py

"""
Constants shared by the dashboard analytics services.
"""

from modules.courier.enums.courier_enums import OrderStatus, RoleCode

# Order status groupings
ACTIVE_ORDER_STATUSES = frozenset(
    {OrderStatus.IN_TRANSIT.value, OrderStatus.CREATED.value, OrderStatus.ASSIGNED.value}
)
COMPLETED_ORDER_STATUSES = frozenset({OrderStatus.DELIVERED.value})
DRIVER_IN_PROGRESS_STATUSES = frozenset(
    {OrderStatus.IN_TRANSIT.value, OrderStatus.ASSIGNED.value}
)
PENDING_ORDER_STATUSES = frozenset({OrderStatus.CREATED.value})
IN_TRANSIT_ORDER_STATUSES = frozenset({OrderStatus.IN_TRANSIT.value})

# Role groupings
PLATFORM_ROLE_CODES = frozenset(
    {RoleCode.SUPER_ADMIN.value, RoleCode.PLATFORM_SUPPORT.value}
)
DEFAULT_ROLE_CODE = RoleCode.CUSTOMER.value

# Trend series
DAILY_TREND_DAYS = 7
TOP_OPERATORS_LIMIT = 5
UNKNOWN_OPERATOR_LABEL = "Unknown"
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Revenue buckets are keyed by month name only, so payments from any year
# land in the bucket with the matching label.
REVENUE_MONTH_LABELS = MONTH_LABELS[:6]
