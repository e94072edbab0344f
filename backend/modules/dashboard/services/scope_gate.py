# backend/modules/dashboard/services/scope_gate.py

"""
Scope gate: decides which tenant predicates every dashboard query carries.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from modules.courier.enums.courier_enums import RoleCode

from ..constants import PLATFORM_ROLE_CODES
from ..exceptions import ScopeRequiredError
from ..schemas.dashboard_schemas import RoleBucket, ViewerContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardScope:
    """Ownership predicate resolved once per request"""

    bucket: RoleBucket
    user_id: str
    operator_id: Optional[str] = None
    customer_id: Optional[str] = None


def role_bucket_for(role_code: Optional[str]) -> RoleBucket:
    """Map a role code to its strategy; unknown codes fall back to customer."""
    code = (role_code or "").strip().upper()
    if code in PLATFORM_ROLE_CODES:
        return RoleBucket.PLATFORM
    if code == RoleCode.OPERATOR_ADMIN.value:
        return RoleBucket.OPERATOR_ADMIN
    if code == RoleCode.DISPATCHER.value:
        return RoleBucket.DISPATCHER
    if code == RoleCode.DRIVER.value:
        return RoleBucket.DRIVER
    if code != RoleCode.CUSTOMER.value:
        logger.info(f"Unrecognised role code {role_code!r}, using customer scope")
    return RoleBucket.CUSTOMER


def resolve_scope(
    viewer: ViewerContext, requested_operator_id: Optional[str] = None
) -> DashboardScope:
    """
    Resolve the scope for a viewer.

    Platform roles may narrow to a requested operator. Operator admins and
    dispatchers are pinned to their own operator and fail without one; the
    requested operator is ignored for them. Drivers are scoped later through
    their vehicles. Customers and unknown roles only see their own orders.
    Drivers and customers who belong to an operator stay inside it.
    """
    bucket = role_bucket_for(viewer.role_code)

    if bucket == RoleBucket.PLATFORM:
        return DashboardScope(
            bucket=bucket,
            user_id=viewer.user_id,
            operator_id=requested_operator_id or None,
        )

    if bucket in (RoleBucket.OPERATOR_ADMIN, RoleBucket.DISPATCHER):
        if not viewer.operator_id:
            logger.warning(
                f"User {viewer.user_id} has role {viewer.role_code} but no operator"
            )
            raise ScopeRequiredError(viewer.role_code, viewer.user_id)
        return DashboardScope(
            bucket=bucket, user_id=viewer.user_id, operator_id=viewer.operator_id
        )

    if bucket == RoleBucket.DRIVER:
        return DashboardScope(
            bucket=bucket, user_id=viewer.user_id, operator_id=viewer.operator_id
        )

    return DashboardScope(
        bucket=RoleBucket.CUSTOMER,
        user_id=viewer.user_id,
        operator_id=viewer.operator_id,
        customer_id=viewer.user_id,
    )
