# backend/modules/dashboard/services/role_resolver.py

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from modules.courier.models.courier_models import Role, User, UserRole

from ..constants import DEFAULT_ROLE_CODE
from ..schemas.dashboard_schemas import ViewerContext
from ..utils.query_monitor import monitor_query_performance
from .sql_stores import SQLStoreBase
from .stores import RoleResolver

logger = logging.getLogger(__name__)


class SQLRoleResolver(SQLStoreBase, RoleResolver):
    """
    Resolves a viewer from the users table.

    A user holding several roles is treated as the role assigned first.
    The role code is preferred over its name; users without roles, and
    unknown users, are customers.
    """

    store_name = "users"

    @monitor_query_performance("users.resolve_role")
    async def resolve(self, user_id: str) -> ViewerContext:
        def work(db: Session) -> ViewerContext:
            operator_id: Optional[str] = db.execute(
                select(User.operator_id).where(User.id == user_id)
            ).scalar()

            first_role = db.execute(
                select(Role.code, Role.name)
                .join(UserRole, UserRole.role_id == Role.id)
                .where(UserRole.user_id == user_id)
                .order_by(UserRole.assigned_at, UserRole.id)
                .limit(1)
            ).first()

            role_code = DEFAULT_ROLE_CODE
            if first_role is not None:
                role_code = first_role.code or first_role.name or DEFAULT_ROLE_CODE

            return ViewerContext(
                user_id=user_id,
                role_code=role_code.strip().upper(),
                operator_id=operator_id,
            )

        viewer = await self._run(work)
        logger.debug(
            f"Resolved user {user_id} as {viewer.role_code} (operator={viewer.operator_id})"
        )
        return viewer
