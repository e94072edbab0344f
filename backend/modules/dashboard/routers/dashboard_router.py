# backend/modules/dashboard/routers/dashboard_router.py

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Any, Dict, Optional

from core.auth import User, get_current_user
from core.database import SessionLocal

from ..schemas.dashboard_schemas import DashboardQuery, RoleBucket
from ..services.dashboard_service import DashboardService
from ..services.scope_gate import role_bucket_for
from ..utils.query_monitor import query_monitor

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service() -> DashboardService:
    return DashboardService.from_session_factory(SessionLocal)


async def require_platform_viewer(
    service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user),
) -> User:
    """Only platform staff may inspect or reset query statistics"""
    viewer = await service.role_resolver.resolve(current_user.id)
    if role_bucket_for(viewer.role_code) != RoleBucket.PLATFORM:
        raise HTTPException(
            status_code=403,
            detail="Only platform staff can view query statistics"
        )
    return current_user


@router.get("", response_model=None)
async def get_dashboard(
    start_date: Optional[str] = Query(
        None, description="Start date for filtering (ISO format)", examples=["2025-01-01"]
    ),
    end_date: Optional[str] = Query(
        None, description="End date for filtering (ISO format)", examples=["2025-12-31"]
    ),
    operator_id: Optional[str] = Query(
        None, description="Operator filter for platform dashboards"
    ),
    service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    """
    Get dashboard statistics.

    Returns role-based statistics and trends:
    - Platform staff: platform totals, revenue, daily/status/monthly/operator trends
    - Operator admins: operator totals and revenue with daily/status/monthly trends
    - Dispatchers: live order counts with daily/status trends
    - Drivers: today's and month-to-date counts for their vehicles, no trends
    - Customers: their own order counts with a daily trend

    Scope and date errors are mapped to 403 and 400 by the dashboard
    exception handler; an unreachable store yields 503.
    """
    query = DashboardQuery(start_date=start_date, end_date=end_date, operator_id=operator_id)
    response = await service.get_dashboard(current_user.id, query)
    return response.to_payload()


@router.get("/query-stats")
async def get_query_statistics(
    query_name: Optional[str] = Query(None, description="Specific query name to get stats for"),
    current_user: User = Depends(require_platform_viewer),
) -> Dict[str, Any]:
    """
    Get timing statistics for the dashboard sub-queries.

    Returns execution counts, average times and slow query counts.
    """
    if query_name:
        stats = query_monitor.get_statistics(query_name)
        if not stats:
            raise HTTPException(
                status_code=404,
                detail=f"No statistics found for query: {query_name}"
            )
        return stats

    return query_monitor.get_statistics()


@router.delete("/query-stats")
async def reset_query_statistics(
    query_name: Optional[str] = Query(None, description="Reset stats for specific query or all"),
    current_user: User = Depends(require_platform_viewer),
) -> Dict[str, Any]:
    """Reset query statistics, for one query or all of them"""
    query_monitor.reset_statistics(query_name)

    return {
        "status": "success",
        "message": f"Reset statistics for {query_name or 'all queries'}",
    }
