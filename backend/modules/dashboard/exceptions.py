# backend/modules/dashboard/exceptions.py

"""
Custom exceptions for dashboard module.

Every dashboard error carries a stable error code so the API layer can
map it onto an HTTP status without inspecting messages.
"""

import logging
from typing import Optional, Dict, Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from core.exceptions import error_response

logger = logging.getLogger(__name__)


class DashboardBaseException(Exception):
    """Base exception for all dashboard errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ScopeRequiredError(DashboardBaseException):
    """Raised when an operator-scoped role has no operator assigned"""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, role_code: str, user_id: Optional[str] = None):
        message = f"Operator ID is required for role '{role_code}'"
        details = {
            "role_code": role_code,
            "user_id": user_id,
        }
        super().__init__(message, "SCOPE_REQUIRED", details)


class InvalidDateError(DashboardBaseException):
    """Raised when a date filter cannot be parsed"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, value: Any):
        message = f"Invalid date for '{field}': {value!r} is not an ISO date"
        details = {
            "field": field,
            "value": value,
        }
        super().__init__(message, "INVALID_DATE", details)


class DependencyUnavailableError(DashboardBaseException):
    """Raised when the order or payment store cannot be reached"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, store: str, reason: str):
        message = f"Dashboard data source '{store}' unavailable: {reason}"
        details = {
            "store": store,
            "reason": reason,
        }
        super().__init__(message, "DEPENDENCY_UNAVAILABLE", details)


def handle_dashboard_exception(exc: DashboardBaseException) -> Dict[str, Any]:
    """Convert dashboard exception to API response format"""
    return {
        "error": {
            "code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    }


async def dashboard_exception_handler(
    request: Request, exc: DashboardBaseException
) -> JSONResponse:
    """FastAPI handler turning dashboard errors into JSON responses"""
    if exc.status_code >= 500:
        logger.error(f"Dashboard error at {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Dashboard error at {request.url.path}: {exc.message}")

    return error_response(
        request,
        exc.status_code,
        exc.message,
        exc.error_code,
        extra=handle_dashboard_exception(exc),
    )
