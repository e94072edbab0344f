"""
API-wide error types and handlers.

Every error body the courier API returns has the same three keys:
``detail``, ``error_code`` and ``path``. Module-specific handlers (see
``modules.dashboard.exceptions``) add their own fields on top.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """HTTP error carrying a stable machine-readable code"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class AuthenticationError(APIError):
    """Missing, malformed or expired bearer token"""

    def __init__(
        self, detail: str = "Authentication failed", error_code: str = "AUTH_FAILED"
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"},
        )


def error_response(
    request: Request,
    status_code: int,
    detail: str,
    error_code: Optional[str],
    headers: Optional[Dict[str, Any]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = dict(extra or {})
    content.update({
        "detail": detail,
        "error_code": error_code,
        "path": str(request.url.path),
    })
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Report a ValueError raised below the router as a bad request"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR"
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.info(f"Rejected unauthenticated request to {request.url.path}")
    return error_response(
        request, exc.status_code, exc.detail, exc.error_code, headers=exc.headers
    )


def register_exception_handlers(app):
    """Register the API-wide exception handlers with the FastAPI app"""
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(APIError, handle_api_error)
