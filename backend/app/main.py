from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.exceptions import register_exception_handlers
from app.startup import configure_logging, run_startup_checks

from modules.dashboard.exceptions import (
    DashboardBaseException,
    dashboard_exception_handler,
)
from modules.dashboard.routers.dashboard_router import router as dashboard_router

settings = get_settings()
configure_logging()

app = FastAPI(
    title="Courier Platform - Dashboard API",
    description="""
    Role-scoped analytics for the courier delivery platform.

    ## Features

    * **Platform Dashboard** - Platform-wide order, fleet, customer and revenue totals
    * **Operator Dashboard** - Operator-scoped orders and revenue
    * **Dispatcher Dashboard** - Live order pipeline for an operator
    * **Driver Dashboard** - Today's work on the driver's vehicles
    * **Customer Dashboard** - A customer's own orders

    ## Authentication

    All dashboard endpoints require a JWT bearer token.
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)
app.add_exception_handler(DashboardBaseException, dashboard_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dashboard_router)


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok", "environment": settings.environment}


@app.on_event("startup")
async def startup_event():
    """Validate configuration and database on application startup"""
    run_startup_checks()
