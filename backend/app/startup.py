"""
Application startup validation and initialization.

This module performs startup checks and configures logging so problems
with configuration or the database surface before serving requests.
"""

import logging
import sys
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from core.config import DEFAULT_JWT_SECRET, get_settings
from core.database import engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "operators",
    "users",
    "roles",
    "user_roles",
    "vehicles",
    "drivers",
    "vehicle_drivers",
    "orders",
    "payments",
]


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.settings = get_settings()
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        if self.settings.is_production:
            if self.settings.debug:
                self.errors.append("DEBUG is enabled in production")
                return False
        elif self.settings.jwt_secret_key == DEFAULT_JWT_SECRET:
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")
        return True

    def check_dashboard_config(self) -> bool:
        """Validate the dashboard trend settings"""
        if self.settings.dashboard_daily_trend_days < 1:
            self.errors.append("DASHBOARD_DAILY_TREND_DAYS must be at least 1")
        if self.settings.dashboard_top_operators_limit < 1:
            self.errors.append("DASHBOARD_TOP_OPERATORS_LIMIT must be at least 1")
        if self.settings.dashboard_slow_query_seconds <= 0:
            self.warnings.append(
                "DASHBOARD_SLOW_QUERY_SECONDS is not positive; every query will be logged as slow"
            )
        return not self.errors

    def check_required_tables(self) -> bool:
        """Check if required database tables exist"""
        try:
            existing_tables = sa.inspect(engine).get_table_names()
        except sa.exc.SQLAlchemyError as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.warnings.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Dashboard Configuration", self.check_dashboard_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True

        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks():
    """Run all startup validation checks"""
    settings = get_settings()
    logger.info("=" * 60)
    logger.info("Starting courier dashboard backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"  {warning}")

    for error in errors:
        logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")

    return passed, warnings


def configure_logging():
    """Configure root logging from settings"""
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
