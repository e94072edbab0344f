import logging

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.startup import REQUIRED_TABLES, StartupValidator, run_startup_checks
from core.config import Settings
from core.database import Base, engine


@pytest.fixture
def courier_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


class TestStartupValidator:
    """Test startup validation checks"""

    def test_database_connection(self):
        assert StartupValidator().check_database_connection() is True

    def test_missing_tables_are_a_warning(self):
        validator = StartupValidator()

        assert validator.check_required_tables() is True
        assert any("Missing database tables" in w for w in validator.warnings)

    def test_all_tables_present(self, courier_tables):
        validator = StartupValidator()

        validator.check_required_tables()

        assert validator.warnings == []
        assert len(REQUIRED_TABLES) == 9

    def test_dashboard_limits_must_be_positive(self):
        validator = StartupValidator()
        validator.settings = Settings(
            dashboard_daily_trend_days=0, dashboard_top_operators_limit=0
        )

        assert validator.check_dashboard_config() is False
        assert len(validator.errors) == 2

    def test_debug_rejected_in_production(self):
        validator = StartupValidator()
        validator.settings = Settings(
            environment="production", debug=True, jwt_secret_key="a-real-secret"
        )

        assert validator.check_environment_config() is False

    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValueError):
            Settings(environment="production", jwt_secret_key="dev-secret-change-in-production")


def test_startup_checks_pass_with_tables(courier_tables, caplog):
    with caplog.at_level(logging.INFO):
        passed, warnings = run_startup_checks()

    assert passed is True
    assert "All startup checks passed" in caplog.text


def test_cors_origins_are_split():
    settings = Settings(cors_origins="http://a.test, http://b.test,")

    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_health_endpoint():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "test"}
