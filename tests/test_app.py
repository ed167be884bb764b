"""Tests for application startup, shutdown and store failures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from conftest import TEST_DAY, TEST_TOKEN
from outcome_reporter.api.app import create_app, get_db_session
from outcome_reporter.config import Settings
from outcome_reporter.db import session as db_session
from outcome_reporter.errors import ConfigError, UpstreamError


class TestLifespan:
    """Settings and engine lifecycle."""

    def test_missing_config_aborts_startup(self, monkeypatch):
        monkeypatch.delenv("REPORTER_DATABASE_URL", raising=False)
        monkeypatch.delenv("REPORTER_TOKEN", raising=False)

        app = create_app()

        with pytest.raises(ConfigError):
            with TestClient(app):
                pass

    def test_settings_loaded_from_environment(self, monkeypatch):
        monkeypatch.setenv("REPORTER_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("REPORTER_TOKEN", "from-env")

        app = create_app()

        with TestClient(app) as client:
            assert app.state.settings.token == "from-env"
            assert client.get("/health").json() == {"status": "ok"}

    def test_engine_disposed_on_shutdown(self):
        settings = Settings(database_url="sqlite://", token=TEST_TOKEN)

        with TestClient(create_app(settings)):
            assert "sqlite://" in db_session._engine_cache

        assert "sqlite://" not in db_session._engine_cache

    def test_serves_reports_from_configured_store(self):
        """End to end through the real session dependency."""
        settings = Settings(database_url="sqlite://", token=TEST_TOKEN)

        with TestClient(create_app(settings)) as client:
            db_session.init_db(settings.database_url)
            response = client.get(
                "/api/modules/latency",
                params={"token": TEST_TOKEN, "client": "f01234", "date": TEST_DAY},
            )

        assert response.status_code == 200
        assert response.json() == []


class TestHealth:
    """Test GET /health."""

    def test_health_needs_no_token(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestStoreFailure:
    """Store failures are not turned into report responses."""

    def test_missing_table_raises_upstream_error(self, settings):
        engine = create_engine("sqlite:///:memory:")
        app = create_app(settings)

        def override_get_db():
            with Session(engine) as session:
                yield session

        app.dependency_overrides[get_db_session] = override_get_db

        with pytest.raises(UpstreamError):
            TestClient(app).get(
                "/api/modules/outcomes",
                params={"token": TEST_TOKEN, "client": "f01234", "date": TEST_DAY},
            )

    def test_unhandled_upstream_error_is_500(self, settings):
        engine = create_engine("sqlite:///:memory:")
        app = create_app(settings)

        def override_get_db():
            with Session(engine) as session:
                yield session

        app.dependency_overrides[get_db_session] = override_get_db
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get(
            "/api/modules/outcomes",
            params={"token": TEST_TOKEN, "client": "f01234", "date": TEST_DAY},
        )

        assert response.status_code == 500
