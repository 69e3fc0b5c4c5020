"""API tests for system routes and trace propagation.

Tests:
- GET / (service status)
- GET /health (database connectivity, 503 when degraded)
- X-Trace-Id response header
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

import src.core.container as container
from src.core.config import settings
from src.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _database(connected: bool) -> Mock:
    database = Mock()
    database.check_connection = AsyncMock(return_value=connected)
    return database


@pytest.mark.api
class TestSystemRoutes:
    """Root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": settings.app_name,
            "status": "operational",
            "version": settings.app_version,
        }

    def test_health_ok(self, client, monkeypatch):
        monkeypatch.setattr(container, "get_database", lambda: _database(True))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "ok"}

    def test_health_degraded(self, client, monkeypatch):
        monkeypatch.setattr(container, "get_database", lambda: _database(False))

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "database": "unavailable"}


@pytest.mark.api
class TestTraceId:
    """Every response carries a trace id."""

    def test_generated_trace_id(self, client):
        response = client.get("/")

        assert len(response.headers["X-Trace-Id"]) == 36

    def test_incoming_trace_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Trace-Id": "trace-abc"})

        assert response.headers["X-Trace-Id"] == "trace-abc"

    def test_trace_id_in_problem_details(self, client):
        response = client.get("/api/v1/invoices", headers={"X-Trace-Id": "trace-401"})

        assert response.status_code == 401
        assert response.json()["trace_id"] == "trace-401"
        assert response.headers["X-Trace-Id"] == "trace-401"
