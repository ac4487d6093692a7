"""
Test suite for health endpoints.

System role: Verification of liveness and database checks
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from studybuddy.boundary.db import get_async_db
from studybuddy.main import create_app


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(db_session: AsyncMock) -> TestClient:
    app = create_app()

    async def override_db():
        yield db_session

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client: TestClient) -> None:
    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}


def test_health_check_db_failure(client: TestClient, db_session: AsyncMock) -> None:
    db_session.execute.side_effect = ConnectionError("refused")

    response = client.get("/api/v1/health/db")

    assert response.json()["status"] == "unhealthy"


def test_correlation_id_is_echoed(client: TestClient) -> None:
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
