"""
Unit tests for GET /api/health.
"""
import pytest
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from cassius.main import app
from cassius.core.dependency import get_redis_repository


@pytest.fixture
def mock_redis_repo():
    repo = Mock()
    repo.health_check = AsyncMock(return_value={"status": "healthy"})
    return repo


@pytest.fixture
def client(mock_redis_repo):
    app.dependency_overrides[get_redis_repository] = lambda: mock_redis_repo

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


def test_health_healthy(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["redis_connection"] == "ok"
    assert data["timestamp"].endswith("Z")


def test_health_degraded_still_200(client, mock_redis_repo):
    mock_redis_repo.health_check.return_value = {"status": "unhealthy", "error": "refused"}

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["redis_connection"] == "error"


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/api/health"
