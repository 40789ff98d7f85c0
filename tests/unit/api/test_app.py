"""Tests for application wiring: health, banner, request ids, error handling."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from src.users_api.api.http.deps import get_user_service
from src.users_api.core.exceptions import InternalError


class _ExplodingService:
    def __init__(self, error: Exception):
        self._error = error

    def get_user(self, user_id: str):
        raise self._error


def test_index_banner(client: TestClient):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["message"].startswith("users-api")
    assert body["uptime"] >= 0


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "healthy", "service": "users-api"}


def test_readiness_checks_database(client: TestClient):
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == {"status": "healthy", "type": "sqlite"}


def test_readiness_reports_unavailable_database(client: TestClient, app: FastAPI, monkeypatch):
    database_service = app.state.app_dependencies.database_service
    monkeypatch.setattr(database_service, "health_check", lambda: False)

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated(client: TestClient):
    response = client.get("/users/unknown")

    request_id = response.headers["X-Request-ID"]
    assert request_id
    assert response.json()["request_id"] == request_id


def test_persistence_failure_is_a_generic_500(client: TestClient, app: FastAPI):
    error = OperationalError("SELECT secret_column FROM users", {}, Exception("disk I/O error"))
    app.dependency_overrides[get_user_service] = lambda: _ExplodingService(error)

    response = client.get("/users/any")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal Server Error"
    assert "secret_column" not in response.text
    assert "disk" not in response.text


def test_internal_error_message_is_hidden(client: TestClient, app: FastAPI):
    app.dependency_overrides[get_user_service] = lambda: _ExplodingService(
        InternalError("replica lag on shard 7")
    )

    response = client.get("/users/any")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal Server Error"
    assert "shard" not in response.text


def test_unexpected_failure_is_a_generic_500(client: TestClient, app: FastAPI):
    app.dependency_overrides[get_user_service] = lambda: _ExplodingService(
        RuntimeError("token=hunter2")
    )

    response = client.get("/users/any")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal Server Error"
    assert "hunter2" not in response.text


def test_unknown_route_uses_error_shape(client: TestClient):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["message"] == "Not Found"
