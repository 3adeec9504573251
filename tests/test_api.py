"""API endpoint tests."""

from fastapi.testclient import TestClient

from src.api.dependencies import get_like_client
from src.database import get_db
from src.main import app


def test_index(client):
    """Test the greeting endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"msg": "Hello world!"}


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unknown_route_uses_error_shape(client):
    """Unknown routes answer with the common error body."""
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"status": 404, "msg": "Not Found"}


def test_validation_error_shape(client, roles):
    """Invalid bodies are reported per field with status 400."""
    response = client.post(
        "/api/v1/users",
        json={"name": "Al", "email": "not-an-email", "password": "weak", "role_id": 2},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["status"] == 400
    assert data["msg"] == "Invalid request body"
    params = {error["param"] for error in data["errors"]}
    assert {"name", "email", "password"} <= params


def test_protected_route_requires_token(client):
    """Requests without a bearer token are rejected with 401."""
    response = client.get("/api/v1/ideas")
    assert response.status_code == 401
    assert response.json() == {"status": 401, "msg": "Unauthorized"}


def test_protected_route_rejects_bad_token(client):
    """A token that does not verify is rejected with 401."""
    response = client.get("/api/v1/ideas", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_unexpected_error_is_generic(db, roles, auth_for, make_user):
    """Uncaught errors become a 500 with a fixed body and no internal detail."""
    def broken_like_client():
        raise RuntimeError("boom")

    user = make_user("Carol", "carol@example.com")
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_like_client] = broken_like_client
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/v1/likes", headers=auth_for(user))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"status": 500, "msg": "Internal server error"}
    assert "boom" not in response.text
