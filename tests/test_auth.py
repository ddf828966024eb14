# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient


def login(client: TestClient, email="superadmin@university.edu", password="SuperSecure123!"):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_login_success(client: TestClient):
    response = login(client)

    assert response.status_code == 200
    data = response.json()
    assert data["active_tab"] == "dashboard"
    assert data["session"]["role"] == "ADMIN"
    assert "security-lockdown" in data["session"]["permissions"]


def test_login_invalid_credentials(client: TestClient):
    response = login(client, password="wrongpassword")

    assert response.status_code == 401
    assert response.json()["code"] == "invalid_credentials"
    assert client.get("/auth/login-error").json()["error"] == "Invalid identity or access key"


def test_me_requires_session(client: TestClient):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "not_authenticated"


def test_logout_then_me(client: TestClient):
    login(client)

    assert client.post("/auth/logout").json() == {"signed_out": True}
    assert client.get("/auth/me").status_code == 401


def test_restore_after_restart(app, client: TestClient):
    login(client, "s1001@university.edu", "StudentTemp123!")
    console = app.state.console
    console._session = None

    response = client.post("/auth/restore")

    assert response.status_code == 200
    assert response.json()["session"]["user_id"] == "s1001"


def test_impersonate_forbidden_for_dorm_admin(client: TestClient):
    login(client, "dormadmin1@university.edu", "DormAdmin123!")

    response = client.post("/auth/impersonate", json={"user_id": "s1002"})

    assert response.status_code == 403
    assert response.json()["code"] == "permission_denied"


def test_impersonate_as_superadmin(client: TestClient):
    login(client)

    response = client.post("/auth/impersonate", json={"user_id": "s1002"})

    assert response.status_code == 200
    assert response.json()["impersonated_by"] == "University Head"
    assert response.json()["active_tab"] == "my-room"
