import pytest
from datetime import timedelta
from fastapi import status
from pathforge.services import auth as auth_service
from conftest import USER_PASSWORD


def _register(client, **overrides):
    payload = {"name": "Test User", "email": "test.user@example.com", "password": "testpassword123"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_returns_token_and_user(client):
    response = _register(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["success"] is True
    assert data["user"]["email"] == "test.user@example.com"
    assert data["user"]["name"] == "Test User"
    assert "createdAt" in data["user"]
    assert "password" not in data["user"]

    payload = auth_service.decode_access_token(data["token"])
    assert payload["sub"] == str(data["user"]["id"])


def test_register_normalizes_email_case(client):
    response = _register(client, email="Mixed.Case@Example.com")
    assert response.json()["user"]["email"] == "mixed.case@example.com"


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == status.HTTP_201_CREATED
    response = _register(client, name="Someone Else")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["success"] is False


@pytest.mark.parametrize("overrides, field", [
    ({"name": "A"}, "name"),
    ({"email": "not-an-email"}, "email"),
    ({"password": "12345"}, "password"),
])
def test_register_validation(client, overrides, field):
    response = _register(client, **overrides)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    fields = [e["field"] for e in response.json()["errors"]]
    assert field in fields


def test_login_success(client, user):
    """Test successful login with valid credentials."""
    response = client.post("/api/auth/login", json={"email": user.email, "password": USER_PASSWORD})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token"]
    assert data["user"]["id"] == user.id


def test_login_invalid_credentials(client, user):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"email": user.email, "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    response = client.post("/api/auth/login", json={"email": "nonexistent@example.com", "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_returns_current_user(client, user, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == user.email


def test_expired_token_rejected(client, user, get_token):
    token = get_token(user, expires_delta=timedelta(seconds=-1))
    response = client.get("/api/jobs", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == auth_service.TOKEN_EXPIRED


def test_token_for_deleted_user_rejected(client, db_session, user, get_token):
    token = get_token(user)
    db_session.delete(user)
    db_session.commit()
    response = client.get("/api/jobs", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
