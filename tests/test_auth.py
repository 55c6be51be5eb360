import pytest

from designboard.core.config import settings
from designboard.core.security import create_access_token
from conftest import register, sign_in, DEFAULT_PASSWORD

pytestmark = pytest.mark.anyio


async def test_signin_returns_token_and_sets_cookie(client):
    user = await register(client)

    response = await client.post(
        "/api/auth/signin",
        json={"email": user["email"], "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == user["id"]
    assert data["user"]["email"] == user["email"]
    assert data["tokenType"] == "bearer"
    assert data["accessToken"]
    assert "expiresAt" in data

    set_cookie = response.headers["set-cookie"]
    assert f"{settings.session_cookie_name}=" in set_cookie
    assert "httponly" in set_cookie.lower()


async def test_signin_email_is_case_insensitive(client):
    user = await register(client)
    headers = await sign_in(client, user["email"].upper())
    response = await client.get("/api/users/me", headers=headers)
    assert response.json()["data"]["id"] == user["id"]


async def test_signin_wrong_password(client):
    user = await register(client)

    response = await client.post(
        "/api/auth/signin",
        json={"email": user["email"], "password": "not-the-password"}
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid email or password"}


async def test_signin_unknown_email(client):
    response = await client.post(
        "/api/auth/signin",
        json={"email": "nobody@designboard.io", "password": DEFAULT_PASSWORD}
    )
    assert response.status_code == 401


async def test_session_with_bearer_token(client):
    user = await register(client)
    headers = await sign_in(client, user["email"])

    response = await client.get("/api/auth/session", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {
        "id": user["id"],
        "email": user["email"],
        "name": user["name"],
        "image": None,
    }


async def test_session_with_cookie(client):
    """Токен принимается и из cookie сессии"""
    user = await register(client)
    headers = await sign_in(client, user["email"])
    token = headers["Authorization"].split(" ", 1)[1]

    response = await client.get(
        "/api/auth/session",
        headers={"Cookie": f"{settings.session_cookie_name}={token}"}
    )
    assert response.json()["data"]["id"] == user["id"]


async def test_session_without_credentials(client):
    response = await client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None}


async def test_session_with_garbage_token(client):
    response = await client.get("/api/auth/session", headers={"Authorization": "Bearer garbage"})
    assert response.json()["data"] is None


async def test_token_for_deleted_user_is_rejected(client):
    token, _ = create_access_token({"sub": "6f1d2b7e-0000-4000-8000-000000000000"})
    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_signout_clears_cookie(client):
    response = await client.post("/api/auth/signout")
    assert response.status_code == 200
    assert response.json()["message"] == "Successfully signed out"
    assert f"{settings.session_cookie_name}=" in response.headers["set-cookie"]
