import pytest

from conftest import fake, make_email, register, sign_in, DEFAULT_PASSWORD

pytestmark = pytest.mark.anyio


async def test_register_user(client):
    email = make_email()
    response = await client.post("/api/users", json={
        "email": email,
        "name": "Ada Lovelace",
        "password": DEFAULT_PASSWORD,
    })
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["email"] == email
    assert data["name"] == "Ada Lovelace"
    assert data["preferences"] == {"defaultMode": "web", "microphoneEnabled": True, "autoSave": True}
    assert "password" not in data
    assert "passwordHash" not in data
    assert "createdAt" in data


async def test_register_normalizes_email_case(client):
    email = make_email()
    data = await register(client, email=email.upper().replace("@DESIGNBOARD.IO", "@designboard.io"))
    assert data["email"] == email


async def test_register_duplicate_email(client):
    email = make_email()
    await register(client, email=email)

    response = await client.post("/api/users", json={
        "email": email,
        "name": fake.name(),
        "password": DEFAULT_PASSWORD,
    })
    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "User already exists"}


async def test_register_short_password(client):
    response = await client.post("/api/users", json={
        "email": make_email(),
        "name": fake.name(),
        "password": "123",
    })
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert any(detail["loc"][-1] == "password" for detail in body["details"])


async def test_register_invalid_email(client):
    response = await client.post("/api/users", json={
        "email": "not-an-email",
        "name": fake.name(),
        "password": DEFAULT_PASSWORD,
    })
    assert response.status_code == 400


async def test_register_blank_name(client):
    response = await client.post("/api/users", json={
        "email": make_email(),
        "name": "   ",
        "password": DEFAULT_PASSWORD,
    })
    assert response.status_code == 400
    assert "Name is required" in response.json()["details"][0]["msg"]


async def test_get_user_by_email(client, user_headers):
    other = await register(client)

    response = await client.get("/api/users", params={"email": other["email"]}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["data"]["id"] == other["id"]


async def test_get_user_by_email_requires_param(client, user_headers):
    response = await client.get("/api/users", headers=user_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Email is required"


async def test_get_user_by_email_not_found(client, user_headers):
    response = await client.get("/api/users", params={"email": make_email()}, headers=user_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


async def test_get_user_by_email_requires_auth(client):
    response = await client.get("/api/users", params={"email": make_email()})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


async def test_get_me(client):
    user = await register(client)
    headers = await sign_in(client, user["email"])

    response = await client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == user


async def test_update_me_merges_preferences(client):
    user = await register(client)
    headers = await sign_in(client, user["email"])

    response = await client.put("/api/users/me", headers=headers, json={
        "name": "New Name",
        "preferences": {"defaultMode": "mobile"},
    })
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "New Name"
    assert data["preferences"] == {"defaultMode": "mobile", "microphoneEnabled": True, "autoSave": True}

    # изменения сохранились
    response = await client.get("/api/users/me", headers=headers)
    assert response.json()["data"]["preferences"]["defaultMode"] == "mobile"


async def test_update_me_rejects_unknown_mode(client, user_headers):
    response = await client.put("/api/users/me", headers=user_headers, json={
        "preferences": {"defaultMode": "desktop"},
    })
    assert response.status_code == 400


async def test_register_keeps_image_url_as_sent(client):
    data = await register(client, image="https://cdn.designboard.io")
    assert data["image"] == "https://cdn.designboard.io"


async def test_register_rejects_invalid_image(client):
    response = await client.post("/api/users", json={
        "email": make_email(),
        "name": fake.name(),
        "password": DEFAULT_PASSWORD,
        "image": "not a url",
    })
    assert response.status_code == 400
    assert "Image must be a valid http(s) URL" in response.json()["details"][0]["msg"]


async def test_update_me_keeps_image_url_as_sent(client, user_headers):
    response = await client.put("/api/users/me", headers=user_headers, json={
        "image": "https://avatars.designboard.io",
    })
    assert response.json()["data"]["image"] == "https://avatars.designboard.io"


async def test_register_trims_name_before_length_check(client):
    name = "z" * 100
    data = await register(client, name=f" {name} ")
    assert data["name"] == name
