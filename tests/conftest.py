import os
import tempfile
import uuid

# Настройки читаются при импорте приложения, поэтому окружение задается раньше
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"designboard-test-{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["STATIC_DIR"] = os.path.join(tempfile.gettempdir(), "designboard-no-static")

import pytest
from faker import Faker
from httpx import AsyncClient, ASGITransport

from designboard.core.db import engine, create_tables, drop_tables
from designboard.main import app

fake = Faker()

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def database():
    """Чистая схема на каждый тест"""
    await drop_tables()
    await create_tables()
    yield
    await engine.dispose()


@pytest.fixture
async def client(database):
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(scope="session", autouse=True)
def remove_test_database():
    yield
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


def make_email() -> str:
    return f"{fake.user_name()}.{uuid.uuid4().hex[:8]}@designboard.io"


async def register(client, email=None, password=DEFAULT_PASSWORD, **extra):
    """Регистрация пользователя, возвращает data из ответа"""
    payload = {
        "email": email or make_email(),
        "name": fake.name(),
        "password": password,
        **extra,
    }
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def sign_in(client, email, password=DEFAULT_PASSWORD):
    """Вход, возвращает заголовки с bearer-токеном"""
    response = await client.post("/api/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    # дальше авторизация только через заголовок
    client.cookies.clear()
    token = response.json()["data"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user_headers(client):
    user = await register(client)
    return await sign_in(client, user["email"])


@pytest.fixture
async def other_headers(client):
    user = await register(client)
    return await sign_in(client, user["email"])


async def create_project(client, headers, **payload):
    body = {"name": fake.catch_phrase()[:100], **payload}
    response = await client.post("/api/projects", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def canvas(*shape_ids):
    """Минимальный снимок холста с заданными фигурами"""
    store = {"page:page": {"id": "page:page", "typeName": "page", "name": "Page 1", "index": "a1"}}
    for shape_id in shape_ids:
        store[f"shape:{shape_id}"] = {"id": f"shape:{shape_id}", "typeName": "shape", "type": "geo"}
    return {"store": store, "schema": {"schemaVersion": 2, "sequences": {}}}
