import pytest

from designboard import __version__
from designboard.api.http import health

pytestmark = pytest.mark.anyio


async def test_health_check(client):
    """Сервис и база данных доступны"""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__, "database": "ok"}


async def test_health_check_database_unavailable(client, monkeypatch):
    """Недоступная база данных дает 503"""
    async def broken_ping():
        raise OSError("connection refused")

    monkeypatch.setattr(health, "ping", broken_ping)

    response = await client.get("/health")
    assert response.status_code == 503
    assert response.json()["database"] == "unavailable"


async def test_root_without_static_bundle(client):
    """Без собранного клиента корень отдает описание API"""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "DesignBoard API"
    assert data["health"] == "/health"


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}
