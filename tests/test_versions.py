import uuid

import pytest

from designboard.core.db import SessionLocal
from designboard.db.models import Version as VersionModel
from conftest import canvas, create_project

pytestmark = pytest.mark.anyio


async def save_version(client, headers, project_id, data=None, **payload):
    body = {"canvasData": data if data is not None else canvas(uuid.uuid4().hex[:6]), **payload}
    response = await client.post(f"/api/projects/{project_id}/versions", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_version_increments_number(client, user_headers):
    project = await create_project(client, user_headers)

    version = await save_version(client, user_headers, project["id"], changelog="Added a box")
    assert version["version"] == 2
    assert version["projectId"] == project["id"]
    assert version["changelog"] == "Added a box"
    assert version["aiCommands"] == []

    version = await save_version(client, user_headers, project["id"])
    assert version["version"] == 3

    response = await client.get(f"/api/projects/{project['id']}", headers=user_headers)
    assert response.json()["data"]["currentVersion"] == 3


async def test_create_version_stores_ai_commands(client, user_headers):
    project = await create_project(client, user_headers)

    version = await save_version(client, user_headers, project["id"], aiCommands=[
        {"command": "draw a red rectangle", "result": "1 element"},
    ])
    assert len(version["aiCommands"]) == 1
    assert version["aiCommands"][0]["command"] == "draw a red rectangle"
    assert version["aiCommands"][0]["timestamp"]


async def test_create_version_with_empty_canvas(client, user_headers):
    """Очищенный холст сохраняется как обычная версия"""
    project = await create_project(client, user_headers)
    empty = {"store": {}, "schema": {"schemaVersion": 2, "sequences": {}}}

    version = await save_version(client, user_headers, project["id"], data=empty)
    assert version["version"] == 2
    assert version["canvasData"] == empty

    response = await client.get(f"/api/projects/{project['id']}/canvas", headers=user_headers)
    assert response.json()["data"]["canvasData"] == empty


@pytest.mark.parametrize("canvas_data", [
    {},
    {"store": {}},
    {"store": [], "schema": {"schemaVersion": 2}},
    {"store": {"page:page": {}}},
    {"schema": {"schemaVersion": 2}},
])
async def test_create_version_rejects_invalid_canvas(client, user_headers, canvas_data):
    project = await create_project(client, user_headers)

    response = await client.post(
        f"/api/projects/{project['id']}/versions",
        headers=user_headers,
        json={"canvasData": canvas_data}
    )
    assert response.status_code == 400

    response = await client.get(f"/api/projects/{project['id']}", headers=user_headers)
    assert response.json()["data"]["currentVersion"] == 1


async def test_create_version_missing_project(client, user_headers):
    response = await client.post(
        f"/api/projects/{uuid.uuid4()}/versions",
        headers=user_headers,
        json={"canvasData": canvas()}
    )
    assert response.status_code == 404


async def test_create_version_foreign_project(client, user_headers, other_headers):
    project = await create_project(client, other_headers)

    response = await client.post(
        f"/api/projects/{project['id']}/versions",
        headers=user_headers,
        json={"canvasData": canvas()}
    )
    assert response.status_code == 403


async def test_create_version_conflict(client, user_headers):
    """Занятый номер версии дает 409, указатель проекта не сдвигается"""
    project = await create_project(client, user_headers)

    # номер 2 уже занят строкой, записанной в обход указателя проекта
    async with SessionLocal() as session:
        session.add(VersionModel(
            project_id=uuid.UUID(project["id"]),
            version=2,
            canvas_data=canvas("stray"),
            ai_commands=[]
        ))
        await session.commit()

    response = await client.post(
        f"/api/projects/{project['id']}/versions",
        headers=user_headers,
        json={"canvasData": canvas("mine")}
    )
    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Version conflict, please retry"}

    response = await client.get(f"/api/projects/{project['id']}", headers=user_headers)
    assert response.json()["data"]["currentVersion"] == 1


async def test_list_versions_paginated(client, user_headers):
    project = await create_project(client, user_headers)
    for _ in range(4):
        await save_version(client, user_headers, project["id"])

    response = await client.get(
        f"/api/projects/{project['id']}/versions",
        headers=user_headers,
        params={"page": 1, "limit": 2}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [version["version"] for version in body["data"]] == [5, 4]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 5, "pages": 3}

    response = await client.get(
        f"/api/projects/{project['id']}/versions",
        headers=user_headers,
        params={"page": 3, "limit": 2}
    )
    assert [version["version"] for version in response.json()["data"]] == [1]


async def test_list_versions_defaults(client, user_headers):
    project = await create_project(client, user_headers)

    response = await client.get(f"/api/projects/{project['id']}/versions", headers=user_headers)
    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
async def test_list_versions_rejects_bad_paging(client, user_headers, params):
    project = await create_project(client, user_headers)

    response = await client.get(f"/api/projects/{project['id']}/versions", headers=user_headers, params=params)
    assert response.status_code == 400


async def test_get_version_not_found(client, user_headers):
    project = await create_project(client, user_headers)

    response = await client.get(f"/api/projects/{project['id']}/versions/42", headers=user_headers)
    assert response.status_code == 404


async def test_restore_version(client, user_headers):
    project = await create_project(client, user_headers)
    original = await save_version(client, user_headers, project["id"], data=canvas("original"))
    await save_version(client, user_headers, project["id"], data=canvas("changed"))

    response = await client.post(
        f"/api/projects/{project['id']}/versions/{original['version']}/restore",
        headers=user_headers
    )
    assert response.status_code == 201
    restored = response.json()["data"]
    assert restored["version"] == 4
    assert restored["changelog"] == "Restored from version 2"
    assert restored["canvasData"] == original["canvasData"]

    # восстановление не переписывает историю
    response = await client.get(f"/api/projects/{project['id']}/versions/3", headers=user_headers)
    assert "shape:changed" in response.json()["data"]["canvasData"]["store"]


async def test_restore_missing_version(client, user_headers):
    project = await create_project(client, user_headers)

    response = await client.post(f"/api/projects/{project['id']}/versions/9/restore", headers=user_headers)
    assert response.status_code == 404

    response = await client.get(f"/api/projects/{project['id']}", headers=user_headers)
    assert response.json()["data"]["currentVersion"] == 1


async def test_canvas_returns_current_version(client, user_headers):
    project = await create_project(client, user_headers)
    await save_version(client, user_headers, project["id"], data=canvas("latest"))

    response = await client.get(f"/api/projects/{project['id']}/canvas", headers=user_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["version"]["version"] == 2
    assert "shape:latest" in data["canvasData"]["store"]


async def test_canvas_adds_missing_meta(client, user_headers):
    project = await create_project(client, user_headers)
    data = canvas("box")
    data["store"]["shape:box"]["meta"] = {"author": "ada"}
    await save_version(client, user_headers, project["id"], data=data)

    response = await client.get(f"/api/projects/{project['id']}/canvas", headers=user_headers)
    store = response.json()["data"]["canvasData"]["store"]
    assert store["page:page"]["meta"] == {}
    assert store["shape:box"]["meta"] == {"author": "ada"}

    # в сохраненной версии meta не появляется
    response = await client.get(f"/api/projects/{project['id']}/versions/2", headers=user_headers)
    assert "meta" not in response.json()["data"]["canvasData"]["store"]["page:page"]


async def test_canvas_foreign_project(client, user_headers, other_headers):
    project = await create_project(client, other_headers)

    response = await client.get(f"/api/projects/{project['id']}/canvas", headers=user_headers)
    assert response.status_code == 403
