from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from edio.stores import InMemoryProjectStore


def test_create_project(client: TestClient, store: InMemoryProjectStore, youtuber) -> None:
    response = client.post(
        "/api/projects",
        json={"projectTitle": "  Cooking series ep. 3 ", "videoTitle": "Perfect ramen", "description": "Cut to 10 min"},
    )

    assert response.status_code == 200
    project_id = response.json()["projectId"]

    detail = client.get(f"/api/projects/{project_id}")
    assert detail.status_code == 200
    body = detail.json()
    assert body["title"] == "Cooking series ep. 3"
    assert body["video_title"] == "Perfect ramen"
    assert body["owner_id"] == str(youtuber.user_id)
    assert body["status"] == "pending"
    assert body["publishing_status"] == "idle"


@pytest.mark.parametrize(
    "body",
    [{"videoTitle": "No project title"}, {"projectTitle": ""}, {"projectTitle": "   "}, {"projectTitle": None}],
)
def test_create_project_requires_title(client: TestClient, store: InMemoryProjectStore, youtuber, body) -> None:
    response = client.post("/api/projects", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Project title is required"}
    assert asyncio.run(store.list_projects_for_owner(youtuber.user_id)) == []


def test_editor_cannot_create_project(client: TestClient, caller, editor) -> None:
    caller.user = editor

    response = client.post("/api/projects", json={"projectTitle": "Not mine to make"})

    assert response.status_code == 403
    assert response.json() == {"error": "Only content creators can create projects"}


def test_list_projects_only_returns_own(client: TestClient, store: InMemoryProjectStore, youtuber) -> None:
    asyncio.run(store.create_project(owner_id=uuid4(), title="Another creator"))
    client.post("/api/projects", json={"projectTitle": "Mine"})

    response = client.get("/api/projects")

    assert response.status_code == 200
    body = response.json()
    assert body["isCreator"] is True
    assert [p["title"] for p in body["projects"]] == ["Mine"]


def test_list_projects_as_editor(client: TestClient, caller, editor) -> None:
    caller.user = editor

    response = client.get("/api/projects")

    assert response.json() == {"projects": [], "isCreator": False}


def test_list_projects_as_assigned_editor(client: TestClient, store: InMemoryProjectStore, caller, editor) -> None:
    assigned = client.post("/api/projects", json={"projectTitle": "Needs an edit"}).json()["projectId"]
    client.post("/api/projects", json={"projectTitle": "Not shared"})
    assert client.put(f"/api/projects/{assigned}/editor", json={"editorId": str(editor.user_id)}).json() == {"success": True}

    caller.user = editor
    response = client.get("/api/projects")

    assert response.status_code == 200
    body = response.json()
    assert body["isCreator"] is False
    assert [p["id"] for p in body["projects"]] == [assigned]


def test_get_project_not_found(client: TestClient) -> None:
    response = client.get(f"/api/projects/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}


def test_update_project(client: TestClient) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Podcast clip"}).json()["projectId"]

    response = client.patch(
        f"/api/projects/{project_id}",
        json={"youtube_channel_id": "UC42", "status": "approved"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["youtube_channel_id"] == "UC42"
    assert body["status"] == "approved"
    assert body["title"] == "Podcast clip"


def test_update_project_cannot_set_publishing_status(client: TestClient) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Podcast clip"}).json()["projectId"]

    response = client.patch(f"/api/projects/{project_id}", json={"publishing_status": "completed"})

    assert response.status_code == 200
    assert response.json()["publishing_status"] == "idle"


def test_update_project_requires_owner(client: TestClient, store: InMemoryProjectStore) -> None:
    project = asyncio.run(store.create_project(owner_id=uuid4(), title="Someone else's"))

    response = client.patch(f"/api/projects/{project.id}", json={"title": "Hijacked"})

    assert response.status_code == 403
    assert asyncio.run(store.get_project(project.id)).title == "Someone else's"


def test_health_with_memory_store(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.parametrize("body", [{"title": None}, {"status": None}, {"title": "   "}])
def test_update_project_rejects_clearing_required_fields(client: TestClient, body) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Podcast clip"}).json()["projectId"]

    response = client.patch(f"/api/projects/{project_id}", json=body)

    assert response.status_code == 422
    assert "error" in response.json()
    detail = client.get(f"/api/projects/{project_id}")
    assert detail.status_code == 200
    assert detail.json()["title"] == "Podcast clip"
    assert detail.json()["status"] == "pending"


def test_get_project_denied_to_unassigned_user(client: TestClient, caller, editor) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Private cut"}).json()["projectId"]

    caller.user = editor
    response = client.get(f"/api/projects/{project_id}")

    assert response.status_code == 403
    assert response.json() == {"error": "Unauthorized"}


def test_assigned_editor_can_view_project(client: TestClient, caller, editor) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Shared cut"}).json()["projectId"]
    client.put(f"/api/projects/{project_id}/editor", json={"editorId": str(editor.user_id)})

    caller.user = editor
    response = client.get(f"/api/projects/{project_id}")
    editors = client.get(f"/api/projects/{project_id}/editors")

    assert response.status_code == 200
    assert response.json()["title"] == "Shared cut"
    assert editors.json() == {"editors": [str(editor.user_id)]}


def test_unassign_editor(client: TestClient, store: InMemoryProjectStore, editor) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Shared cut"}).json()["projectId"]
    client.put(f"/api/projects/{project_id}/editor", json={"editorId": str(editor.user_id)})

    response = client.put(f"/api/projects/{project_id}/editor", json={"editorId": "unassigned"})

    assert response.status_code == 200
    assert client.get(f"/api/projects/{project_id}/editors").json() == {"editors": []}
    assert asyncio.run(store.list_projects_for_editor(editor.user_id)) == []


@pytest.mark.parametrize("who", ["unknown", "malformed", "creator"])
def test_assign_editor_must_be_editor_profile(client: TestClient, youtuber, who) -> None:
    project_id = client.post("/api/projects", json={"projectTitle": "Shared cut"}).json()["projectId"]
    editor_id = {"unknown": str(uuid4()), "malformed": "not-a-uuid", "creator": str(youtuber.user_id)}[who]

    response = client.put(f"/api/projects/{project_id}/editor", json={"editorId": editor_id})

    assert response.status_code == 400
    assert response.json() == {"error": "Editor not found or not authorized"}
    assert client.get(f"/api/projects/{project_id}/editors").json() == {"editors": []}


def test_assign_editor_requires_owner(client: TestClient, store: InMemoryProjectStore, editor) -> None:
    project = asyncio.run(store.create_project(owner_id=uuid4(), title="Someone else's"))

    response = client.put(f"/api/projects/{project.id}/editor", json={"editorId": str(editor.user_id)})

    assert response.status_code == 403
    assert asyncio.run(store.list_editor_ids(project.id)) == []
