"""Task API tests — CRUD, filters, partial updates.

Pattern: Build up test data using the API, authenticated as a freshly
registered user.
"""

import pytest


@pytest.mark.asyncio
async def test_create_task_defaults(client, auth_headers):
    """POST /tasks creates a task in 'todo' status with medium priority."""
    r = await client.post("/api/tasks", headers=auth_headers, json={"title": "Write report"})
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Task created"
    task = body["data"]
    assert task["title"] == "Write report"
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["description"] == ""
    assert task["deadline"] is None


@pytest.mark.asyncio
async def test_create_task_with_deadline(client, auth_headers):
    r = await client.post(
        "/api/tasks",
        headers=auth_headers,
        json={
            "title": "Ship it",
            "priority": "high",
            "deadline": "2026-12-01T09:00:00Z",
        },
    )
    assert r.status_code == 201
    assert r.json()["data"]["deadline"].startswith("2026-12-01T09:00:00")


@pytest.mark.asyncio
async def test_create_task_validation(client, auth_headers):
    r = await client.post("/api/tasks", headers=auth_headers, json={"title": ""})
    assert r.status_code == 400
    assert r.json()["success"] is False

    r = await client.post(
        "/api/tasks", headers=auth_headers, json={"title": "x", "priority": "urgent"}
    )
    assert r.status_code == 400

    r = await client.post("/api/tasks", headers=auth_headers, json={"title": "x" * 101})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_tasks_empty(client, auth_headers):
    r = await client.get("/api/tasks", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["data"] == []
    assert r.json()["count"] == 0


@pytest.mark.asyncio
async def test_list_tasks_filters(client, auth_headers):
    for title, status, priority in [
        ("a", "todo", "low"),
        ("b", "completed", "high"),
        ("c", "todo", "high"),
    ]:
        await client.post(
            "/api/tasks",
            headers=auth_headers,
            json={"title": title, "status": status, "priority": priority},
        )

    r = await client.get("/api/tasks", headers=auth_headers)
    assert r.json()["count"] == 3

    r = await client.get("/api/tasks", headers=auth_headers, params={"status": "todo"})
    assert {t["title"] for t in r.json()["data"]} == {"a", "c"}

    r = await client.get(
        "/api/tasks", headers=auth_headers, params={"status": "todo", "priority": "high"}
    )
    assert [t["title"] for t in r.json()["data"]] == ["c"]


@pytest.mark.asyncio
async def test_get_task(client, auth_headers):
    created = await client.post("/api/tasks", headers=auth_headers, json={"title": "One"})
    tid = created.json()["data"]["id"]

    r = await client.get(f"/api/tasks/{tid}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == tid


@pytest.mark.asyncio
async def test_partial_update(client, auth_headers):
    """Only the fields in the body change."""
    created = await client.post(
        "/api/tasks",
        headers=auth_headers,
        json={"title": "Draft", "description": "keep me", "priority": "low"},
    )
    tid = created.json()["data"]["id"]

    r = await client.put(
        f"/api/tasks/{tid}", headers=auth_headers, json={"status": "in-progress"}
    )
    assert r.status_code == 200
    task = r.json()["data"]
    assert task["status"] == "in-progress"
    assert task["title"] == "Draft"
    assert task["description"] == "keep me"
    assert task["priority"] == "low"


@pytest.mark.asyncio
async def test_update_clears_deadline_with_null(client, auth_headers):
    created = await client.post(
        "/api/tasks",
        headers=auth_headers,
        json={"title": "Due", "deadline": "2026-12-01T09:00:00Z"},
    )
    tid = created.json()["data"]["id"]

    r = await client.put(f"/api/tasks/{tid}", headers=auth_headers, json={"deadline": None})
    assert r.status_code == 200
    assert r.json()["data"]["deadline"] is None
    assert r.json()["data"]["title"] == "Due"


@pytest.mark.asyncio
async def test_null_title_leaves_title_alone(client, auth_headers):
    created = await client.post("/api/tasks", headers=auth_headers, json={"title": "Keep"})
    tid = created.json()["data"]["id"]

    r = await client.put(f"/api/tasks/{tid}", headers=auth_headers, json={"title": None})
    assert r.status_code == 200
    assert r.json()["data"]["title"] == "Keep"


@pytest.mark.asyncio
async def test_update_invalid_status(client, auth_headers):
    created = await client.post("/api/tasks", headers=auth_headers, json={"title": "T"})
    tid = created.json()["data"]["id"]
    r = await client.put(f"/api/tasks/{tid}", headers=auth_headers, json={"status": "done"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_delete_task(client, auth_headers):
    created = await client.post("/api/tasks", headers=auth_headers, json={"title": "Bye"})
    tid = created.json()["data"]["id"]

    r = await client.delete(f"/api/tasks/{tid}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Task deleted"

    r = await client.get(f"/api/tasks/{tid}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Task not found"}


@pytest.mark.asyncio
async def test_whitespace_only_title_rejected(client, auth_headers):
    r = await client.post("/api/tasks", headers=auth_headers, json={"title": "   "})
    assert r.status_code == 400
    assert r.json()["error"].startswith("title: ")

    created = await client.post("/api/tasks", headers=auth_headers, json={"title": "  Real  "})
    assert created.json()["data"]["title"] == "Real"
    tid = created.json()["data"]["id"]

    r = await client.put(f"/api/tasks/{tid}", headers=auth_headers, json={"title": "\t "})
    assert r.status_code == 400
