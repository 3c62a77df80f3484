"""
ClimaTask Backend — Task Endpoint Tests
=========================================

What we test:
    ✅ Create → 201, isCompleted defaults to false
    ✅ /tasks and /tasks/user/{id} are newest first for any insertion order
    ✅ Update semantics: omitted fields untouched, explicit false applied,
       null title/isCompleted → 422
    ✅ Delete returns the deleted record; 404s
    ✅ A failed commit is a 500 and the stored task is unchanged
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from climatask.models import Task


@pytest.mark.asyncio
async def test_create_task(test_client, create_user):
    user = await create_user()

    response = await test_client.post(
        "/tasks", json={"userId": user["id"], "title": "Buy milk", "description": "2L"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["isCompleted"] is False
    assert body["title"] == "Buy milk"
    assert body["userId"] == user["id"]
    assert body["createdAt"]


@pytest.mark.asyncio
async def test_create_task_requires_title(test_client, create_user):
    user = await create_user()
    response = await test_client.post("/tasks", json={"userId": user["id"]})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_lists_are_newest_first_regardless_of_insert_order(
    test_client, create_user, session_factory
):
    ada = await create_user(email="ada@example.com")
    bob = await create_user(email="bob@example.com")
    base = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    # Inserted oldest-in-the-middle so neither id nor insert order matches time order
    async with session_factory() as session:
        session.add_all([
            Task(user_id=ada["id"], title="middle", created_at=base + timedelta(hours=1)),
            Task(user_id=ada["id"], title="newest", created_at=base + timedelta(hours=2)),
            Task(user_id=ada["id"], title="oldest", created_at=base),
            Task(user_id=bob["id"], title="bob's", created_at=base + timedelta(minutes=30)),
        ])
        await session.commit()

    all_tasks = (await test_client.get("/tasks")).json()
    ada_tasks = (await test_client.get(f"/tasks/user/{ada['id']}")).json()

    assert [t["title"] for t in all_tasks] == ["newest", "middle", "bob's", "oldest"]
    assert [t["title"] for t in ada_tasks] == ["newest", "middle", "oldest"]
    assert all_tasks[0]["user"] == ada
    assert "user" not in ada_tasks[0]


@pytest.mark.asyncio
async def test_same_timestamp_falls_back_to_id(test_client, create_user, session_factory):
    user = await create_user()
    moment = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    async with session_factory() as session:
        session.add(Task(user_id=user["id"], title="first", created_at=moment))
        await session.flush()
        session.add(Task(user_id=user["id"], title="second", created_at=moment))
        await session.commit()

    titles = [t["title"] for t in (await test_client.get(f"/tasks/user/{user['id']}")).json()]
    assert titles == ["second", "first"]


@pytest.mark.asyncio
async def test_get_task(test_client, create_user):
    user = await create_user()
    created = (await test_client.post("/tasks", json={"userId": user["id"], "title": "T"})).json()

    response = await test_client.get(f"/tasks/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created
    assert (await test_client.get("/tasks/999")).status_code == 404


@pytest.mark.asyncio
async def test_update_only_touches_sent_fields(test_client, create_user):
    user = await create_user()
    created = (
        await test_client.post(
            "/tasks", json={"userId": user["id"], "title": "T", "description": "keep"}
        )
    ).json()

    done = await test_client.put(f"/tasks/{created['id']}", json={"isCompleted": True})
    assert done.json() == {**created, "isCompleted": True}

    renamed = await test_client.put(f"/tasks/{created['id']}", json={"title": "Renamed"})
    assert renamed.json() == {**created, "title": "Renamed", "isCompleted": True}

    reopened = await test_client.put(f"/tasks/{created['id']}", json={"isCompleted": False})
    assert reopened.json()["isCompleted"] is False
    assert reopened.json()["description"] == "keep"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"title": None}, {"isCompleted": None}])
async def test_update_rejects_null(test_client, create_user, body):
    user = await create_user()
    created = (await test_client.post("/tasks", json={"userId": user["id"], "title": "T"})).json()

    response = await test_client.put(f"/tasks/{created['id']}", json=body)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_missing_task(test_client):
    response = await test_client.put("/tasks/999", json={"title": "x"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_task(test_client, create_user):
    user = await create_user()
    created = (await test_client.post("/tasks", json={"userId": user["id"], "title": "T"})).json()

    response = await test_client.delete(f"/tasks/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created
    assert (await test_client.delete(f"/tasks/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_failed_commit_on_update_is_reported(test_client, create_user):
    user = await create_user()
    task = (await test_client.post("/tasks", json={"userId": user["id"], "title": "Buy milk"})).json()
    lost = OperationalError("COMMIT", {}, Exception("connection lost"))

    with patch.object(AsyncSession, "commit", AsyncMock(side_effect=lost)):
        response = await test_client.put(f"/tasks/{task['id']}", json={"isCompleted": True})

    assert response.status_code == 500
    assert (await test_client.get(f"/tasks/{task['id']}")).json()["isCompleted"] is False
