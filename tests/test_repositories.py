"""
ClimaTask Backend — Repository Tests
======================================

What:  Repository contract against a real (in-memory SQLite) database.

What we test:
    ✅ Reads return None / [] when nothing matches
    ✅ update/delete of a missing id raise RecordNotFoundError
    ✅ Constraint violations surface as DatabaseError; UNIQUE ones as
       DuplicateRecordError
    ✅ commit() persists and wraps failures
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from climatask.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    NotFoundError,
    RecordNotFoundError,
)
from climatask.repositories import LocationRepository, TaskRepository, UserRepository


@pytest.mark.asyncio
async def test_reads_on_empty_tables(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        assert await users.find_by_id(1) is None
        assert await users.find_by_email("nobody@example.com") is None
        assert await users.list_all() == []
        assert await TaskRepository(session).list_by_user(1) == []


@pytest.mark.asyncio
async def test_create_and_find(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        created = await users.create(email="ada@example.com", name="Ada", password="h")
        assert created.id is not None

        found = await users.find_unique(email="ada@example.com")
        assert found is created


@pytest.mark.asyncio
async def test_update_missing_record(session_factory):
    async with session_factory() as session:
        with pytest.raises(RecordNotFoundError) as exc_info:
            await TaskRepository(session).update(404, {"title": "x"})

    assert isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.resource == "task"
    assert exc_info.value.resource_id == 404


@pytest.mark.asyncio
async def test_delete_missing_record(session_factory):
    async with session_factory() as session:
        with pytest.raises(RecordNotFoundError):
            await LocationRepository(session).delete(404)


@pytest.mark.asyncio
async def test_dangling_foreign_key_is_database_error(session_factory):
    async with session_factory() as session:
        with pytest.raises(DatabaseError) as exc_info:
            await LocationRepository(session).create(
                user_id=777, latitude=0.0, longitude=0.0, name="Nowhere"
            )

    assert exc_info.value.context["error_type"] == "IntegrityError"
    assert exc_info.value.context["action"] == "create"


@pytest.mark.asyncio
async def test_duplicate_email_is_database_error(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        await users.create(email="ada@example.com", name="Ada", password="h")
        with pytest.raises(DatabaseError):
            await users.create(email="ada@example.com", name="Ada again", password="h")


@pytest.mark.asyncio
async def test_duplicate_email_is_duplicate_record(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        await users.create(email="ada@example.com", name="Ada", password="h")
        with pytest.raises(DuplicateRecordError) as exc_info:
            await users.create(email="ada@example.com", name="Ada again", password="h")

    assert exc_info.value.context["action"] == "create"


@pytest.mark.asyncio
async def test_dangling_foreign_key_is_not_duplicate_record(session_factory):
    async with session_factory() as session:
        with pytest.raises(DatabaseError) as exc_info:
            await TaskRepository(session).create(user_id=777, title="Orphan")

    assert not isinstance(exc_info.value, DuplicateRecordError)


@pytest.mark.asyncio
async def test_commit_persists_writes(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        await users.create(email="ada@example.com", name="Ada", password="h")
        await users.commit()

    async with session_factory() as session:
        assert await UserRepository(session).find_by_email("ada@example.com") is not None


@pytest.mark.asyncio
async def test_commit_failure_is_database_error(session_factory):
    async with session_factory() as session:
        users = UserRepository(session)
        with patch.object(
            session, "commit", AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("gone")))
        ):
            with pytest.raises(DatabaseError) as exc_info:
                await users.commit()

    assert exc_info.value.context["action"] == "commit"
    assert exc_info.value.context["error_type"] == "OperationalError"
