"""Storage layer tests, straight against TodoRepository."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from app.schemas.todo import Priority, TodoCreate, TodoUpdate

pytestmark = pytest.mark.db


async def test_list_is_empty_on_new_store(repository):
    assert await repository.list() == []


async def test_create_assigns_id_and_timestamps(repository):
    todo = await repository.create(TodoCreate(title="Test", description="desc", priority="high"))

    assert isinstance(todo.id, int)
    assert todo.title == "Test"
    assert todo.description == "desc"
    assert todo.priority == "high"
    assert todo.completed is False
    assert todo.created_at == todo.updated_at


async def test_create_uses_defaults(repository):
    todo = await repository.create(TodoCreate(title="Only a title"))

    assert todo.description == ""
    assert todo.priority == "medium"


async def test_ids_strictly_increase_even_after_delete(repository):
    first = await repository.create(TodoCreate(title="first"))
    second = await repository.create(TodoCreate(title="second"))
    assert await repository.delete(second.id) is True

    third = await repository.create(TodoCreate(title="third"))

    assert first.id < second.id < third.id


async def test_list_returns_newest_first(repository):
    older = await repository.create(TodoCreate(title="older"))
    newer = await repository.create(TodoCreate(title="newer"))

    todos = await repository.list()

    assert [todo.id for todo in todos] == [newer.id, older.id]


async def test_get_by_id_missing_returns_none(repository):
    assert await repository.get_by_id(999999) is None


async def test_round_trip_create_then_get(repository):
    created = await repository.create(TodoCreate(title="Test", description="desc", priority="high"))

    fetched = await repository.get_by_id(created.id)

    assert fetched.title == "Test"
    assert fetched.description == "desc"
    assert fetched.priority == "high"
    assert fetched.completed is False
    assert fetched.created_at <= fetched.updated_at


async def test_update_applies_only_present_fields(repository):
    todo = await repository.create(TodoCreate(title="Test", description="desc", priority="low"))
    created_at = todo.created_at

    updated = await repository.update(todo.id, TodoUpdate(completed=True))

    assert updated.completed is True
    assert updated.title == "Test"
    assert updated.description == "desc"
    assert updated.priority == "low"
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


async def test_update_priority_stores_plain_value(repository):
    todo = await repository.create(TodoCreate(title="Test"))

    updated = await repository.update(todo.id, TodoUpdate(priority=Priority.HIGH))

    assert updated.priority == "high"


async def test_update_with_no_fields_leaves_record_untouched(repository):
    todo = await repository.create(TodoCreate(title="Test"))
    before = todo.updated_at

    same = await repository.update(todo.id, TodoUpdate())

    assert same.id == todo.id
    assert same.updated_at == before


async def test_update_missing_returns_none(repository):
    assert await repository.update(424242, TodoUpdate(title="nope")) is None


async def test_delete_then_get_is_not_found(repository):
    todo = await repository.create(TodoCreate(title="Test"))

    assert await repository.delete(todo.id) is True
    assert await repository.get_by_id(todo.id) is None
    assert await repository.delete(todo.id) is False


async def test_clear_returns_count_and_empties_list(repository):
    for title in ("a", "b", "c"):
        await repository.create(TodoCreate(title=title))

    assert await repository.clear() == 3
    assert await repository.list() == []
    assert await repository.clear() == 0


async def test_priority_check_constraint(db_session):
    with pytest.raises(IntegrityError):
        await db_session.execute(
            text(
                "INSERT INTO todos (title, description, completed, priority, created_at, updated_at) "
                "VALUES ('x', '', 0, 'urgent', '2026-01-01 00:00:00', '2026-01-01 00:00:00')"
            )
        )
    await db_session.rollback()
