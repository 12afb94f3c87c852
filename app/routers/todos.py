"""
Todo router - REST endpoints for todos.

Each endpoint parses the path id, validates the body (create/update),
calls the service and wraps the result in the standard envelope.
Anything unexpected from the storage layer becomes a 500 with a
generic message; the cause is only logged.
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from app.core.dependencies import get_todo_service
from app.errors import AppError, ClientError, NotFoundError, ServerError
from app.schemas.envelope import success_payload
from app.schemas.todo import TodoCreate, TodoRead, TodoUpdate
from app.services.todo_service import TODO_NOT_FOUND, TodoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])

_TODO_ID = re.compile(r"-?[0-9]+")

# SQLite INTEGER is a signed 64-bit value
_MIN_TODO_ID = -(2 ** 63)
_MAX_TODO_ID = 2 ** 63 - 1


def parse_todo_id(raw: str) -> int:
    """Path ids must be plain integers ("12", "-3"); anything else is a 400."""
    if not _TODO_ID.fullmatch(raw):
        raise ClientError("Invalid todo ID")
    todo_id = int(raw)
    if not _MIN_TODO_ID <= todo_id <= _MAX_TODO_ID:
        # Could never have been stored
        raise NotFoundError(TODO_NOT_FOUND)
    return todo_id


@asynccontextmanager
async def failure_message(message: str):
    """Turn any non-application error raised inside the block into a 500."""
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", message, exc.__class__.__name__)
        raise ServerError(message) from exc


@router.get("")
async def list_todos(service: TodoService = Depends(get_todo_service)):
    """List every todo, newest first."""
    async with failure_message("Failed to fetch todos"):
        todos = await service.list_todos()
    data = [TodoRead.model_validate(todo) for todo in todos]
    return success_payload(data=data, count=len(data))


@router.get("/{todo_id}")
async def get_todo(todo_id: str, service: TodoService = Depends(get_todo_service)):
    """Get a todo by ID."""
    parsed_id = parse_todo_id(todo_id)
    async with failure_message("Failed to fetch todo"):
        todo = await service.get_todo(parsed_id)
    return success_payload(data=TodoRead.model_validate(todo))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo(data: TodoCreate, service: TodoService = Depends(get_todo_service)):
    """Create a new todo."""
    async with failure_message("Failed to create todo"):
        todo = await service.create_todo(data)
    return success_payload(
        data=TodoRead.model_validate(todo),
        message="Todo created successfully",
    )


@router.put("/{todo_id}")
async def update_todo(
    todo_id: str,
    data: Optional[TodoUpdate] = Body(None),
    service: TodoService = Depends(get_todo_service),
):
    """Apply a partial update; fields that are not sent are left untouched."""
    parsed_id = parse_todo_id(todo_id)
    if data is None:
        # A PUT without a body is an empty update
        data = TodoUpdate()
    async with failure_message("Failed to update todo"):
        todo = await service.update_todo(parsed_id, data)
    return success_payload(
        data=TodoRead.model_validate(todo),
        message="Todo updated successfully",
    )


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str, service: TodoService = Depends(get_todo_service)):
    parsed_id = parse_todo_id(todo_id)
    async with failure_message("Failed to delete todo"):
        await service.delete_todo(parsed_id)
    return success_payload(message="Todo deleted successfully")


@router.delete("")
async def delete_all_todos(service: TodoService = Depends(get_todo_service)):
    """Delete every todo. Meant for resetting state between test runs."""
    async with failure_message("Failed to delete todos"):
        count = await service.clear_todos()
    return success_payload(message=f"Deleted {count} todos", count=count)
