"""
Todo business logic service.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.todo import Todo
from app.repositories.todo_repository import TodoRepository
from app.schemas.todo import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

TODO_NOT_FOUND = "Todo not found"


class TodoService:
    """Service for todo business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TodoRepository(db)

    async def list_todos(self) -> List[Todo]:
        return await self.repository.list()

    async def get_todo(self, todo_id: int) -> Todo:
        """Get a todo by ID. Raises NotFoundError if it does not exist."""
        todo = await self.repository.get_by_id(todo_id)
        if not todo:
            raise NotFoundError(TODO_NOT_FOUND)
        return todo

    async def create_todo(self, data: TodoCreate) -> Todo:
        todo = await self.repository.create(data)
        await self.db.commit()
        logger.info("Created todo %s", todo.id)
        return todo

    async def update_todo(self, todo_id: int, data: TodoUpdate) -> Todo:
        todo = await self.repository.update(todo_id, data)
        if not todo:
            raise NotFoundError(TODO_NOT_FOUND)
        await self.db.commit()
        logger.info("Updated todo %s (%s)", todo_id, ", ".join(sorted(data.present_fields())) or "no fields")
        return todo

    async def delete_todo(self, todo_id: int) -> None:
        deleted = await self.repository.delete(todo_id)
        if not deleted:
            raise NotFoundError(TODO_NOT_FOUND)
        await self.db.commit()
        logger.info("Deleted todo %s", todo_id)

    async def clear_todos(self) -> int:
        count = await self.repository.clear()
        await self.db.commit()
        logger.info("Deleted %s todos", count)
        return count
