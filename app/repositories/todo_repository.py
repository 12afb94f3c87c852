"""
Todo repository - database operations for Todo.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Todo
from app.schemas.todo import TodoCreate, TodoUpdate
from app.utils.time import utc_now

# The only columns a partial update may touch.
UPDATABLE_FIELDS = ("title", "description", "completed", "priority")


class TodoRepository:
    """Repository for Todo database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Todo]:
        """All todos, newest first."""
        result = await self.db.execute(
            select(Todo).order_by(Todo.created_at.desc(), Todo.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, todo_id: int) -> Optional[Todo]:
        """Get a todo by ID, or None if it does not exist."""
        result = await self.db.execute(select(Todo).where(Todo.id == todo_id))
        return result.scalar_one_or_none()

    async def create(self, data: TodoCreate) -> Todo:
        """Insert a new todo; the id and both timestamps are assigned here."""
        now = utc_now()
        todo = Todo(
            title=data.title,
            description=data.description,
            priority=data.priority.value,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self.db.add(todo)
        await self.db.flush()
        await self.db.refresh(todo)
        return todo

    async def update(self, todo_id: int, data: TodoUpdate) -> Optional[Todo]:
        """
        Apply the fields present in ``data``.

        Returns None when no todo matches. An update with no fields returns
        the current record and leaves ``updated_at`` alone.
        """
        todo = await self.get_by_id(todo_id)
        if not todo:
            return None

        present = data.present_fields()
        changes = {field: present[field] for field in UPDATABLE_FIELDS if field in present}
        if not changes:
            return todo

        for field, value in changes.items():
            if field == "priority":
                value = value.value
            setattr(todo, field, value)

        todo.updated_at = utc_now()
        await self.db.flush()
        await self.db.refresh(todo)
        return todo

    async def delete(self, todo_id: int) -> bool:
        """Delete one todo. Returns whether a row was actually removed."""
        result = await self.db.execute(delete(Todo).where(Todo.id == todo_id))
        await self.db.flush()
        return result.rowcount > 0

    async def clear(self) -> int:
        """Delete every todo and return how many were removed."""
        result = await self.db.execute(delete(Todo))
        await self.db.flush()
        return result.rowcount
