"""
FastAPI dependencies for the application.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import Database
from app.services.todo_service import TodoService


def get_database(request: Request) -> Database:
    """The store instance the app was built with (see ``create_app``)."""
    return request.app.state.db


async def get_db(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session for one request."""
    async with database.session() as session:
        yield session


def get_todo_service(db: AsyncSession = Depends(get_db)) -> TodoService:
    return TodoService(db)
