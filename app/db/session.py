"""
Database engine and session configuration.

This file sets up the async database connection using SQLAlchemy + aiosqlite.
A ``Database`` is constructed explicitly and handed to the app (see
``app.main.create_app``), so every test can run against its own isolated
in-memory store.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base

logger = logging.getLogger(__name__)


def _is_in_memory(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:"


class Database:
    """Owns the engine and session factory for one store instance."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo, "future": True}

        if _is_in_memory(url):
            # One shared connection, otherwise each session would see its own
            # empty in-memory database.
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            Path(make_url(url).database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False keeps records readable after commit
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create the tables if they do not exist yet."""
        # Registers the models on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Todos table created or already exists (%s)", self.url)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session, commit on success and roll back on error.

        Usage:
            async with database.session() as session:
                repo = TodoRepository(session)
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")
