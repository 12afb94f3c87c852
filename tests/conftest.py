"""
Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite store, so tests never see each
other's data and no file is written to disk.
"""

import os

# Must be set before app.main is imported anywhere (it builds a module-level app)
os.environ.setdefault("TESTING", "1")

import pytest
from fastapi.testclient import TestClient

from app.core.config import IN_MEMORY_DATABASE_URL, Settings
from app.db.session import Database
from app.main import create_app
from app.repositories.todo_repository import TodoRepository


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no app or database")
    config.addinivalue_line("markers", "db: uses an in-memory database")
    config.addinivalue_line("markers", "api: goes through the HTTP layer")


@pytest.fixture
def settings():
    return Settings(TESTING=True, LOG_LEVEL="WARNING", APP_NAME="Todo App (test)")


@pytest.fixture
def database():
    return Database(IN_MEMORY_DATABASE_URL)


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app):
    """TestClient with the lifespan running, so the table exists."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_todo(client):
    """Create a todo through the API and return the created record."""

    def _make(title="Test Todo", **fields):
        response = client.post("/api/todos", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
async def db_session():
    database = Database(IN_MEMORY_DATABASE_URL)
    await database.create_all()
    async with database.session() as session:
        yield session
    await database.dispose()


@pytest.fixture
def repository(db_session):
    return TodoRepository(db_session)
