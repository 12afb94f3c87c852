"""
Application configuration settings.

This file loads settings from environment variables.
For local development, create a .env file based on .env.example
(scripts/devops_setup.py can generate one for you).
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        APP_NAME: Name of the application
        DEBUG: Enable debug mode (echoes SQL statements)
        DATABASE_URL: SQLAlchemy async connection string
        TESTING: Use an in-memory database instead of DATABASE_URL
        LOG_LEVEL: Root log level for the app loggers
        CORS_ORIGINS: Origins allowed to call the API from a browser
        API_PREFIX: Mount point for the REST API
    """

    APP_NAME: str = "Todo App"
    DEBUG: bool = False

    # Format: sqlite+aiosqlite:///<path to file>
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/todos.db"
    TESTING: bool = False

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    API_PREFIX: str = "/api"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """The URL the app actually connects to (in-memory when TESTING)."""
        if self.TESTING:
            return IN_MEMORY_DATABASE_URL
        return self.DATABASE_URL


@lru_cache
def get_settings() -> Settings:
    return Settings()

