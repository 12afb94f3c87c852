"""
Main FastAPI application.

This is the entry point for the API server:

    uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.db.session import Database
from app.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_error_handler,
)
from app.routers import health, todos
from app.ui.routes import todos as ui_todos
from app.ui.routes.todos import UI_ROOT

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own ``database`` (usually in-memory) so that every test
    gets an isolated store.
    """
    settings = settings or get_settings()
    database = database or Database(settings.effective_database_url, echo=settings.DEBUG)

    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the table on startup and close the engine on shutdown."""
        logger.info("Starting %s...", settings.APP_NAME)
        await database.create_all()

        yield  # The server runs while we're "yielded" here

        logger.info("Shutting down %s...", settings.APP_NAME)
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API for a single-table todo list",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # API endpoints
    app.include_router(health.router, tags=["Health"])
    app.include_router(todos.router, prefix=settings.API_PREFIX)

    # UI
    app.mount("/static", StaticFiles(directory=str(UI_ROOT / "static")), name="static")
    app.include_router(ui_todos.router)

    return app


app = create_app()
