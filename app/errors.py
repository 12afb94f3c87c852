"""Structured errors and their JSON envelopes.

Routes and services raise these; the handlers registered in ``app.main``
turn them into ``{"success": false, "error": ..., "details": [...]}``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.envelope import error_payload

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"
ROUTE_NOT_FOUND = "Route not found"


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[str]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    @property
    def payload(self) -> dict:
        return error_payload(self.message, self.details)


class ClientError(AppError):
    """Malformed id or a body that fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(AppError):
    """Storage or driver failure. The message is safe to show; the cause is only logged."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> List[str]:
    """
    Flatten pydantic errors into ``"<field>: <message>"`` strings.

    Every violation is kept, not just the first one.
    """
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        details.append(f"{field}: {err.get('msg', 'Invalid value')}")
    return details


def validation_error(errors: Iterable[dict[str, Any]]) -> ClientError:
    return ClientError("Validation error", details=format_validation_errors(errors))


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    error = validation_error(exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.payload)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with the wrong method is reported like any unknown route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_payload(ROUTE_NOT_FOUND),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(GENERIC_SERVER_ERROR),
    )
