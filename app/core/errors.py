"""
Application errors and their HTTP translation.

Data-access and builder code raises these instead of HTTPException so it
stays usable outside a request. The handler registered in main.py renders
them as {"detail": message} with the error's status code.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for the API. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Client sent data that cannot be processed (400)."""

    status_code = 400


class NotFoundError(AppError):
    """Requested resource does not exist (404)."""

    status_code = 404


class UnauthorizedError(AppError):
    """Missing/invalid credentials or insufficient rights (401)."""

    status_code = 401


class DuplicateError(BadRequestError):
    """Insert would collide with an existing row."""


class EmptyUpdateError(BadRequestError):
    """A partial update was requested with no fields."""

    def __init__(self, message: str = "No data"):
        super().__init__(message)


class UnrecognizedFilterKeyError(BadRequestError):
    """A list filter is not acceptable for the entity."""

    def __init__(self, key: str, message: str = None):
        super().__init__(message or f"Invalid filter parameter: {key}")
        self.key = key


class InvertedRangeError(UnrecognizedFilterKeyError):
    """Lower bound of a numeric range filter exceeds its upper bound."""


class InvalidFilterValueError(UnrecognizedFilterKeyError):
    """A recognized filter key carries a value of the wrong type."""


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert AppError to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )
