"""
handlers/errors.py
-------------------
Maps the application's error taxonomy onto HTTP responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

import psycopg2
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from db.transaction import translate_error
from exceptions import (
    AuthenticationError,
    ConstraintViolationError,
    DuplicateError,
    InfrastructureError,
    NotFoundError,
    PoolExhaustionError,
    ShopError,
    ValidationError,
)
from utils.logger import get_logger

logger = get_logger(__name__)

# Most specific first; the first isinstance match wins.
_STATUS_CODES: list[tuple[type, int]] = [
    (ValidationError, 400),
    (DuplicateError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConstraintViolationError, 409),
    (PoolExhaustionError, 503),
    (InfrastructureError, 500),
]


def status_for(error: ShopError) -> int:
    """HTTP status code for an application error (500 if unmapped)."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def database_error_handler(request: Request, exc: psycopg2.Error) -> JSONResponse:
    """Driver errors escaping single-statement CRUD paths."""
    return await shop_error_handler(request, translate_error(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(psycopg2.Error, database_error_handler)
