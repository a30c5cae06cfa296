"""
Exception handlers.

Domain errors become envelopes with the status code of their class; request
validation errors become 400 with field-level detail; database and unexpected
failures become generic messages while the detail goes to the log only.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from calculadora.core.exceptions import (
    CalculadoraError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from calculadora.schemas import Envelope

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = Envelope(success=False, message=message, errors=errors or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


async def calculadora_error_handler(request: Request, exc: CalculadoraError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    if isinstance(exc, StoreUnavailableError):
        logger.error("Store unavailable", extra={"path": request.url.path})

    errors = exc.errors if isinstance(exc, ValidationError) else None
    return error_response(exc.status_code, exc.message, errors=errors, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "invalid value"),
        }
        for err in exc.errors()
    ]
    return error_response(400, "invalid data", errors=errors)


async def operational_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
    logger.exception("Database error", extra={"path": request.url.path})
    return error_response(503, StoreUnavailableError().message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return error_response(500, "internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CalculadoraError, calculadora_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(OperationalError, operational_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
