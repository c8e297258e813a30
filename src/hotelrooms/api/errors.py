"""Mapping of domain errors to HTTP responses.

Every failure body is {"error": "<message>"}; validation failures add a
"fields" list.

ValidationError → 422, ConflictError → 400, NotFoundError → 404,
StorageError and anything unexpected → 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotelrooms.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from hotelrooms.domain.models import describe_errors
from hotelrooms.observability.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: 422,
    ConflictError: 400,
    NotFoundError: 404,
    StorageError: 500,
}


def status_for(exc: DomainError) -> int:
    for kind, status in STATUS_BY_ERROR.items():
        if isinstance(exc, kind):
            return status
    return 500


def _log_context(request: Request, **fields) -> dict:
    return {"extra_fields": {"method": request.method, "path": request.url.path, **fields}}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status = status_for(exc)
    body: dict = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.fields:
        body["fields"] = exc.fields

    if status >= 500:
        logger.error(
            "storage error",
            exc_info=exc,
            extra=_log_context(request, status=status),
        )
    else:
        logger.warning(
            exc.message,
            extra=_log_context(request, status=status, error=type(exc).__name__),
        )
    return JSONResponse(status_code=status, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message, fields = describe_errors(exc.errors())
    logger.warning(
        "request validation failed",
        extra=_log_context(request, status=422, error="ValidationError"),
    )
    return JSONResponse(status_code=422, content={"error": message, "fields": fields})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error", exc_info=exc, extra=_log_context(request, status=500))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
