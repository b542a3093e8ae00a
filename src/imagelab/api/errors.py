"""Exception handlers producing the common error envelope."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import ServiceError
from ..schemas.results import ErrorResponse

logger = structlog.get_logger(__name__)


def error_response(
    status_code: int,
    error: str,
    *,
    details: str | None = None,
    suggestion: str | None = None,
) -> JSONResponse:
    """Materialise ``{"success": false, "error": ...}`` as a ``JSONResponse``."""

    payload = ErrorResponse(error=error, details=details, suggestion=suggestion)
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(by_alias=True, exclude_none=True),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request.failed",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return error_response(
        exc.status_code, exc.message, details=exc.details, suggestion=exc.suggestion
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request body", details="; ".join(parts) or None
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled", path=request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or "Internal server error",
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = [
    "error_response",
    "install_error_handlers",
    "service_error_handler",
    "unhandled_error_handler",
    "validation_error_handler",
]
