"""Structured logging for imagelab.

Vendor drivers log through stdlib loggers; request level code uses structlog
and picks up the per-request context bound by :func:`request_context_middleware`.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response

TRUNCATION_MARKER = "...(truncated)"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route stdlib records to stderr and render structlog events as JSON."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind method, path and a request id for every event logged during a request."""

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    try:
        return await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()


def truncate(text: str, limit: int = 500) -> str:
    """Shorten vendor bodies before they reach log records."""
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


__all__ = ["configure_logging", "request_context_middleware", "truncate"]
