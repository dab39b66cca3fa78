"""Application middleware: per-request log context and access logging."""

import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from autocat.config import settings

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind the caller to the log context and log each request with timing.

    Everything logged while the request is handled (rule changes, apply
    passes) carries ``user_id``, ``method`` and ``path``.
    """

    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            user_id=(request.headers.get(settings.user_id_header) or "").strip() or None,
            method=request.method,
            path=request.url.path,
        )
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "request",
                status=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
