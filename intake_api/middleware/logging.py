# intake_api/middleware/logging.py
from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from intake_api.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)

_QUIET_PATHS = {"/api/health/live", "/metrics"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging.

    Only method, path and status are logged; query strings can carry
    search terms such as emails and are left out.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        quiet = request.url.path in _QUIET_PATHS

        if not quiet:
            logger.info(
                "request.received",
                method=request.method,
                path=request.url.path,
                client_ip=request.client.host if request.client else "unknown",
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request.exception",
                method=request.method,
                path=request.url.path,
                response_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                exception_type=type(e).__name__,
            )
            raise

        response_time = time.perf_counter() - start_time
        response.headers["X-Response-Time"] = f"{response_time:.3f}"

        if not quiet:
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "response.sent",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                response_time_ms=round(response_time * 1000, 2),
            )

        return response
