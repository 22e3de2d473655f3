"""Request logging middleware - one log line per state-changing request.

Verification decisions are additionally written to ``audit_trail`` by the
services, inside the same transaction as the change itself.
"""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("marketplace.requests")

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs all write operations with status code and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        if request.method in _WRITE_METHODS:
            logger.info(
                "%s %s -> %d (%dms) admin=%s client=%s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                request.headers.get("x-admin-id", "-"),
                request.client.host if request.client else "-",
            )

        return response
