"""
Creator Swipes Backend — Request Logging Middleware
====================================================

What:  One access log line per HTTP request.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses request ID for correlation).

Line format:
    POST /createCollection 403 4.2ms [a1b2c3d4] user=5f0c… ip=10.0.0.7

    user= is the id resolved by the auth dependency (request.state.user_id),
    or "-" for anonymous requests and requests rejected before auth ran.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies and headers are never logged: they carry passwords and tokens.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.rate_limit import client_ip
from app.middleware.request_id import request_id_var

logger = logging.getLogger("creator_swipes.access")

QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with caller id; health probes are not logged."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        caller = getattr(request.state, "user_id", None)
        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "user_id": str(caller) if caller else None,
            "client_ip": client_ip(request),
        }
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] user=%s ip=%s",
            fields["method"],
            fields["path"],
            fields["status"],
            elapsed_ms,
            fields["request_id"],
            fields["user_id"] or "-",
            fields["client_ip"],
            extra=fields,
        )
        return response
