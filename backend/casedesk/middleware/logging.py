"""
CaseDesk Backend: Request Logging Middleware
============================================

What:  One access-log line per HTTP request.
How:   Measures the time from middleware entry to response, then logs
       method, path, status, duration, request id and client IP on the
       ``casedesk.access`` logger.
When:  Runs inside RequestIDMiddleware, so the request id is available.

Logged:     method, path, status, duration, client IP, request ID
Not logged: request bodies (passwords, note content) and the
            Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from casedesk.middleware.request_id import request_id_var

logger = logging.getLogger("casedesk.access")

# Liveness and health probes hit these every few seconds
QUIET_PATHS = frozenset({"/", "/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with a level chosen by the response status class:
    5xx → ERROR, 4xx → WARNING (401/403 land here), otherwise INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        # request.client is None under the ASGI test transport
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
