"""
CaseDesk Backend: Request ID Middleware
=======================================

What:  Gives every request a short correlation id and echoes it back in the
       ``X-Request-ID`` response header.
How:   Uses the client's ``X-Request-ID`` when present, otherwise the first
       eight characters of a UUID4. The id is stored in a ContextVar for
       loggers and exception handlers, and on ``request.state``.
When:  Outermost application middleware.

Error bodies include the same id, so a failed write reported by a user can
be matched with the server-side log line holding the database detail.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request id before any other processing.

    Behavior:
        1. Take X-Request-ID from the request, or generate one
        2. Store it in request_id_var and request.state.request_id
        3. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
