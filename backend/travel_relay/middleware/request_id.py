"""
Travel Relay — Request ID Middleware
======================================

What:  Assigns a short correlation ID to each incoming request and returns it
       in the X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise generates one;
       stores it in a ContextVar for loggers and on request.state for handlers.
Who:   Applied to every request via Starlette middleware.
When:  Outermost middleware (runs before all other processing).

The front-end can quote the ID from a failed call; every log line the relay
writes for that request carries the same value.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate lines within one process
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
