"""
Travel Relay — CORS Middleware
================================

What:  Applies the relay's CORS rules to every response and answers preflights.
How:   Echoes the Origin header back in Access-Control-Allow-Origin only when
       it is on the allow-list; always sets the allowed methods and headers.
       Any OPTIONS request is answered here with 204 and no body, on any path.
Who:   Applied to every request via Starlette middleware.
When:  Inside request-id and logging, outside routing (so 404s get headers too).

Behavior:
    Origin allow-listed     → Access-Control-Allow-Origin: <origin>
    Origin missing/unknown  → header omitted; the response is still produced
                              and the browser blocks the client-side read

Starlette's CORSMiddleware is not used: it rejects disallowed preflights with
400 and requires Access-Control-Request-Method before treating OPTIONS as a
preflight. The relay answers every OPTIONS with 204.
"""

from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

ALLOW_METHODS = "POST, GET, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """
    Exact-match origin allow-list with an unconditional preflight answer.

    Args:
        allowed_origins: Origins that receive the grant header (exact string match)
    """

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str] = ()):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
        }
        if self.is_allowed(origin):
            headers["Access-Control-Allow-Origin"] = origin
        return headers

    def is_allowed(self, origin: str | None) -> bool:
        return bool(origin) and origin in self.allowed_origins

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        headers = self.cors_headers(origin)

        if request.method == "OPTIONS":
            response = Response(status_code=204, headers=headers, media_type="application/json")
        else:
            response = await call_next(request)
            response.headers.update(headers)

        # Merged, not replaced: GZip sets Vary: Accept-Encoding further in
        if self.is_allowed(origin):
            response.headers.add_vary_header("Origin")
        return response
