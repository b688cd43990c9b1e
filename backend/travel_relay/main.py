"""
Travel Relay — FastAPI Application Factory
============================================

What:  Creates and configures the relay application.
How:   Factory pattern: create_app(settings) builds the services, registers
       middleware and exception handlers, and mounts the route table.
Who:   uvicorn (travel_relay.main:app), the travel-relay console script, tests.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌──────────┐  │
    │  │  Req ID  │→│ Logging  │→│  CORS  │→│   GZip   │  │
    │  └──────────┘ └──────────┘ └────────┘ └──────────┘  │
    │                                                     │
    │  Route Table (routes/relay.py):                     │
    │  /search-flights  /get-image  /google-places-*      │
    │  /generate-image  /upload-image                     │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Route→404 │ Upstream→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, warn about unset credentials
    Shutdown: close the shared outbound HTTP client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_relay import __version__
from travel_relay.config import Settings, get_settings
from travel_relay.exceptions import RelayError, RouteNotFoundError
from travel_relay.middleware.cors import AllowListCORSMiddleware
from travel_relay.middleware.logging import RequestLoggingMiddleware
from travel_relay.middleware.request_id import RequestIDMiddleware, request_id_var
from travel_relay.routes import relay
from travel_relay.services.registry import build_services
from travel_relay.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes capture it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every request/connection at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("aiobotocore").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, credential warnings, ready banner.
    Shutdown: close the shared httpx client.

    Missing credentials do not stop the server; the routes that depend on
    them answer 500 with the provider's error instead.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info("Travel Relay %s starting up...", __version__)

    for missing in settings.missing_credentials():
        logger.warning("Not configured: %s", missing)

    logger.info("Allowed origins: %s", ", ".join(settings.allowed_origins_list) or "(none)")
    logger.info("Server running at http://%s:%d/", settings.host, settings.port)

    yield

    logger.info("Travel Relay shutting down...")
    await app.state.services.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    """Every error leaves the relay as {"error": message}."""
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the relay's single error shape.

    Handler hierarchy:
        RelayError subclasses   → their status_code (400 / 404 / 413 / 500)
        HTTPException 404/405   → 404 Invalid route
        HTTPException (other)   → its status, detail as message
        Exception (fallback)    → 500 Internal server error
    """

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s", rid, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # A known path with the wrong method is still an unknown route
        if exc.status_code in (404, 405):
            not_found = RouteNotFoundError(method=request.method, path=request.url.path)
            return error_response(not_found.status_code, not_found.message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all; the stack trace is logged server-side only.

        Starlette serves this from ServerErrorMiddleware, outside the user
        middleware, so the response has no CORS or X-Request-ID headers.
        Route failures are shaped earlier by make_endpoint.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    storage: Optional[ObjectStorage] = None,
) -> FastAPI:
    """
    Create and configure the relay application.

    Args:
        settings:     Immutable settings; read from the environment when omitted
        http_client:  Outbound client override (tests)
        storage:      Object store override (tests)

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Travel Relay",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.services = build_services(settings, http_client=http_client, storage=storage)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS → GZip
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(AllowListCORSMiddleware, allowed_origins=settings.allowed_origins_list)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(relay.router)

    return app


def run() -> None:
    """Console entry point: serve on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "travel_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `travel_relay.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    run()
