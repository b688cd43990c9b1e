"""
Travel Relay — Route Table Machinery
======================================

What:  Declarative route definitions and the single endpoint wrapper they share.
How:   Each RelayRoute names (method, path, parameter source, validator,
       upstream call). build_router() registers one FastAPI endpoint per row,
       all produced by make_endpoint(), so parameter extraction, presence
       checks and error shaping exist exactly once.
Who:   routes/relay.py declares the rows; main.create_app() mounts the router.

Request Flow (every row):
    1. Read parameters: query string, or JSON body (size-limited)
    2. Validate presence → ValidationError (400), no upstream call
    3. Call the upstream service once
    4. 200 + upstream JSON, or UpstreamError (500) with a best-effort message
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import JSONResponse

from travel_relay.exceptions import (
    PayloadTooLargeError,
    RelayError,
    UpstreamError,
    ValidationError,
)
from travel_relay.middleware.request_id import request_id_var
from travel_relay.services.registry import ServiceRegistry

logger = logging.getLogger(__name__)

Params = Dict[str, Any]
Validator = Callable[[Mapping[str, Any]], None]
UpstreamCall = Callable[[ServiceRegistry, Params], Awaitable[Any]]

QUERY = "query"
BODY = "body"


def require(*fields: str, message: Optional[str] = None) -> Validator:
    """
    Presence validator. Absent, None and "" all count as missing.

    Args:
        fields:   Parameter names checked in order; the first missing one is reported
        message:  Fixed message used instead of "Missing '<field>' parameter"
    """

    def validate(params: Mapping[str, Any]) -> None:
        for field in fields:
            value = params.get(field)
            if value is None or value == "":
                if message:
                    raise ValidationError(message=message, field=field)
                raise ValidationError.missing(field)

    return validate


def no_validation(params: Mapping[str, Any]) -> None:
    return None


@dataclass(frozen=True)
class RelayRoute:
    """
    One row of the route table.

    Attributes:
        method:           HTTP method matched exactly
        path:             URL path matched exactly (no trailing-slash variants)
        call:             Coroutine performing the single upstream call
        validate:         Presence checks run before the call
        source:           QUERY or BODY (JSON object)
        failure_message:  Fixed 500 message; when unset the error detail is surfaced
    """

    method: str
    path: str
    call: UpstreamCall
    validate: Validator = no_validation
    source: str = QUERY
    failure_message: Optional[str] = None


async def read_json_body(request: Request, limit: int) -> Params:
    """
    Read and parse a JSON object body, enforcing the size limit.

    The declared Content-Length is checked before reading; the streamed
    byte count is checked while reading (chunked bodies have no header).

    Raises:
        PayloadTooLargeError: Body exceeds limit
        ValueError:           Body is not a JSON object
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit=limit, size=int(declared))

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError(limit=limit, size=size)
        chunks.append(chunk)

    body = json.loads(b"".join(chunks))
    if not isinstance(body, dict):
        raise ValueError("JSON body must be an object")
    return body


def make_endpoint(route: RelayRoute) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Build the FastAPI endpoint for one route row."""

    async def endpoint(request: Request) -> JSONResponse:
        services: ServiceRegistry = request.app.state.services

        try:
            if route.source == BODY:
                params = await read_json_body(request, request.app.state.settings.max_body_bytes)
            else:
                params = dict(request.query_params)

            route.validate(params)
            result = await route.call(services, params)

        except (ValidationError, PayloadTooLargeError):
            raise
        except RelayError as e:
            if route.failure_message:
                logger.error(
                    "[%s] %s %s failed: %s", request_id_var.get(""), route.method, route.path, e.message
                )
                raise UpstreamError(message=route.failure_message, context=e.context) from e
            raise
        except Exception as e:
            logger.error(
                "[%s] %s %s failed: %s",
                request_id_var.get(""),
                route.method,
                route.path,
                str(e),
                exc_info=True,
            )
            raise UpstreamError(
                message=route.failure_message or str(e) or type(e).__name__,
                context={"error_type": type(e).__name__},
            ) from e

        return JSONResponse(content=result)

    endpoint.__name__ = "relay_" + route.path.strip("/").replace("-", "_")
    return endpoint


def build_router(routes: Iterable[RelayRoute]) -> APIRouter:
    """Register every row on a fresh APIRouter."""
    router = APIRouter(tags=["Relay"])
    for route in routes:
        router.add_api_route(
            route.path,
            make_endpoint(route),
            methods=[route.method],
            response_class=JSONResponse,
            include_in_schema=False,
        )
    return router
