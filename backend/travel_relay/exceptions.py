"""
Travel Relay — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the ways a relayed request fails.
How:   Each exception carries a client-facing message, an optional context dict
       (logged, never returned) and the HTTP status it maps to. A single handler
       registered in main.py renders every RelayError as {"error": message}.
Who:   Raised by the route table wrapper and the upstream services.
When:  During request processing; every error is terminal for the request.

Exception Hierarchy:
    RelayError (base)
    ├── ValidationError       → 400 Bad Request
    ├── RouteNotFoundError    → 404 Not Found
    ├── PayloadTooLargeError  → 413 Payload Too Large
    └── UpstreamError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message:      User-facing error description, returned as the "error" field
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status used by the global handler
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RelayError):
    """
    Raised when a required query or body parameter is absent or empty.

    HTTP:    400 Bad Request
    Body:    {"error": "Missing 'input' parameter"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @classmethod
    def missing(cls, field: str) -> "ValidationError":
        return cls(message=f"Missing '{field}' parameter", field=field)


class RouteNotFoundError(RelayError):
    """
    Raised when no route matches the request's path and method.

    HTTP:    404 Not Found (a known path with the wrong method is also a 404)
    """

    status_code = 404

    def __init__(
        self,
        method: str = "",
        path: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if method:
            ctx["method"] = method
        if path:
            ctx["path"] = path
        super().__init__(message="Invalid route", context=ctx)


class PayloadTooLargeError(RelayError):
    """Raised when a JSON body exceeds settings.max_body_bytes."""

    status_code = 413

    def __init__(
        self,
        limit: int,
        size: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["limit"] = limit
        if size is not None:
            ctx["size"] = size
        super().__init__(message="Request body too large", context=ctx)
        self.limit = limit


class UpstreamError(RelayError):
    """
    Raised when the single upstream call fails.

    What:    Transport error, timeout, non-2xx status, malformed JSON, or a
             response missing the fields the relay needs.
    HTTP:    500 Internal Server Error
    No retry is attempted; the provider's own error text is surfaced when
    the failed response carries one.

    Attributes:
        upstream_status:  Provider HTTP status, when a response was received
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Upstream request failed",
        upstream_status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if upstream_status is not None:
            ctx["upstream_status"] = upstream_status
        super().__init__(message=message, context=ctx)
        self.upstream_status = upstream_status
