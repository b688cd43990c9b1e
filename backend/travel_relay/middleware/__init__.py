# Middleware package init
"""
Travel Relay — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → [GZip] → Route Table

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
    3. CORS: Answer OPTIONS with 204; stamp CORS headers on every other response,
       including 404/400/500 error bodies produced further in
    4. GZip: Compress large relayed bodies (flight search results)

    The order is reversed for responses:
    Response ← [Request ID] ← [Logging] ← [CORS] ← [GZip] ← Route Table
"""
