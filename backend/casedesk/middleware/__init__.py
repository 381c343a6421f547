"""
CaseDesk Backend: Middleware Package
====================================

What:  Cross-cutting concerns applied around the route handlers.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and the X-Request-ID header
    2. Logging: method, path, status and duration per request
    3. GZip: compresses larger responses (the unpaginated list endpoints)
    4. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    The order is reversed for responses, so the logged status and duration
    are those of the finished response.

Auth Guard:
    ``auth.require_auth`` lives here as well but is a FastAPI dependency,
    not ASGI middleware: it wraps only the mutating routes that declare it.
"""
