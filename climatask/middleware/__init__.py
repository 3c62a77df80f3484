# Middleware package init
"""
ClimaTask Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: sets the correlation ID before anything logs
    2. Logging: sees the final status code and total duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the same chain in reverse, so the
    X-Request-ID header is added to every response, errors included.
"""
