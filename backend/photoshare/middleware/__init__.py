# Middleware package init
"""
PhotoShare Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate or accept a correlation ID
    2. Logging: Log method, path, status and duration with that ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

Authentication is not a middleware: it is the `require_user_id` dependency
in photoshare.dependencies, attached only to protected routes.
"""
