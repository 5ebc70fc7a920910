# Middleware package init
"""
Travel API Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs, error bodies, and the response header
    2. Logging: method, path, status, and duration with the request ID
    3. GZip: compresses larger JSON listings
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
