"""
Travel API Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn travel_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                     FastAPI App                         │
    │                                                         │
    │  Middleware Chain:                                      │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────────┘ └──────┘ └──────┘         │
    │                                                         │
    │  Routes:                                                │
    │  auth │ places │ agencies │ likes │ comments │ uploads  │
    │  health                                                 │
    │                                                         │
    │  Exception Handlers:                                    │
    │  Validation/Credentials/DB→400 │ Auth→403 │ 404 │ 500   │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, upload directory, log startup complete
    Shutdown: dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from travel_api import __version__
from travel_api.config import settings
from travel_api.database import dispose_engine
from travel_api.exceptions import (
    AuthorizationError,
    DatabaseError,
    FileStorageError,
    InvalidCredentialsError,
    NotFoundError,
    TravelAPIError,
    ValidationError,
)
from travel_api.middleware.logging import RequestLoggingMiddleware
from travel_api.middleware.request_id import RequestIDMiddleware, request_id_var
from travel_api.routes import agencies, auth, comments, health, likes, places, uploads

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party libraries log at DEBUG/INFO for every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, upload directory. Shutdown: release the connection pool.

    The engine itself is created at import (travel_api.database) and handed
    to every request through the get_db_session dependency.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Travel API Backend %s starting up...", __version__)

    uploads_dir = Path(settings.upload_root)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", uploads_dir.resolve())

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Travel API Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, exc: TravelAPIError) -> JSONResponse:
    """Render the {error, details, request_id} envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.message,
            "details": exc.details,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler table:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (body/path/query did not parse)
        InvalidCredentialsError → 400 Bad Request
        DatabaseError           → 400 Bad Request (details = storage message)
        AuthorizationError      → 403 Forbidden
        NotFoundError           → 404 Not Found
        FileStorageError        → 500 Internal Server Error
        TravelAPIError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI's parsing failures use the same envelope, as a 400, instead of 422."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request",
                "details": jsonable_encoder(exc.errors()),
                "request_id": rid,
            },
        )

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return _error_response(400, exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.warning(
            "[%s] Database error: %s | Details: %s",
            request_id_var.get(""),
            exc.message,
            exc.details,
        )
        return _error_response(400, exc)

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        logger.warning("[%s] Forbidden: %s", request_id_var.get(""), exc.message)
        return _error_response(403, exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, exc)

    @app.exception_handler(TravelAPIError)
    async def handle_app_error(request: Request, exc: TravelAPIError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, a generic body to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred",
                "details": None,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Travel Discovery API",
        description=(
            "Backend for a travel-discovery app: accounts, admin-curated places, "
            "agencies and tour schedules, likes, and threaded comments."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added CORS → GZip → Logging → RequestID, runs RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(places.router)
    app.include_router(agencies.router)
    app.include_router(likes.router)
    app.include_router(comments.router)
    app.include_router(uploads.router)
    app.include_router(health.router)

    return app


# uvicorn expects `travel_api.main:app` to be importable
app = create_app()
