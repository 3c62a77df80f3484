"""
ClimaTask Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the engine, the session factory
       and the services for one application, stores them on `app.state`,
       registers middleware, exception handlers and routers.
Who:   uvicorn (uvicorn climatask.main:app) and the test suite, which calls
       create_app(Settings(...)) against SQLite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐                      │
    │  │ Req ID   │→│ Logging  │→│ CORS │                      │
    │  └──────────┘ └──────────┘ └──────┘                      │
    │                                                          │
    │  Routes:                                                 │
    │  /  /health  /users  /login  /locations  /tasks  /climate│
    │                                                          │
    │  app.state:                                              │
    │  settings, engine, session_factory,                      │
    │  user/location/task/weather services                     │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Unauthorized→401 │ NotFound→404 │ 500  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (fail fast on missing database settings)

    Shutdown:
    1. Close the forecast HTTP client
    2. Dispose the database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from climatask import __version__
from climatask.config import Settings, settings as default_settings
from climatask.database import build_engine, build_session_factory, dispose_engine
from climatask.exceptions import (
    ClimaTaskError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    WeatherServiceError,
)
from climatask.middleware.logging import RequestLoggingMiddleware
from climatask.middleware.request_id import RequestIDMiddleware, request_id_var
from climatask.routes import climate, health, locations, tasks, users
from climatask.services.location_service import LocationService
from climatask.services.task_service import TaskService
from climatask.services.user_service import UserService
from climatask.services.weather_service import WeatherService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every pooled checkout / outbound request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check. Shutdown: release the HTTP client
    and the connection pool owned by this application.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings)
    logger.info("=" * 60)
    logger.info("ClimaTask Backend %s starting up...", __version__)

    try:
        app_settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ClimaTask Backend shutting down...")
    await app.state.weather_service.aclose()
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy to HTTP responses.

    Handler hierarchy (most specific class wins):
        ValidationError (Conflict, InvalidCredentials) → 400
        UnauthorizedError                              → 401
        NotFoundError (RecordNotFound)                 → 404
        WeatherServiceError                            → 500
        DatabaseError                                  → 500
        ClimaTaskError (base)                          → 500
        Exception (fallback)                           → 500

    500 bodies carry a generic message; exception context goes to the log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] %s: %s", request_id_var.get(""), exc.error_code, exc.message)
        return _error_response(400, exc.error_code, exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return _error_response(401, exc.error_code, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.error_code, exc.message)

    @app.exception_handler(WeatherServiceError)
    async def handle_weather_error(request: Request, exc: WeatherServiceError):
        logger.error(
            "[%s] Weather service error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, exc.error_code, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(
            500,
            exc.error_code,
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(ClimaTaskError)
    async def handle_application_error(request: Request, exc: ClimaTaskError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only, never into the response."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Explicit settings; defaults to the environment-loaded
                      module instance.

    Returns:
        Fully configured FastAPI instance. Its engine connects lazily, so
        building an app does not touch the database.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="ClimaTask API",
        description=(
            "Users, their saved locations and to-do tasks, plus a weather "
            "proxy over the Open-Meteo forecast API."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Per-application resources ─────────────────────────────────────────
    engine = build_engine(app_settings)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.user_service = UserService(bcrypt_rounds=app_settings.bcrypt_rounds)
    app.state.location_service = LocationService()
    app.state.task_service = TaskService()
    app.state.weather_service = WeatherService(
        base_url=app_settings.weather_api_url,
        timeout=app_settings.weather_timeout,
        retry_attempts=app_settings.weather_retry_attempts,
        retry_max_wait=app_settings.weather_retry_max_wait,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(locations.router)
    app.include_router(tasks.router)
    app.include_router(climate.router)

    return app


# uvicorn expects `climatask.main:app` to be importable
app = create_app()
