"""
Employee Roster API: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       run() starts uvicorn on the configured host and port.
Who:   uvicorn (`uvicorn roster.main:app`) or the `roster-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:   Request ID → Logging → CORS          │
    │                                                     │
    │  Routes:       /employees  (CRUD)                   │
    │                /api-docs   (Swagger UI)             │
    │                /, /health                           │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400 │ NotFound→404 │ Storage→500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (fails fast in production)
    3. Connect the storage client (fails fast if unreachable)

    Shutdown:
    1. Disconnect the storage client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from roster.config import Settings, settings
from roster.database import StorageClient
from roster.docs import docs_kwargs, install_openapi
from roster.exceptions import NotFoundError, RosterError, StorageError, ValidationError
from roster.middleware.logging import RequestLoggingMiddleware
from roster.middleware.request_id import RequestIDMiddleware, request_id_var
from roster.routes import employees, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings = settings) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, config validation, storage connection.
    Shutdown: storage disconnection.

    Connects the client create_app() placed on app.state.storage.
    """
    config: Settings = app.state.config
    setup_logging(config)
    logger.info("%s %s starting up (%s)", app.title, app.version, config.environment)

    try:
        config.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise

    client: StorageClient = app.state.storage
    # Raises on failure, aborting startup
    await client.connect()

    logger.info("Server ready on port %d, API docs at %s", config.port, app.docs_url)

    yield

    logger.info("Shutting down...")
    await client.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, exc: RosterError, details: Optional[dict] = None) -> dict:
    return {
        "error": error,
        "message": exc.message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's error list into one line, e.g. 'body.name: Input should be a valid string'."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "Request validation failed: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes and the shared error body.

    Handler hierarchy:
        ValidationError         → 400 (record schema rejected the payload)
        RequestValidationError  → 400 (body/params could not be parsed)
        NotFoundError           → 404
        StorageError            → 500 with the driver message
        Exception (fallback)    → 500 generic message, stack trace logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc, exc.context or None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        error = ValidationError(message=describe_validation_errors(exc))
        logger.warning("[%s] %s", request_id_var.get(""), error.message)
        return JSONResponse(status_code=400, content=_error_body("validation_error", error))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc))

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body("storage_error", exc))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "details": None,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    storage: Optional[StorageClient] = None,
) -> FastAPI:
    """
    Assemble middleware, exception handlers, routes and docs.

    Args:
        config:  settings to use (defaults to the process-wide singleton)
        storage: pre-built storage client; when omitted one is built from
                 `config` and connected by the lifespan hook
    """
    config = config or settings
    app = FastAPI(lifespan=lifespan, **docs_kwargs(config))
    app.state.config = config
    app.state.storage = storage or StorageClient(config)

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(employees.router)
    app.include_router(health.router)

    install_openapi(app)
    return app


# uvicorn expects `roster.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "roster.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
