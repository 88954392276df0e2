"""
NGO Site Backend - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) builds the stores/services,
       registers middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn ngo_api.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → GZip → CORS │
    │                                                     │
    │  Routes:                                            │
    │    /api/members[/{id}]   /api/events[/{id}]         │
    │    /uploads/{filename}   /health   /                │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFound→404  Storage→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → services.startup()
    Shutdown: services.shutdown() (dispose engine / close JSON file)
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

from ngo_api import __version__
from ngo_api.bootstrap import build_services
from ngo_api.config import Settings, settings as default_settings
from ngo_api.exceptions import NotFoundError, StorageError, ValidationError
from ngo_api.middleware.logging import RequestLoggingMiddleware
from ngo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from ngo_api.routes import events, health, members, uploads

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure process-wide logging once at startup.

    Format: 2024-06-10T08:00:00 [INFO] ngo_api.services.member_service: Member created: ...
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    services = app.state.services

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("NGO Site Backend starting up...")

    try:
        config.validate_required_for_production()
    except ValueError as e:
        # Not fatal: the health endpoint and error bodies still report it
        logger.error("Configuration error: %s", str(e))

    await services.startup()
    logger.info("Uploads directory: %s", services.assets.upload_dir)
    logger.info("Public asset base: %s", config.public_base_url)
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NGO Site Backend shutting down...")
    await services.shutdown()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes and the ErrorResponse body.

        ValidationError / RequestValidationError → 400 validation_error
        NotFoundError                            → 404 not_found
        StorageError (Database/AssetStorage)     → 500 storage_error
        Exception (fallback)                     → 500 internal_server_error
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in errors]
        fields = [f for f in fields if f]
        logger.warning("[%s] Request validation failed: %s", rid, fields)
        message = "Invalid or missing fields: " + ", ".join(fields) if fields else "Invalid request body"
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": {"fields": fields},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "storage_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the app from; defaults to the environment.
                Tests pass their own (temporary upload dir, JSON or SQLite).
    """
    config = config or default_settings

    app = FastAPI(
        title="NGO Site API",
        description="Members (with photos) and events for the NGO website.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.services = build_services(config)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    origins = config.cors_origins_list
    allow_any = "*" in origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_any else origins,
        allow_credentials=not allow_any,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(members.router)
    app.include_router(events.router)
    app.include_router(uploads.router)
    app.include_router(health.router)

    return app


app = create_app()
