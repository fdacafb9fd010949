"""
TagTables - Main Application.

FastAPI application exposing the table actions a spreadsheet menu would run.
Every request is one execution with its own table cache.
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tagtables import __version__
from tagtables.config import get_settings
from tagtables.exceptions import TagTablesException
from tagtables.schemas import HealthResponse
from tagtables.modules.tables import router as tables_router

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("tagtables")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting TagTables API v{__version__} "
        f"[env={settings.app_env}] "
        f"[host={settings.host.backend}] "
        f"[strict_tags={settings.tables.strict_tags}]"
    )
    yield
    logger.info("Shutting down TagTables API")


app = FastAPI(
    title="TagTables API",
    description="Tag-addressed table engine for spreadsheet-hosted character sheets.",
    version=__version__,
    lifespan=lifespan,
)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(TagTablesException)
async def tagtables_exception_handler(request: Request, exc: TagTablesException):
    """Handle TagTables custom exceptions."""
    request_id = getattr(request.state, "request_id", None)
    logger.warning(f"TagTablesException: {exc.code} - {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
                "request_id": request_id,
            }
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.error(f"Unhandled exception on {request.url.path}")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if get_settings().app_debug else "An unexpected error occurred",
                "request_id": request_id,
            }
        },
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        app_env=settings.app_env,
        host_backend=settings.host.backend,
        strict_tags=settings.tables.strict_tags,
    )


# =============================================================================
# Register Module Routers
# =============================================================================

app.include_router(tables_router)
