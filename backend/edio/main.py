"""
FastAPI application entry point.
Configures the application with all routes, middleware, and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from edio.auth import check_auth_config
from edio.config import settings
from edio.database import close_db, init_db
from edio.utils.logging import configure_logging, get_logger, bind_context, clear_context

from edio.api.v1.health import router as health_router
from edio.api.v1.router import api_router


# Configure logging on module load
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables when running against the SQL store in debug
    - Shutdown: close DB connections
    """
    logger.info(
        "Starting application...",
        debug=settings.debug,
        store_backend=settings.store_backend,
    )

    check_auth_config()

    if settings.store_backend == "sql" and settings.debug:
        await init_db()
        logger.info("Database tables initialized")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    await close_db()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Collaboration backend for YouTubers and video editors",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.include_router(health_router, tags=["Health"])
app.include_router(api_router, prefix=settings.api_prefix)

# === MIDDLEWARE ===

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all requests and bind context.

    Binds request_id for tracing.
    """
    request_id = str(uuid.uuid4())[:8]
    bind_context(request_id=request_id)

    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
    )

    try:
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response
    except Exception as e:
        logger.exception(
            "Request failed", method=request.method, path=request.url.path, error=str(e)
        )
        raise
    finally:
        clear_context()


# === ROOT ENDPOINT ===


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "app": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
    }


# === EXCEPTION HANDLERS ===
# Every error body has the shape {"error": "<message>"}.


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors raised by routes and dependencies."""
    if exc.status_code >= 500:
        logger.error("Request error", status_code=exc.status_code, error=exc.detail, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/parameter validation errors with 422 response."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning("Request validation failed", error=message, path=request.url.path)
    return JSONResponse(status_code=422, content={"error": message})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors with 400 response."""
    if isinstance(exc, ValidationError):
        # A model built inside a route failed: a server bug, not bad input
        return await general_exception_handler(request, exc)
    logger.warning("Validation error", error=str(exc), path=request.url.path)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors with 500 response."""
    logger.exception("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
