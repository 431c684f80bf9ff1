"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: Log configuration before accepting requests
   - shutdown: Log the graceful stop

3. Middleware Stack
   - Rate limiting: slowapi, per client IP
   - CORS: Allow cross-origin requests

4. Exception Handlers
   - BookNotFoundError -> 404
   - Anything unexpected -> 500, logged with traceback
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app import __version__
from app.config import get_settings
from app.dependencies import BookRepo
from app.repositories import BookNotFoundError
from app.routers import books_router
from app.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    Books live only in memory, so nothing needs flushing on shutdown;
    the stored library is discarded with the process.
    """
    # ----- STARTUP -----
    logger.info(f"Application {settings.app_name} starting up...")
    logger.info(f"Environment: {settings.environment}, debug: {settings.debug}")
    logger.info(f"Rate limiting enabled: {settings.rate_limit_enabled}")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Application {settings.app_name} shutting down...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library API

A RESTful API for managing a library of books held in memory.

### Features
- **Books**: Create (idempotent PUT), read, update (PATCH), delete
- **Pagination**: `count`/`page` query parameters with next/prev links
- **Probes**: `/live`, `/ready` and `/health` endpoints
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state so it can be accessed by decorators
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookNotFoundError)
    async def book_not_found_handler(
        request: Request,
        exc: BookNotFoundError,
    ) -> JSONResponse:
        """Map a missing book to 404."""
        logger.info(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=404,
            content={"detail": "Book not found"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Utility Endpoints
    # -------------------------------------------------------------------------
    @app.get(
        "/",
        tags=["Utility"],
        summary="Service version",
        response_class=PlainTextResponse,
    )
    async def get_version() -> str:
        """Return the service version as plain text."""
        return __version__

    @app.get(
        "/live",
        tags=["Utility"],
        summary="Liveness probe",
        response_class=Response,
    )
    async def liveness() -> Response:
        """The process is up and serving requests."""
        return Response(status_code=200)

    @app.get(
        "/ready",
        tags=["Utility"],
        summary="Readiness probe",
        response_class=Response,
    )
    async def readiness() -> Response:
        """
        The service can take traffic.

        The in-memory store has no external dependencies to wait for.
        """
        return Response(status_code=200)

    @app.get(
        "/health",
        tags=["Utility"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    def health_check(repo: BookRepo) -> dict:
        """
        Health check endpoint.

        Used by load balancers and monitoring systems.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
            "books": repo.count(),
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
                "write_limit": settings.rate_limit_write,
            },
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m app.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
