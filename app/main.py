"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: configure the entity mapper before accepting requests
   - shutdown: release pooled database connections

3. Exception Handlers
   - Request validation errors → 400 with field details
   - Database errors and anything unexpected → 500 with a fixed message;
     the details are logged, never returned
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import engine
from app.mapping import configure_mapper
from app.routers import authors_router, books_router, users_router
from app.utils import GENERIC_ERROR_MESSAGE, bad_request, format_validation_errors

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
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API prefix: {settings.api_prefix}")

    # Register entity <-> schema mappings once, before the first request
    configure_mapper()
    logger.info("Entity mapper configured")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


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
## BookStore API

A RESTful API for a bookstore's catalogue.

### Features
- **Books**: Full CRUD operations for books
- **Authors**: Full CRUD operations for authors
- **Users**: Registration and login

### Authentication
Reading books and authors is open to everyone. Creating, updating and
deleting them requires a bearer token for a user with the
**Administrator** role. Obtain a token from `POST /api/users/login`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

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
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Report invalid or missing request data as 400.

        FastAPI's default is 422; this API reports every malformed
        request (missing body, null body, wrong types, failed validators)
        as 400 with one entry per offending field.
        """
        return bad_request(
            logger,
            f"{request.method} {request.url.path}: Submitted data not valid",
            errors=format_validation_errors(exc.errors()),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"{request.method} {request.url.path}: Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content=GENERIC_ERROR_MESSAGE,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        The response never carries exception details, in any environment.
        """
        logger.error(
            f"{request.method} {request.url.path}: Unhandled error: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=GENERIC_ERROR_MESSAGE,
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # prefix="/api" creates URLs such as /api/books and /api/authors
    app.include_router(books_router, prefix=settings.api_prefix)
    app.include_router(authors_router, prefix=settings.api_prefix)
    app.include_router(users_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers, container probes and monitoring systems.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "environment": settings.environment,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
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
# python -m app.main runs a development server.
# In production, use: uvicorn app.main:app --host 0.0.0.0 --port 8001

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
