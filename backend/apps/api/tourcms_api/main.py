"""
TourCMS API - FastAPI application entry point.

This module initializes the FastAPI application and configures
middleware, routers, error handlers and lifecycle events.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from arq import create_pool
from arq.connections import RedisSettings
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tourcms_core import get_logger, init_logging
from tourcms_database.session import close_database, init_database

from . import dependencies
from .config import settings
from .routers import content, translate, translations

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifecycle manager.

    Handles startup and shutdown events for the application.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    # Startup: Initialize resources
    init_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Starting TourCMS API", extra={"version": settings.version})
    init_database(settings.database_url, echo=settings.debug)

    # Initialize Redis pool for task queue; background jobs are optional
    try:
        dependencies.redis_pool = await create_pool(RedisSettings.from_dsn(settings.redis_url))
        logger.info("Redis pool initialized")
    except Exception as e:
        logger.warning("Redis unavailable, background jobs disabled", extra={"error": str(e)})

    yield

    # Shutdown: Cleanup resources
    if dependencies.redis_pool:
        await dependencies.redis_pool.close()
        dependencies.redis_pool = None
        logger.info("Redis pool closed")
    await close_database()
    logger.info("Shutting down TourCMS API")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors as a 400 error envelope."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "; ".join(messages) or "Invalid request"},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors in the same envelope as validation errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="TourCMS - Multilingual tour content API",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Register API routers
    app.include_router(translations.router, prefix="/api/translations", tags=["Translations"])
    app.include_router(translate.router, prefix="/api/translate", tags=["Translations"])
    app.include_router(content.router, prefix="/api/content", tags=["Content"])

    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        """
        Health check endpoint.

        Returns:
            Dictionary containing service status and version.
        """
        return {"status": "healthy", "version": settings.version}

    return app


app = create_app()
