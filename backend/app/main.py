"""
FastAPI Application Entry Point.

This is the main application file for the Equipment Monitoring Backend.
Run with ``uvicorn backend.app.main:app``.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from backend.app.core.config import Settings, get_settings
from backend.app.core.context import AppContext
from backend.app.core.observability import ObservabilityMiddleware, configure_logging
from backend.app.api.router import router as api_router
from backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Creates database tables and seed accounts on startup.
    2. Disposes the database engine on shutdown.
    """
    context: AppContext = app.state.context
    await context.startup()
    yield
    await context.shutdown()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application with its own context."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug,
        description="Shift schedules and equipment status reports for monitoring engineers",
        lifespan=lifespan,
    )
    app.state.context = AppContext(settings)

    app.add_middleware(ObservabilityMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type", "X-Correlation-ID"],
    )

    # Register global exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Status and application information
        """
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "version": settings.api_version,
        }

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
