"""
Main FastAPI application.

WHY: This is the entry point for the application. It wires the shared
OwnerService, routes, exception handlers and middleware.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from petowners.api import owners
from petowners.core.config import Settings, settings
from petowners.core.exceptions import AppException
from petowners.core.exception_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from petowners.core.owner_config import (
    OwnerConfiguration,
    owner_configurations_from_settings,
)
from petowners.db.session import build_engine, build_session_factory, engine, init_db
from petowners.middleware import RequestContextMiddleware
from petowners.services.owner_service import OwnerService


logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    owner_configurations: Optional[List[OwnerConfiguration]] = None,
    db_engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    WHY: Factory pattern allows testing with different configurations.
    Each call builds exactly one OwnerService, shared by every request
    the returned application serves.

    Args:
        app_settings: Settings to use (defaults to the environment settings)
        owner_configurations: Owner entries (defaults to OWNERS_FILE + OWNERS)
        db_engine: Engine to use (defaults to one built from DATABASE_URL)

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or settings

    if db_engine is None:
        if app_settings is settings:
            db_engine = engine
        else:
            db_engine = build_engine(app_settings.async_database_url, echo=app_settings.DEBUG)

    if owner_configurations is None:
        owner_configurations = owner_configurations_from_settings(app_settings)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Owners and their pets",
        version=app_settings.VERSION,
    )

    # Process-wide service
    # WHY: Stored on app.state and handed to routes by get_owner_service,
    # so there is one instance per application and no module global.
    app.state.owner_service = OwnerService(
        owner_configurations,
        build_session_factory(db_engine),
    )

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(RequestContextMiddleware)

    @app.on_event("startup")
    async def startup_event():
        """
        Application startup event handler.

        Creates missing tables and, unless SEED_PETS is off, stores the
        configured owners' pets.
        """
        await init_db(db_engine)
        if app_settings.SEED_PETS:
            await app.state.owner_service.seed_pets()
        logger.info(
            f"{app_settings.PROJECT_NAME} started with "
            f"{len(app.state.owner_service.get_initial_owners())} configured owners"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release pooled database connections."""
        await db_engine.dispose()

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """Liveness check; does not touch the database."""
        return {
            "status": "healthy",
            "version": app_settings.VERSION,
        }

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": app_settings.PROJECT_NAME,
            "version": app_settings.VERSION,
            "docs": "/docs",
        }

    app.include_router(owners.router)

    return app


# Create app instance
# WHY: Creating the app instance here allows it to be imported by uvicorn.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # WHY: This allows running the app directly with `python -m petowners.main`
    # for development. In production, use `uvicorn petowners.main:app` directly.
    uvicorn.run(
        "petowners.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
