"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import Settings, get_settings
from shared.logging_config import configure_logging
from modules.auth.routes import router as auth_router
from modules.billing.routes import router as billing_router
from modules.collections.routes import router as collections_router
from modules.files.routes import router as files_router
from modules.search.routes import router as search_router
from modules.users.routes import router as users_router

from .dependencies import ServiceContainer
from .errors import install_crash_handlers, register_error_handlers
from .middleware.context import RequestContextMiddleware
from .routes import health, info

logger = logging.getLogger("mockapi")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings: Settings = app.state.container.settings
    configure_logging(settings)
    crash_handlers = None
    if not settings.is_test:
        crash_handlers = install_crash_handlers(loop=asyncio.get_running_loop())
    logger.info(
        "Starting %s",
        settings.app_name,
        extra={"host": settings.host, "port": settings.port, "environment": settings.environment},
    )
    yield
    # Shutdown
    if crash_handlers is not None:
        crash_handlers.uninstall()
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds a fresh service container, so the returned app
    starts from the seeded mock data.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    prefix = settings.api_prefix

    app = FastAPI(
        title=settings.app_name,
        description="Mock REST backend with envelope responses, mock JWT auth and rate limiting",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if settings.debug else None,
        redoc_url=f"{prefix}/redoc" if settings.debug else None,
    )
    app.state.container = ServiceContainer(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-Request-ID", "X-Response-Time", "Retry-After"],
    )
    app.add_middleware(
        RequestContextMiddleware,
        slow_request_ms=settings.slow_request_ms,
        logger=logging.getLogger("mockapi.http"),
    )

    register_error_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(info.router, prefix=prefix, tags=["info"])
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(collections_router, prefix=f"{prefix}/collections", tags=["collections"])
    app.include_router(files_router, prefix=f"{prefix}/files", tags=["files"])
    app.include_router(search_router, prefix=f"{prefix}/search", tags=["search"])
    app.include_router(billing_router, prefix=f"{prefix}/billing", tags=["billing"])

    return app


# Application instance for uvicorn
app = create_app()
