"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskstation import __version__
from taskstation.api.router import api_router
from taskstation.config import settings
from taskstation.core.exceptions import register_exception_handlers
from taskstation.core.logging import setup_logging
from taskstation.core.middleware import RequestLoggingMiddleware
from taskstation.database import init_db
from taskstation.scheduler import create_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates missing tables and, when configured, starts the overdue sweep.
    """
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info(
        "Environment: %s, file storage: %s",
        settings.environment,
        "s3" if settings.s3_enabled else "inline",
    )
    await init_db()

    scheduler = None
    if settings.overdue_sweep_interval_minutes > 0:
        scheduler = create_scheduler(settings.overdue_sweep_interval_minutes)
        scheduler.start()

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Task management with SLA monitoring.",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    # Health check endpoint (outside the API prefix)
    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy"}

    return app


# Application instance
app = create_app()
