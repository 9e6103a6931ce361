"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendordash import __version__
from vendordash.core.config import get_settings
from vendordash.core.database import dispose_engine
from vendordash.core.exceptions import ConfigurationError, register_exception_handlers
from vendordash.core.health import router as health_router
from vendordash.core.logging import configure_logging, get_logger
from vendordash.core.middleware import RequestIdMiddleware
from vendordash.features.dashboard.routes import router as dashboard_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown.

    Startup fails if the reporting time zone cannot be loaded; dashboard
    windows are meaningless without it.

    Args:
        _app: FastAPI application instance (unused, required by lifespan protocol).

    Yields:
        None after startup, cleans up on shutdown.

    Raises:
        ConfigurationError: If the reporting time zone is unusable.
    """
    settings = get_settings()

    configure_logging()
    try:
        zone = settings.reporting_zone
    except ConfigurationError as e:
        logger.critical("app.startup_failed", error=e.message, details=e.details)
        raise

    logger.info(
        "app.startup_started",
        app_name=settings.app_name,
        app_env=settings.app_env,
        debug=settings.debug,
        reporting_zone=str(zone),
        order_offset_hours=settings.dashboard_order_offset_hours,
    )

    yield

    await dispose_engine()
    logger.info("app.shutdown_completed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Vendor sales dashboard: trends, top products and weekly sales",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
        if settings.is_development
        else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(dashboard_router)

    return app


app = create_app()
