"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from vzgrafana.main.config import get_settings
from vzgrafana.main.container import app_lifespan, init_container
from vzgrafana.presentation.controllers import grafana_router, system_router
from vzgrafana.presentation.middleware import (
    RequestLoggingMiddleware,
    request_validation_handler,
)
from vzgrafana.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Delegates to the container's app_lifespan for middleware endpoint
    detection and the initial entity name load.
    """
    logger.info("Application starting up")

    async with app_lifespan():
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.server.title,
        description=settings.server.description,
        version=settings.server.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Grafana queries the datasource directly from the browser in "direct" mode
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["accept", "content-type"],
    )
    app.add_middleware(RequestLoggingMiddleware, debug=settings.server.debug)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(system_router)
    app.include_router(grafana_router)

    return app


app = create_app()
