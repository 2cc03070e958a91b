"""
FastAPI application factory.

Creates and configures the backend API application.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from app.api.errors import install_exception_handlers
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import create_db_engine

logger = logging.getLogger(__name__)


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the backend application.

    Args:
        engine: Database engine; a new one is created from settings if omitted

    Returns:
        Configured FastAPI application
    """
    settings.validate_runtime()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="User account management API.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json")

    app.state.engine = engine if engine is not None else create_db_engine()

    install_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "accounts-api",
            "version": settings.VERSION
        }

    return app


def get_app() -> FastAPI:
    """Entry point for ``uvicorn --factory app.main:get_app``."""
    setup_logging()
    logger.info(f"Starting {settings.PROJECT_NAME} API {settings.VERSION}")
    return create_app()
