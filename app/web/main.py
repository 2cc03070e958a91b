"""
Web tier application factory.

Serves the session-gated ``/api`` routes used by the profile page and
forwards them to the backend API.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.api.errors import install_exception_handlers
from app.core.config import settings
from app.core.logging import setup_logging
from app.web import routes
from app.web.backend import BackendClient

logger = logging.getLogger(__name__)


def create_web_app(backend: Optional[BackendClient] = None) -> FastAPI:
    """
    Build the web tier application.

    Args:
        backend: Backend client; one pointing at API_BASE_URL is created if omitted

    Returns:
        Configured FastAPI application
    """
    settings.validate_runtime()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.backend.aclose()

    app = FastAPI(title=f"{settings.PROJECT_NAME} web", version=settings.VERSION, lifespan=lifespan)
    app.state.backend = backend if backend is not None else BackendClient()

    install_exception_handlers(app)
    app.include_router(routes.router, prefix="/api", tags=["Profile"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "accounts-web", "backend": settings.API_BASE_URL}

    return app


def get_web_app() -> FastAPI:
    """Entry point for ``uvicorn --factory app.web.main:get_web_app``."""
    setup_logging()
    logger.info(f"Starting web tier, forwarding to {settings.API_BASE_URL}")
    return create_web_app()
