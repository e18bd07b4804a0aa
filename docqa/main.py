"""
FastAPI application entry point.

Initializes the FastAPI app, registers routers and configures the
lifespan that wires services once and releases them on shutdown.

Dependencies: fastapi, uvicorn, docqa.api, docqa.application, docqa.observability
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docqa import __version__
from docqa.api.routers import documents_router, health_router, setup_router
from docqa.application.container import ServiceContainer
from docqa.configs import Settings, get_settings
from docqa.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Optional settings override; defaults to get_settings()

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(settings.log_level)
        logger.info("Application startup: logging configured")

        container = ServiceContainer.from_settings(settings)
        await container.startup()
        app.state.container = container
        logger.info("Application startup complete: services initialized")

        try:
            yield
        finally:
            await container.aclose()
            logger.info("Application shutdown")

    app = FastAPI(
        title="Document Q&A API",
        description="Ask questions about uploaded documents",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(setup_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docqa.main:create_app",
        factory=True,
        host="localhost",
        port=8082,
    )
