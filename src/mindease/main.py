"""
MindEase FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (session reaper start/stop)
- CORS configuration
- Error handling middleware
- Router registration
- Metrics endpoint
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindease import __version__
from mindease.api.middleware.error_handler import ErrorHandlerMiddleware
from mindease.api.v1.router import api_router
from mindease.config import Settings, get_settings
from mindease.config.logging_config import configure_logging, get_logger
from mindease.infrastructure.metrics import metrics_router, update_system_info
from mindease.services.orchestration.conversation_orchestrator import (
    ConversationOrchestrator,
    create_orchestrator,
)

logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    orchestrator: Optional[ConversationOrchestrator] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings; defaults to get_settings()
        orchestrator: Conversation orchestrator; built from settings if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    orchestrator = orchestrator or create_orchestrator(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        Starts the session reaper on startup and stops it on shutdown.
        """
        logger.info(
            "Starting MindEase application",
            env=settings.env,
            version=__version__,
        )
        update_system_info(settings.env)

        if settings.conversation.reaper_enabled:
            orchestrator.reaper.start()

        try:
            yield
        finally:
            logger.info("Shutting down MindEase application")
            await orchestrator.reaper.stop()
            logger.info("MindEase application shutdown complete")

    app = FastAPI(
        title="MindEase API",
        description="Conversational support assistant - Conversation core API",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "MindEase API",
            "version": __version__,
            "status": "operational",
        }

    return app


def create_app() -> FastAPI:
    """Application factory for `uvicorn --factory`."""
    settings = get_settings()
    configure_logging(settings)
    return create_application(settings)


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "mindease.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=_settings.env == "development",
        log_level=_settings.log_level.lower(),
    )
