"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .core.config import AppSettings, get_settings
from .core.logging import get_logger, setup_logging
from .services.dashboard import DashboardStore
from .services.wordcloud import build_wordcloud_client

logger = get_logger(__name__)


def _lifespan(settings: AppSettings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Lifecycle hooks for startup and shutdown."""

        setup_logging(settings.log_level, json_output=settings.environment != "dev")

        logger.info(
            "application.startup",
            environment=settings.environment,
            version=settings.version,
            wordcloud_enabled=settings.wordcloud_enabled,
            wordcloud_url=settings.wordcloud_url,
        )

        try:
            yield
        finally:
            app.state.wordcloud_client.close()
            logger.info("application.shutdown", sessions=len(app.state.dashboard_store))

    return lifespan


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Construct the FastAPI application instance."""

    settings = settings or get_settings()

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=_lifespan(settings),
    )
    application.state.settings = settings
    application.state.dashboard_store = DashboardStore(max_sessions=settings.dashboard_max_sessions)
    application.state.wordcloud_client = build_wordcloud_client(settings)

    if settings.cors_allowed_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    application.include_router(api_router, prefix="/v1")

    @application.get("/", tags=["meta"], summary="Service metadata")
    async def root() -> dict[str, str]:
        """Service metadata root endpoint."""

        return {"service": settings.project_name, "version": settings.version}

    return application


app = create_app()
