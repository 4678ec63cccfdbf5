"""API routers for the dashboard service."""

from fastapi import APIRouter

from .routes import health_router
from .v1 import analysis, dashboard, wordcloud

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(analysis.router, prefix="", tags=["analysis"])
api_router.include_router(wordcloud.router, prefix="", tags=["wordcloud"])
api_router.include_router(dashboard.router, prefix="", tags=["dashboard"])

__all__ = ["api_router"]
