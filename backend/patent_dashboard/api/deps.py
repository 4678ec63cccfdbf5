"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends, Request, UploadFile

from patent_analysis.errors import UnsupportedFileTypeError
from patent_analysis.pipeline import AnalysisPipeline

from ..core.config import AppSettings
from ..services.dashboard import DashboardStore
from ..services.wordcloud import WordCloudClient

CSV_CONTENT_TYPES = frozenset({"text/csv", "application/csv"})


def get_app_settings(request: Request) -> AppSettings:
    """Expose the settings the application was built with."""

    return request.app.state.settings


def get_pipeline(settings: AppSettings = Depends(get_app_settings)) -> AnalysisPipeline:
    return AnalysisPipeline(config=settings.analysis_config())


def get_wordcloud_client(request: Request) -> WordCloudClient:
    return request.app.state.wordcloud_client


def get_dashboard_store(request: Request) -> DashboardStore:
    return request.app.state.dashboard_store


def validate_upload(file: UploadFile) -> str:
    """Accept ``.csv`` files or ``text/csv`` uploads; return the file name."""

    file_name = file.filename or "upload.csv"
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if not file_name.lower().endswith(".csv") and content_type not in CSV_CONTENT_TYPES:
        raise UnsupportedFileTypeError()
    return file_name
