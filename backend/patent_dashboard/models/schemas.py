"""Pydantic schemas for dashboard API payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from patent_analysis.aggregate import AnalysisResult
from patent_analysis.report import DashboardReport

from ..services.dashboard import DashboardState


class AnalysisResponse(BaseModel):
    file_name: str = Field(..., description="Name of the uploaded file.")
    sha256: str = Field(..., description="Fingerprint of the uploaded bytes.")
    result: AnalysisResult
    report: DashboardReport


class WordCloudResponse(BaseModel):
    success: bool
    image: str = Field(..., description="Rendered word cloud as a data URI.")


class WordCloudStatus(BaseModel):
    loading: bool = False
    image: str | None = None
    error: str | None = None


class DashboardStateResponse(BaseModel):
    session_id: str
    generation: int
    file_name: str | None = None
    file_sha256: str | None = None
    loading: bool = False
    error: str | None = None
    analysis: AnalysisResult | None = None
    report: DashboardReport | None = None
    wordcloud: WordCloudStatus = Field(default_factory=WordCloudStatus)

    @classmethod
    def from_state(cls, session_id: str, state: DashboardState) -> "DashboardStateResponse":
        return cls(
            session_id=session_id,
            generation=state.generation,
            file_name=state.file_name,
            file_sha256=state.file_sha256,
            loading=state.loading,
            error=state.error,
            analysis=state.analysis,
            report=state.report,
            wordcloud=WordCloudStatus(
                loading=state.wordcloud_loading,
                image=state.wordcloud_image,
                error=state.wordcloud_error,
            ),
        )
