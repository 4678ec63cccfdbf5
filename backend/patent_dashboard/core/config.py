"""Application configuration powered by Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from patent_analysis.pipeline import AnalysisConfig


class AppSettings(BaseSettings):
    """Strongly typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: Literal["dev", "staging", "prod"] = Field(default="dev")
    project_name: str = Field(default="J-PlatPat Patent Dashboard API")
    version: str = Field(default="0.1.0")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    cors_allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    wordcloud_enabled: bool = Field(default=True)
    wordcloud_url: str = Field(default="http://127.0.0.1:8000/generate-wordcloud")
    wordcloud_timeout: float | None = Field(default=None, gt=0)

    top_n: int = Field(default=10, ge=1, le=100)
    timeline_top_n: int = Field(default=5, ge=1, le=20)
    label_wrap_width: int = Field(default=25, ge=5)
    share_label_wrap_width: int = Field(default=15, ge=5)

    dashboard_max_sessions: int = Field(default=256, ge=1)

    def analysis_config(self) -> AnalysisConfig:
        return AnalysisConfig(
            top_n=self.top_n,
            timeline_top_n=self.timeline_top_n,
            label_wrap_width=self.label_wrap_width,
            share_label_wrap_width=self.share_label_wrap_width,
        )


@lru_cache
def get_settings() -> AppSettings:
    """Provide a cached singleton settings instance."""

    return AppSettings()
