"""Patent export analysis toolkit."""

from .aggregate import AnalysisResult, Row, aggregate, build_rows
from .columns import ColumnRoles, ResolvedColumn, resolve_columns
from .errors import (
    AnalysisError,
    EmptyFileError,
    MissingDateColumnError,
    PatentAnalysisError,
    UnsupportedFileTypeError,
)
from .pipeline import AnalysisConfig, AnalysisOutcome, AnalysisPipeline, analyze_table
from .report import DashboardReport, RankedEntry, build_report, project_time_series, top_n

__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisOutcome",
    "AnalysisPipeline",
    "AnalysisResult",
    "ColumnRoles",
    "DashboardReport",
    "EmptyFileError",
    "MissingDateColumnError",
    "PatentAnalysisError",
    "RankedEntry",
    "ResolvedColumn",
    "Row",
    "UnsupportedFileTypeError",
    "aggregate",
    "analyze_table",
    "build_report",
    "build_rows",
    "project_time_series",
    "resolve_columns",
    "top_n",
]
