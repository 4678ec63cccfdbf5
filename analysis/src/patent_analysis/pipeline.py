"""High-level analysis workflow: CSV bytes -> aggregates -> chart report."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .aggregate import AnalysisResult, aggregate, build_rows
from .columns import resolve_columns
from .errors import AnalysisError, EmptyFileError, PatentAnalysisError
from .reader import DEFAULT_ENCODINGS, read_csv_table
from .report import DashboardReport, build_report
from .utils.files import compute_sha256

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AnalysisConfig:
    top_n: int = 10
    timeline_top_n: int = 5
    label_wrap_width: int = 25
    share_label_wrap_width: int = 15
    encodings: tuple[str, ...] = DEFAULT_ENCODINGS


@dataclass(slots=True)
class AnalysisOutcome:
    file_name: str
    sha256: str
    result: AnalysisResult
    report: DashboardReport


def analyze_table(headers: Sequence[str], raw_rows: Sequence[Sequence[str]]) -> AnalysisResult:
    """Aggregate already-tokenized rows.

    Raises:
        EmptyFileError: there are no data rows below the header.
        MissingDateColumnError: no header looks like an application date.
        AnalysisError: anything else went wrong while aggregating.
    """

    if not raw_rows:
        raise EmptyFileError()

    roles = resolve_columns(headers)
    logger.debug("analysis.columns.resolved columns=%s", roles.as_headers())

    try:
        rows = build_rows(raw_rows, roles)
        return aggregate(rows, roles)
    except PatentAnalysisError:
        raise
    except Exception as exc:  # noqa: BLE001 - surfaced to the uploader with a generic prefix
        logger.exception("analysis.aggregate.failed")
        raise AnalysisError(str(exc)) from exc


@dataclass(slots=True)
class AnalysisPipeline:
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    def analyze(self, content: bytes) -> AnalysisResult:
        table = read_csv_table(content, encodings=self.config.encodings)
        return analyze_table(table.headers, table.rows)

    def report(self, result: AnalysisResult) -> DashboardReport:
        return build_report(
            result,
            top=self.config.top_n,
            timeline_top=self.config.timeline_top_n,
            wrap_width=self.config.label_wrap_width,
            share_wrap_width=self.config.share_label_wrap_width,
        )

    def run(self, content: bytes, *, file_name: str) -> AnalysisOutcome:
        result = self.analyze(content)
        report = self.report(result)

        logger.info(
            "analysis.completed file=%s records=%s years=%s companies=%s classifications=%s",
            file_name,
            result.record_count,
            len(result.year_counts),
            len(result.all_companies),
            len(result.all_fis),
        )

        return AnalysisOutcome(
            file_name=file_name,
            sha256=compute_sha256(content),
            result=result,
            report=report,
        )
