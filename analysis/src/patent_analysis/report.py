"""Chart-ready projections of an :class:`AnalysisResult`."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .aggregate import AnalysisResult
from .utils.text import wrap_label


class RankedEntry(BaseModel):
    """A top-N bar: ``name`` is the wrapped axis label, ``original_name`` the key."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    original_name: str = Field(alias="originalName")
    value: int


class ShareEntry(RankedEntry):
    percent: float
    label: str


class YearPoint(BaseModel):
    year: int
    count: int


class TimelinePoint(BaseModel):
    year: int
    values: dict[str, int] = Field(default_factory=dict)


class Timeline(BaseModel):
    series: list[RankedEntry] = Field(default_factory=list)
    points: list[TimelinePoint] = Field(default_factory=list)


class ReportSummary(BaseModel):
    total_records: int
    period: str | None = None
    company_count: int | None = None
    classification_count: int | None = None


class DashboardReport(BaseModel):
    summary: ReportSummary
    year_trend: list[YearPoint] = Field(default_factory=list)
    leading_companies: list[RankedEntry] = Field(default_factory=list)
    all_companies: list[RankedEntry] = Field(default_factory=list)
    leading_company_share: list[ShareEntry] = Field(default_factory=list)
    leading_fis: list[RankedEntry] = Field(default_factory=list)
    all_fis: list[RankedEntry] = Field(default_factory=list)
    company_timeline: Timeline = Field(default_factory=Timeline)
    fi_timeline: Timeline = Field(default_factory=Timeline)


def top_n(counts: Mapping[str, int], n: int = 10, *, wrap_width: int = 25) -> list[RankedEntry]:
    """Return the ``n`` largest counts, descending.

    Ties keep the mapping's insertion order, which the aggregator fills in the
    order entities are first seen in the file.
    """

    ordered = sorted(counts.items(), key=lambda item: -item[1])
    return [
        RankedEntry(name=wrap_label(name, wrap_width), original_name=name, value=value)
        for name, value in ordered[:n]
    ]


def year_series(year_counts: Mapping[int, int]) -> list[YearPoint]:
    ordered = sorted(year_counts.items(), key=lambda item: int(item[0]))
    return [YearPoint(year=int(year), count=count) for year, count in ordered]


def project_time_series(
    year_analysis: Mapping[str, Mapping[int, int]],
    top_entries: Sequence[RankedEntry],
) -> list[TimelinePoint]:
    """Zero-filled per-year counts for ``top_entries`` over every year seen in ``year_analysis``."""

    years = sorted({int(year) for per_year in year_analysis.values() for year in per_year})
    points: list[TimelinePoint] = []
    for year in years:
        values: dict[str, int] = {}
        for entry in top_entries:
            values[entry.original_name] = year_analysis.get(entry.original_name, {}).get(year, 0)
        points.append(TimelinePoint(year=year, values=values))
    return points


def share_of(entries: Sequence[RankedEntry], *, wrap_width: int = 15) -> list[ShareEntry]:
    total = sum(entry.value for entry in entries)
    shares: list[ShareEntry] = []
    for entry in entries:
        percent = round(entry.value * 100 / total, 1) if total else 0.0
        shares.append(
            ShareEntry(
                name=entry.name,
                original_name=entry.original_name,
                value=entry.value,
                percent=percent,
                label=f"{wrap_label(entry.original_name, wrap_width)} {percent:.1f}%",
            )
        )
    return shares


def summarize(result: AnalysisResult) -> ReportSummary:
    period = None
    if result.year_counts:
        period = f"{min(result.year_counts)} - {max(result.year_counts)}"

    return ReportSummary(
        total_records=result.record_count,
        period=period,
        company_count=len(result.all_companies) if result.has_applicant_data else None,
        classification_count=len(result.all_fis) if result.has_fi_data else None,
    )


def build_report(
    result: AnalysisResult,
    *,
    top: int = 10,
    timeline_top: int = 5,
    wrap_width: int = 25,
    share_wrap_width: int = 15,
) -> DashboardReport:
    report = DashboardReport(summary=summarize(result), year_trend=year_series(result.year_counts))

    if result.has_applicant_data:
        leading = top_n(result.leading_companies, top, wrap_width=wrap_width)
        report.leading_companies = leading
        report.all_companies = top_n(result.all_companies, top, wrap_width=wrap_width)
        report.leading_company_share = share_of(leading, wrap_width=share_wrap_width)
        series = top_n(result.all_companies, timeline_top, wrap_width=wrap_width)
        report.company_timeline = Timeline(
            series=series,
            points=project_time_series(result.company_year_analysis, series),
        )

    if result.has_fi_data:
        report.leading_fis = top_n(result.leading_fis, top, wrap_width=wrap_width)
        report.all_fis = top_n(result.all_fis, top, wrap_width=wrap_width)
        series = top_n(result.all_fis, timeline_top, wrap_width=wrap_width)
        report.fi_timeline = Timeline(
            series=series,
            points=project_time_series(result.fi_year_analysis, series),
        )

    return report
