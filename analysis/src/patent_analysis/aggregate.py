"""Single-pass aggregation of patent rows into dashboard statistics."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .columns import ColumnRoles, ResolvedColumn
from .dates import extract_year
from .fields import split_classifications, split_values


@dataclass(frozen=True, slots=True)
class Row:
    """One data line of the export, addressed by column position."""

    values: tuple[str, ...]
    year: int | None = None

    def cell(self, column: ResolvedColumn | None) -> str:
        if column is None or column.index >= len(self.values):
            return ""
        return self.values[column.index]


class AnalysisResult(BaseModel):
    """Aggregates for one upload. Serialises with the dashboard's camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_count: int = Field(default=0, alias="recordCount")
    columns: dict[str, str | None] = Field(default_factory=dict)
    year_counts: dict[int, int] = Field(default_factory=dict, alias="yearCounts")
    leading_companies: dict[str, int] = Field(default_factory=dict, alias="leadingCompanies")
    all_companies: dict[str, int] = Field(default_factory=dict, alias="allCompanies")
    leading_fis: dict[str, int] = Field(default_factory=dict, alias="leadingFIs")
    all_fis: dict[str, int] = Field(default_factory=dict, alias="allFIs")
    company_year_analysis: dict[str, dict[int, int]] = Field(
        default_factory=dict, alias="companyYearAnalysis"
    )
    fi_year_analysis: dict[str, dict[int, int]] = Field(default_factory=dict, alias="fiYearAnalysis")
    has_applicant_data: bool = Field(default=False, alias="hasApplicantData")
    has_fi_data: bool = Field(default=False, alias="hasFIData")


def build_rows(raw_rows: Iterable[Sequence[str]], roles: ColumnRoles) -> list[Row]:
    """Re-key tokenized lines and attach the application year.

    Lines without an application date are dropped entirely.
    """

    rows: list[Row] = []
    for raw in raw_rows:
        values = tuple("" if value is None else str(value) for value in raw)
        row = Row(values=values)
        date_text = row.cell(roles.date)
        if not date_text:
            continue
        rows.append(Row(values=values, year=extract_year(date_text)))
    return rows


@dataclass(slots=True)
class _EntityTally:
    leading: Counter
    every: Counter
    by_year: defaultdict

    @classmethod
    def empty(cls) -> "_EntityTally":
        return cls(leading=Counter(), every=Counter(), by_year=defaultdict(Counter))

    def add(self, tokens: list[str], year: int | None) -> None:
        if not tokens:
            return
        self.leading[tokens[0]] += 1
        for token in tokens:
            self.every[token] += 1
            if year is not None:
                self.by_year[token][year] += 1

    def year_table(self) -> dict[str, dict[int, int]]:
        return {entity: dict(years) for entity, years in self.by_year.items()}


def aggregate(rows: Iterable[Row], roles: ColumnRoles) -> AnalysisResult:
    year_counts: Counter = Counter()
    companies = _EntityTally.empty()
    classifications = _EntityTally.empty()
    record_count = 0

    for row in rows:
        record_count += 1
        if row.year is not None:
            year_counts[row.year] += 1
        if roles.applicant is not None:
            companies.add(split_values(row.cell(roles.applicant)), row.year)
        if roles.classification is not None:
            classifications.add(split_classifications(row.cell(roles.classification)), row.year)

    return AnalysisResult(
        record_count=record_count,
        columns=roles.as_headers(),
        year_counts=dict(year_counts),
        leading_companies=dict(companies.leading),
        all_companies=dict(companies.every),
        leading_fis=dict(classifications.leading),
        all_fis=dict(classifications.every),
        company_year_analysis=companies.year_table(),
        fi_year_analysis=classifications.year_table(),
        has_applicant_data=roles.applicant is not None,
        has_fi_data=roles.classification is not None,
    )
