"""Resolve the semantic columns of a J-PlatPat export from its header row."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import MissingDateColumnError

DATE_PATTERNS: tuple[str, ...] = ("出願日", "Application Date", "出願年月日")
APPLICANT_PATTERNS: tuple[str, ...] = ("出願人", "Applicant", "権利者")
CLASSIFICATION_PATTERNS: tuple[str, ...] = ("FI", "F-term", "分類")


@dataclass(frozen=True, slots=True)
class ResolvedColumn:
    index: int
    header: str


@dataclass(frozen=True, slots=True)
class ColumnRoles:
    """Column positions for the fields the aggregator reads."""

    date: ResolvedColumn
    applicant: ResolvedColumn | None = None
    classification: ResolvedColumn | None = None

    def as_headers(self) -> dict[str, str | None]:
        return {
            "date": self.date.header,
            "applicant": self.applicant.header if self.applicant else None,
            "classification": self.classification.header if self.classification else None,
        }


def find_column(headers: Sequence[str], patterns: Sequence[str]) -> ResolvedColumn | None:
    """Return the first header containing any of ``patterns`` (case-sensitive)."""

    for index, header in enumerate(headers):
        text = str(header)
        if any(pattern in text for pattern in patterns):
            return ResolvedColumn(index=index, header=text)
    return None


def resolve_columns(headers: Sequence[str]) -> ColumnRoles:
    date_column = find_column(headers, DATE_PATTERNS)
    if date_column is None:
        raise MissingDateColumnError()

    return ColumnRoles(
        date=date_column,
        applicant=find_column(headers, APPLICANT_PATTERNS),
        classification=find_column(headers, CLASSIFICATION_PATTERNS),
    )
