"""Application date parsing.

J-PlatPat exports write dates as ``YYYY/MM/DD``, ``YYYY-MM-DD`` or the compact
``YYYYMMDD``. Anything else gets a single ISO 8601 attempt. Unparseable values
yield ``None`` so the row simply drops out of the per-year aggregates.
"""

from __future__ import annotations

import re
from datetime import date, datetime

_COMPACT_DATE = re.compile(r"^\d{8}$")
_TIME_SUFFIX = re.compile(r"[T\s].*$")


def parse_application_date(raw: str | None) -> date | None:
    value = (raw or "").strip()
    if not value:
        return None

    head = _TIME_SUFFIX.sub("", value)

    try:
        if "/" in head:
            return datetime.strptime(head, "%Y/%m/%d").date()
        if "-" in head:
            return datetime.strptime(head, "%Y-%m-%d").date()
        if _COMPACT_DATE.match(head):
            return datetime.strptime(head, "%Y%m%d").date()
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def extract_year(raw: str | None) -> int | None:
    parsed = parse_application_date(raw)
    return parsed.year if parsed is not None else None
