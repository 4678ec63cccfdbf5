"""Splitting of multi-value cells (applicant lists, classification codes)."""

from __future__ import annotations

import re

_VALUE_SEPARATORS = re.compile(r"[;,\n]")
_TRAILING_MARK = re.compile(r"[/\-]$")

CLASSIFICATION_PREFIX_LENGTH = 6


def split_values(raw: str | None) -> list[str]:
    """Split a cell on semicolons, commas and newlines, keeping non-empty tokens."""

    if not raw:
        return []
    return [token.strip() for token in _VALUE_SEPARATORS.split(raw) if token.strip()]


def normalize_classification(code: str) -> str:
    """Reduce an FI code to its group prefix, e.g. ``G06F16/30`` -> ``G06F16``."""

    trimmed = code.strip()
    if len(trimmed) <= CLASSIFICATION_PREFIX_LENGTH:
        return trimmed
    return _TRAILING_MARK.sub("", trimmed[:CLASSIFICATION_PREFIX_LENGTH])


def split_classifications(raw: str | None) -> list[str]:
    if not raw:
        return []
    codes = (normalize_classification(token) for token in _VALUE_SEPARATORS.split(raw))
    return [code for code in codes if code]
