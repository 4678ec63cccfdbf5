"""Label wrapping for chart axes.

Applicant names in J-PlatPat exports are long, so axis labels are broken into
lines of at most ``width`` characters. Words are separated by whitespace, ``-``,
``/`` or ``・`` and re-joined with a single space; a word longer than the
width is hard-split.
"""

from __future__ import annotations

import re

_WORD_BREAKS = re.compile(r"[\s\-/・]")


def wrap_label(text: str, width: int = 20) -> str:
    if not text or len(text) <= width:
        return text

    lines: list[str] = []
    current = ""

    for word in _WORD_BREAKS.split(text):
        if len(current + word) <= width:
            current = f"{current} {word}" if current else word
            continue

        if current:
            lines.append(current)
            current = word
            continue

        while len(word) > width:
            lines.append(word[:width])
            word = word[width:]
        current = word

    if current:
        lines.append(current)

    return "\n".join(lines)
