"""Split one block of OCR text into per-day diary segments.

A line that consists solely of a date expression (see ``resolve_date``) is a
date header: it closes the segment being built and opens a new one, and stays
in the new segment as its first line. Everything else, blank lines included,
belongs to the segment currently open. Text before the first header is dated
with the caller's fallback date (or left undated).

One pass finds the headers, a second slices the lines between them, so the
work is linear in the input and every call is independent.
"""

from __future__ import annotations

import re

from .date.parsers import resolve_date
from .date.types import Segment

LINE_BREAK_RE = re.compile(r"\r?\n")
FALLBACK_YEAR_RE = re.compile(r"(\d{4})-", re.ASCII)


def default_year_from(fallback_date: str | None) -> int | None:
    """Year used for month-name headers without one, taken from a YYYY-... fallback."""
    if not fallback_date:
        return None
    m = FALLBACK_YEAR_RE.match(fallback_date)
    return int(m.group(1)) if m else None


def split_lines(raw_text: str) -> list[str]:
    """Split on \\n or \\r\\n and drop trailing whitespace; leading indentation is kept."""
    return [ln.rstrip() for ln in LINE_BREAK_RE.split(raw_text)]


def find_headers(lines: list[str], default_year: int | None = None) -> list[tuple[int, str]]:
    """Return (line number, ISO date) for every date header line."""
    out: list[tuple[int, str]] = []
    for i, ln in enumerate(lines):
        if not ln:
            continue
        d = resolve_date(ln, default_year)
        if d:
            out.append((i, d))
    return out


def segment_diary_text(raw_text: str | None, fallback_date: str | None = None) -> list[Segment]:
    """Partition OCR text into ordered, dated segments.

    Never raises: malformed date-like lines are ordinary text, and empty or
    whitespace-only input yields an empty list.
    """

    raw_text = raw_text or ""
    fallback_date = fallback_date or None

    lines = split_lines(raw_text)
    headers = find_headers(lines, default_year_from(fallback_date))

    # Each span runs from its opening line (0 for the text before any header)
    # up to the next header.
    starts = [(0, fallback_date)] + headers
    ends = [i for i, _ in headers] + [len(lines)]

    segments: list[Segment] = []
    for (start, d), end in zip(starts, ends):
        text = "\n".join(lines[start:end]).strip()
        if not text:
            continue
        segments.append(Segment(index=len(segments), date=d, text=text))

    # Non-blank input always yields at least one segment.
    if not segments and raw_text.strip():
        return [Segment(index=0, date=fallback_date, text=raw_text.strip())]

    return segments
