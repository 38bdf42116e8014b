from __future__ import annotations

from types import MappingProxyType

# Lowercase English month names and the abbreviations we accept in date headers.
MONTHS = MappingProxyType(
    {
        "january": 1,
        "jan": 1,
        "february": 2,
        "feb": 2,
        "march": 3,
        "mar": 3,
        "april": 4,
        "apr": 4,
        "may": 5,
        "june": 6,
        "jun": 6,
        "july": 7,
        "jul": 7,
        "august": 8,
        "aug": 8,
        "september": 9,
        "sep": 9,
        "sept": 9,
        "october": 10,
        "oct": 10,
        "november": 11,
        "nov": 11,
        "december": 12,
        "dec": 12,
    }
)


def month_token_to_int(tok: str) -> int | None:
    return MONTHS.get(tok.strip().lower())


def to_iso_date(year: int, month: int, day: int) -> str:
    """Format as YYYY-MM-DD without calendar validation (2024-02-31 is allowed)."""
    return f"{year:04d}-{month:02d}-{day:02d}"
