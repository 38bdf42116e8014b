from __future__ import annotations

import re
from datetime import date

from .months import month_token_to_int, to_iso_date

# Whole-line numeric header: 3/4/2024, 03-04-24, 3.4.2024
NUMERIC_DATE_RE = re.compile(
    r"(?P<month>\d{1,2})[/\-.](?P<day>\d{1,2})[/\-.](?P<year>\d{4}|\d{2})",
    re.ASCII,
)

# Whole-line month-name header: "March 4, 2024", "Mar 4th 2024", "Sept 9"
# The month is case-insensitive; the ordinal suffix is lowercase only.
MONTH_NAME_DATE_RE = re.compile(
    r"(?P<month>[a-z]{3,9}) (?P<day>\d{1,2})(?-i:st|nd|rd|th)?(?:,? (?P<year>\d{4}))?",
    re.ASCII | re.IGNORECASE,
)

_WS_RE = re.compile(r"\s+")


def normalize_line(line: str) -> str:
    return _WS_RE.sub(" ", line.strip())


def parse_numeric_date(s: str) -> str | None:
    m = NUMERIC_DATE_RE.fullmatch(s)
    if not m:
        return None
    month = int(m.group("month"))
    day = int(m.group("day"))
    year = int(m.group("year"))
    if year < 100:
        year += 2000
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return to_iso_date(year, month, day)


def parse_month_name_date(s: str, default_year: int | None = None) -> str | None:
    m = MONTH_NAME_DATE_RE.fullmatch(s)
    if not m:
        return None
    month = month_token_to_int(m.group("month"))
    day = int(m.group("day"))
    if not month or not (1 <= day <= 31):
        return None
    if m.group("year"):
        year = int(m.group("year"))
    elif default_year is not None:
        year = default_year
    else:
        year = date.today().year
    return to_iso_date(year, month, day)


def resolve_date(line: str, default_year: int | None = None) -> str | None:
    """Return the ISO date if the whole line is a date header, else None.

    Only a line consisting solely of a date expression counts; a date inside
    prose ("On Jan 5 I went...") is ordinary text. Day-of-month is checked
    against 1..31 only, not against the month's real length.
    """

    s = normalize_line(line)
    if not s:
        return None
    return parse_numeric_date(s) or parse_month_name_date(s, default_year)
