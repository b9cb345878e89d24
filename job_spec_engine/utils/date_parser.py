"""Parse profile dates and compute month durations. Malformed input yields None, never an error."""

import re
from datetime import date, datetime
from typing import Optional

# YYYY-MM-DD, YYYY-MM or a full ISO timestamp (date part is used)
_ISO_DATE = re.compile(r"^\s*(\d{4})-(\d{1,2})(?:-(\d{1,2}))?(?:[T ].*)?\s*$")


def parse_iso_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse an ISO-style date string. Accepts "2024-03-15", "2024-03" and
    "2024-03-15T10:00:00Z". Returns None for empty, malformed or impossible dates.
    """
    if not raw or not isinstance(raw, str):
        return None
    m = _ISO_DATE.match(raw)
    if not m:
        return None
    year, month = int(m.group(1)), int(m.group(2))
    day = int(m.group(3)) if m.group(3) else 1
    try:
        return date(year, month, day)
    except ValueError:
        return None


def compute_duration_months(
    start_date: Optional[str],
    end_date: Optional[str],
    reference_date: date,
) -> Optional[int]:
    """
    Whole months between start and end: (years * 12) + month delta, minimum 1.
    A null end_date means a current position and uses reference_date.
    Returns None when start is missing/unparseable, end is unparseable,
    or end precedes start.
    """
    start = parse_iso_date(start_date)
    if start is None:
        return None
    if end_date is None:
        end = reference_date
    else:
        end = parse_iso_date(end_date)
        if end is None:
            return None
    if end < start:
        return None
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(1, months)


def extract_year(raw: Optional[str]) -> Optional[int]:
    """Year of an ISO date string, or None."""
    parsed = parse_iso_date(raw)
    return parsed.year if parsed else None


def to_reference_date(value: Optional[object]) -> date:
    """Coerce a datetime/date/None into the date used for open-ended durations."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"reference_date must be a date or datetime, got {type(value).__name__}")
