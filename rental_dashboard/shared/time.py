from __future__ import annotations

import re
from datetime import date, timedelta
from typing import List, Optional

from rental_dashboard.core.errors import FormatError

# Reactive window offered by the date-range filter.
DATE_MIN = "2025-12-01"
DATE_MAX = "2026-01-04"

# Fixed calendar month shown by the month view, independent of the range filter.
MONTH_MIN = "2025-12-01"
MONTH_MAX = "2025-12-31"

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(value: str) -> date:
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise FormatError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise FormatError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def clamp_date(
    value: Optional[str], lower: str, upper: str, default: Optional[str] = None
) -> str:
    """Snap an ISO date string into ``[lower, upper]``.

    Missing input yields ``default`` (``lower`` when no default is given), so
    a start bound defaults low while an end bound passes ``default=upper``.
    ISO strings compare chronologically, so no parsing is needed here.
    """
    if not value:
        return default if default is not None else lower
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def enumerate_days(start: str, end: str) -> List[str]:
    first = parse_date(start)
    last = parse_date(end)
    days: List[str] = []
    current = first
    while current <= last:
        days.append(format_date(current))
        current += timedelta(days=1)
    return days


def day_count(start: str, end: str) -> int:
    delta = (parse_date(end) - parse_date(start)).days + 1
    return max(delta, 0)
