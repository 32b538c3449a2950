"""Calendar helpers: day ranges, date-keys, week numbering."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def _as_date(d: date) -> date:
    # datetime is a date subclass; keep its local calendar day, no tz shift
    return d.date() if isinstance(d, datetime) else d


def date_key(d: date) -> str:
    """Canonical YYYY-MM-DD key for a calendar day."""
    return _as_date(d).isoformat()


def parse_date_key(key: str) -> date | None:
    """Parse a YYYY-MM-DD key, returning None if malformed.

    Only the canonical form is accepted; compact (20240601) and ISO week
    (2024-W23-6) spellings are rejected so each day has a single key.
    """
    key = str(key)
    try:
        d = date.fromisoformat(key)
    except ValueError:
        return None
    return d if d.isoformat() == key else None


def month_key(d: date) -> str:
    return _as_date(d).strftime("%Y-%m")


def parse_month(text: str) -> date:
    """Parse 'YYYY-MM' (or a full date-key) into the first day of that month.

    Raises ValueError on malformed input.
    """
    text = str(text).strip()
    if len(text) == 7:
        text += "-01"
    return date.fromisoformat(text).replace(day=1)


def days_in_month(reference: date) -> list[date]:
    """Every day of the reference's month, ascending."""
    ref = _as_date(reference)
    last = calendar.monthrange(ref.year, ref.month)[1]
    return [date(ref.year, ref.month, day) for day in range(1, last + 1)]


def days_in_year(year: int) -> list[date]:
    """Every day of the year, ascending (365 or 366 entries)."""
    start = date(year, 1, 1)
    # stop at Dec 31; Jan 1 of year + 1 does not exist for date.max.year
    count = (date(year, 12, 31) - start).days + 1
    return [start + timedelta(days=i) for i in range(count)]


def weekday_index(d: date) -> int:
    """Sunday=0 .. Saturday=6."""
    return (_as_date(d).weekday() + 1) % 7


def week_number(d: date) -> int:
    """Week of year with weeks starting on Sunday; week 1 contains Jan 1.

    Days at the end of December stay in their own year (week 53 at most).
    """
    d = _as_date(d)
    jan1 = date(d.year, 1, 1)
    offset = weekday_index(jan1)
    return (d.timetuple().tm_yday - 1 + offset) // 7 + 1


def is_same_calendar_day(a: date, b: date) -> bool:
    return date_key(a) == date_key(b)
