from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Optional

Clock = Callable[[], datetime]

_MONTH_YEAR = re.compile(r"^\d{4}-\d{2}$")
_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Services take this as an injectable clock so tests can pass a fixed one.
    """
    return datetime.now()


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def as_date(value: Any) -> Optional[date]:
    """Normalize BSON/driver values (datetime, date, ISO string) to a date."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value type: {type(value)!r}")


def parse_month_year(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month)."""

    v = (value or "").strip()
    if not _MONTH_YEAR.match(v):
        raise ValueError(f"Invalid month/year: {value!r}")
    year, month = int(v[:4]), int(v[5:])
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month/year: {value!r}")
    return year, month


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month (both inclusive)."""

    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def parse_clock_time(value: Any) -> Optional[time]:
    """Parse terminal clock strings such as ``08:58``, ``17:32:10`` or ``5:02 PM``."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value

    m = _CLOCK_TIME.match(str(value).strip())
    if not m:
        raise ValueError(f"Invalid time string: {value!r}")

    hours, minutes = int(m.group(1)), int(m.group(2))
    seconds = int(m.group(3) or 0)
    meridiem = (m.group(4) or "").lower()
    if meridiem == "pm" and hours < 12:
        hours += 12
    elif meridiem == "am" and hours == 12:
        hours = 0
    return time(hour=hours, minute=minutes, second=seconds)
