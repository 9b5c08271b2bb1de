from __future__ import annotations

from datetime import date

from ..common.datetime_utils import iter_days
from ..settings.model import WorkCalendar


def count_working_days(start: date, end: date, calendar: WorkCalendar) -> int:
    """Days in ``[start, end]`` that are neither weekend days nor holidays."""

    if end < start:
        return 0
    return sum(1 for d in iter_days(start, end) if calendar.is_working_day(d))
