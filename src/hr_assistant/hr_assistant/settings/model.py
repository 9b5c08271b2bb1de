from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    holiday_id: str
    name: str
    date: date
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ListItem:
    """One entry of an organisation reference list (roles, campuses, ...)."""

    item_id: str
    name: str


@dataclass(frozen=True)
class WorkCalendar:
    """Weekend days (0 = Sunday) plus holiday dates, used to count working days."""

    weekend_days: frozenset[int]
    holidays: frozenset[date]

    def is_working_day(self, d: date) -> bool:
        # date.weekday(): Monday = 0; stored settings use Sunday = 0
        return (d.weekday() + 1) % 7 not in self.weekend_days and d not in self.holidays
