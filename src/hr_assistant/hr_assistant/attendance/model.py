from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """In-app clock-in/out for one employee on one day."""

    record_id: str
    employee_doc_id: str
    employee_name: str
    date: date
    clock_in_time: Optional[datetime]
    clock_out_time: Optional[datetime]
    work_duration_minutes: Optional[int]
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """One raw row of the terminal feed (``attendance_log``).

    A row may carry a check-in, a check-out, or both.
    """

    user_id: str
    employee_name: Optional[str]
    date: date
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    machine: Optional[str] = None
    event_id: Optional[str] = None


@dataclass(frozen=True)
class DailyAttendance:
    """Earliest check-in and latest check-out observed on one date."""

    date: date
    check_in: Optional[time]
    check_out: Optional[time]
    machine: Optional[str] = None
    valid: bool = True

    @property
    def duration_minutes(self) -> int:
        if not self.valid or self.check_in is None or self.check_out is None:
            return 0
        delta = datetime.combine(self.date, self.check_out) - datetime.combine(self.date, self.check_in)
        return int(delta.total_seconds() // 60)
