from __future__ import annotations

from datetime import date, datetime
from typing import Iterator, Optional, Protocol, Sequence

from .model import AttendanceEvent, AttendanceRecord


class AttendanceRepository(Protocol):
    """In-app clock records (``attendanceRecords``)."""

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_on(self, employee_doc_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open(self, employee_doc_id: str, day: date) -> Optional[AttendanceRecord]:
        """Record of ``day`` that has a clock-in but no clock-out yet."""

        raise NotImplementedError

    def create_clock_in(self, *, employee_doc_id: str, employee_name: str, day: date, clock_in_time: datetime) -> str:
        raise NotImplementedError

    def complete(self, record_id: str, *, clock_out_time: datetime, work_duration_minutes: int) -> bool:
        """Set the clock-out only if none is stored yet; False otherwise."""

        raise NotImplementedError

    def list_completed(self, employee_doc_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError


class AttendanceLogRepository(Protocol):
    """Raw terminal feed (``attendance_log``)."""

    def list_for_user(self, user_id: str, start: date, end: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_recent(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        machine: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def iter_all(self, *, batch_size: int = 5000) -> Iterator[AttendanceEvent]:
        raise NotImplementedError

    def distinct_values(self, field: str) -> Sequence[str]:
        raise NotImplementedError
