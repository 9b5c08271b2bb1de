from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..core.constants import TERMINAL_LOG_BATCH
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .forms import ClockInForm, ClockOutForm, TerminalLogQuery
from .model import AttendanceEvent, AttendanceRecord, DailyAttendance
from .reducer import reduce_daily
from .repository import AttendanceLogRepository, AttendanceRepository


class AttendanceService:
    """In-app clocking plus the daily view of the terminal feed."""

    def __init__(
        self,
        records: AttendanceRepository,
        terminal_log: AttendanceLogRepository,
        employees: EmployeeRepository,
        *,
        clock: Clock = now_local,
    ):
        self._records = records
        self._terminal_log = terminal_log
        self._employees = employees
        self._clock = clock

    def clock_in(self, form: ClockInForm) -> str:
        now = self._clock()
        today = now.date()
        name = form.employee_name

        existing = self._records.get_for_employee_on(form.employee_doc_id, today)
        if existing:
            if existing.clock_out_time is None:
                raise ValidationError(f"{name} is already clocked in today.")
            raise ValidationError(f"{name} has already completed a shift today.")

        return self._records.create_clock_in(
            employee_doc_id=form.employee_doc_id,
            employee_name=name,
            day=today,
            clock_in_time=now,
        )

    def clock_out(self, form: ClockOutForm) -> int:
        """Close the record and return the worked minutes."""

        rec = self._records.get(form.attendance_record_id)
        if not rec or rec.employee_doc_id != form.employee_doc_id:
            raise NotFoundError("Attendance record not found or does not belong to this employee.")
        if rec.clock_in_time is None:
            raise ValidationError("Cannot clock out. No clock-in time recorded.")
        if rec.clock_out_time is not None:
            raise ValidationError(f"{form.employee_name} has already clocked out.")

        now = self._clock()
        minutes = max(0, int((now - rec.clock_in_time).total_seconds() // 60))
        if not self._records.complete(rec.record_id, clock_out_time=now, work_duration_minutes=minutes):
            raise ConflictError(f"{form.employee_name} has already clocked out.")
        return minutes

    def open_record(self, employee_doc_id: str) -> Optional[AttendanceRecord]:
        return self._records.get_open(employee_doc_id, self._clock().date())

    # -------- Terminal feed --------
    def daily_log(self, user_id: str, start: date, end: date) -> list[DailyAttendance]:
        """Per-day earliest check-in / latest check-out for a company employee id."""

        return reduce_daily(self._terminal_log.list_for_user(str(user_id), start, end))

    def employee_daily_log(self, employee_doc_id: str, start: date, end: date) -> list[DailyAttendance]:
        emp = self._employees.get(employee_doc_id)
        if not emp:
            raise NotFoundError("Employee not found.")
        return self.daily_log(emp.employee_id, start, end)

    def terminal_log(self, query: TerminalLogQuery) -> Sequence[AttendanceEvent]:
        return self._terminal_log.list_recent(start=query.start, end=query.end, machine=query.machine, limit=query.limit)

    def iter_terminal_log(self) -> Iterator[AttendanceEvent]:
        return self._terminal_log.iter_all(batch_size=TERMINAL_LOG_BATCH)
