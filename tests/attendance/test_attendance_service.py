from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.hr_assistant.hr_assistant.attendance.forms import ClockInForm, ClockOutForm
from src.hr_assistant.hr_assistant.attendance.model import AttendanceEvent, AttendanceRecord
from src.hr_assistant.hr_assistant.attendance.service import AttendanceService
from src.hr_assistant.hr_assistant.core.enums import AttendanceStatus
from src.hr_assistant.hr_assistant.core.exceptions import NotFoundError, ValidationError
from src.hr_assistant.hr_assistant.employees.model import Employee


class FakeRecordsRepo:
    def __init__(self):
        self._rows: dict[str, AttendanceRecord] = {}

    def get(self, record_id):
        return self._rows.get(record_id)

    def get_for_employee_on(self, employee_doc_id, day):
        for r in self._rows.values():
            if r.employee_doc_id == employee_doc_id and r.date == day:
                return r
        return None

    def get_open(self, employee_doc_id, day):
        r = self.get_for_employee_on(employee_doc_id, day)
        return r if r and r.clock_out_time is None else None

    def create_clock_in(self, *, employee_doc_id, employee_name, day, clock_in_time):
        rid = f"r{len(self._rows) + 1}"
        self._rows[rid] = AttendanceRecord(
            record_id=rid,
            employee_doc_id=employee_doc_id,
            employee_name=employee_name,
            date=day,
            clock_in_time=clock_in_time,
            clock_out_time=None,
            work_duration_minutes=None,
            status=AttendanceStatus.CLOCKED_IN,
        )
        return rid

    def complete(self, record_id, *, clock_out_time, work_duration_minutes):
        r = self._rows[record_id]
        if r.clock_out_time is not None:
            return False
        self._rows[record_id] = AttendanceRecord(
            record_id=r.record_id,
            employee_doc_id=r.employee_doc_id,
            employee_name=r.employee_name,
            date=r.date,
            clock_in_time=r.clock_in_time,
            clock_out_time=clock_out_time,
            work_duration_minutes=work_duration_minutes,
            status=AttendanceStatus.COMPLETED,
        )
        return True


class FakeTerminalLog:
    def __init__(self, events):
        self.events = events
        self.last_user_id = None

    def list_for_user(self, user_id, start, end):
        self.last_user_id = user_id
        return [e for e in self.events if e.user_id == user_id and start <= e.date <= end]


class FakeEmployees:
    def __init__(self, *employees):
        self._by_id = {e.doc_id: e for e in employees}

    def get(self, doc_id):
        return self._by_id.get(doc_id)


class MovingClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _service(clock, events=()):
    emp = Employee(doc_id="e1", employee_id="1001", name="Sara Ali", email="sara@example.com")
    return AttendanceService(FakeRecordsRepo(), FakeTerminalLog(list(events)), FakeEmployees(emp), clock=clock)


def test_clock_in_then_out_stores_minutes():
    clock = MovingClock(datetime(2024, 6, 20, 8, 0))
    svc = _service(clock)

    rid = svc.clock_in(ClockInForm(employeeDocId="e1", employeeName="Sara Ali"))
    assert svc.open_record("e1").record_id == rid

    clock.now = datetime(2024, 6, 20, 16, 45, 30)
    minutes = svc.clock_out(ClockOutForm(attendanceRecordId=rid, employeeDocId="e1", employeeName="Sara Ali"))

    assert minutes == 8 * 60 + 45
    assert svc.open_record("e1") is None


def test_second_clock_in_same_day_is_rejected():
    clock = MovingClock(datetime(2024, 6, 20, 8, 0))
    svc = _service(clock)
    form = ClockInForm(employeeDocId="e1", employeeName="Sara Ali")
    rid = svc.clock_in(form)

    with pytest.raises(ValidationError, match="already clocked in"):
        svc.clock_in(form)

    svc.clock_out(ClockOutForm(attendanceRecordId=rid, employeeDocId="e1", employeeName="Sara Ali"))
    with pytest.raises(ValidationError, match="already completed"):
        svc.clock_in(form)


def test_clock_out_of_someone_elses_record_is_not_found():
    clock = MovingClock(datetime(2024, 6, 20, 8, 0))
    svc = _service(clock)
    rid = svc.clock_in(ClockInForm(employeeDocId="e1", employeeName="Sara Ali"))

    with pytest.raises(NotFoundError):
        svc.clock_out(ClockOutForm(attendanceRecordId=rid, employeeDocId="e2", employeeName="Other"))


def test_clock_out_twice_is_rejected():
    clock = MovingClock(datetime(2024, 6, 20, 8, 0))
    svc = _service(clock)
    rid = svc.clock_in(ClockInForm(employeeDocId="e1", employeeName="Sara Ali"))
    form = ClockOutForm(attendanceRecordId=rid, employeeDocId="e1", employeeName="Sara Ali")
    svc.clock_out(form)

    with pytest.raises(ValidationError, match="already clocked out"):
        svc.clock_out(form)


def test_employee_daily_log_uses_company_id():
    events = [
        AttendanceEvent(user_id="1001", employee_name="Sara", date=date(2024, 6, 3), check_in=time(8, 58)),
        AttendanceEvent(user_id="1001", employee_name="Sara", date=date(2024, 6, 3), check_out=time(17, 32)),
        AttendanceEvent(user_id="2002", employee_name="Other", date=date(2024, 6, 3), check_in=time(7, 0)),
    ]
    svc = _service(MovingClock(datetime(2024, 6, 20, 8, 0)), events)

    [day] = svc.employee_daily_log("e1", date(2024, 6, 1), date(2024, 6, 30))

    assert (day.check_in, day.check_out) == (time(8, 58), time(17, 32))


def test_employee_daily_log_unknown_employee():
    svc = _service(MovingClock(datetime(2024, 6, 20, 8, 0)))

    with pytest.raises(NotFoundError):
        svc.employee_daily_log("missing", date(2024, 6, 1), date(2024, 6, 30))
