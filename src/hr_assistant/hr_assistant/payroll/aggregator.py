"""Period totals over pre-fetched records.

Work time is summed from durations already stored on the records
(``workDurationMinutes`` for a month, payroll ``totalWorkHours`` for a year);
nothing is recomputed from raw terminal events. Leave days are the calendar
days of approved requests that fall inside the period, so a request spanning
a month boundary is split across both months.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_bounds, month_key, parse_month_year
from ..core.enums import AttendanceStatus, LeaveStatus
from ..employees.model import Employee
from ..leave.model import LeaveRequest
from .model import AnnualReport, AnnualReportRow, MonthlyPayroll


def overlap_days(start: date, end: date, period_start: date, period_end: date) -> int:
    """Inclusive day count of ``[start, end]`` inside ``[period_start, period_end]``."""

    first = max(start, period_start)
    last = min(end, period_end)
    return max(0, (last - first).days + 1)


def total_work_minutes(records: Iterable[AttendanceRecord]) -> int:
    return sum(
        int(r.work_duration_minutes)
        for r in records
        if r.status == AttendanceStatus.COMPLETED and r.work_duration_minutes is not None
    )


def leave_days_in_period(leaves: Iterable[LeaveRequest], period_start: date, period_end: date) -> int:
    return sum(
        overlap_days(lv.start_date, lv.end_date, period_start, period_end)
        for lv in leaves
        if lv.status == LeaveStatus.APPROVED
    )


def leave_days_in_month(leaves: Iterable[LeaveRequest], year: int, month: int) -> int:
    start, end = month_bounds(year, month)
    return leave_days_in_period(leaves, start, end)


def leave_days_in_year(leaves: Sequence[LeaveRequest], year: int) -> int:
    """Sum of the per-month overlaps."""

    return sum(leave_days_in_month(leaves, year, m) for m in range(1, 13))


def _net(p: MonthlyPayroll) -> Optional[float]:
    return p.net_salary_final if p.net_salary_final is not None else p.net_salary_calculated


def annual_row(
    employee: Employee,
    year: int,
    payrolls: Iterable[MonthlyPayroll],
    leaves: Sequence[LeaveRequest],
) -> AnnualReportRow:
    by_month = {p.month_year: p for p in payrolls}
    months: list[Optional[float]] = []
    total_hours = 0.0
    total_net = 0.0
    for m in range(1, 13):
        record = by_month.get(month_key(year, m))
        if record is None:
            months.append(None)
            continue
        net = _net(record)
        months.append(net)
        total_net += net or 0.0
        total_hours += float(record.total_work_hours or 0.0)

    return AnnualReportRow(
        employee_doc_id=employee.doc_id,
        employee_name=employee.name,
        company_employee_id=employee.employee_id,
        monthly_net_salaries=months,
        total_work_hours=round(total_hours, 2),
        total_leave_days=leave_days_in_year(leaves, year),
        total_net_salary=round(total_net, 2),
    )


def build_annual_report(
    year: int,
    employees: Iterable[Employee],
    payrolls: Iterable[MonthlyPayroll],
    leaves: Iterable[LeaveRequest],
) -> AnnualReport:
    payrolls_by_emp: dict[str, list[MonthlyPayroll]] = defaultdict(list)
    for p in payrolls:
        if parse_month_year(p.month_year)[0] == year:
            payrolls_by_emp[p.employee_doc_id].append(p)

    leaves_by_emp: dict[str, list[LeaveRequest]] = defaultdict(list)
    for lv in leaves:
        leaves_by_emp[lv.requesting_employee_doc_id].append(lv)

    rows = [
        annual_row(emp, year, payrolls_by_emp.get(emp.doc_id, []), leaves_by_emp.get(emp.doc_id, []))
        for emp in employees
    ]
    return AnnualReport(year=year, rows=rows)
