from __future__ import annotations

from datetime import date, datetime

from src.hr_assistant.hr_assistant.attendance.model import AttendanceRecord
from src.hr_assistant.hr_assistant.core.enums import AttendanceStatus, LeaveStatus
from src.hr_assistant.hr_assistant.employees.model import Employee
from src.hr_assistant.hr_assistant.leave.model import LeaveRequest
from src.hr_assistant.hr_assistant.payroll.aggregator import (
    build_annual_report,
    leave_days_in_month,
    leave_days_in_year,
    overlap_days,
    total_work_minutes,
)
from src.hr_assistant.hr_assistant.payroll.model import MonthlyPayroll


def _leave(start, end, status=LeaveStatus.APPROVED, emp="e1"):
    return LeaveRequest(
        request_id="l1",
        requesting_employee_doc_id=emp,
        employee_name="Sara",
        leave_type="Annual Leave",
        start_date=start,
        end_date=end,
        reason="Family trip",
        number_of_days=0,
        status=status,
    )


def _payroll(month_year, net_calc, net_final=None, hours=160.0, emp="e1"):
    return MonthlyPayroll(
        record_id=f"p-{month_year}",
        employee_doc_id=emp,
        employee_name="Sara",
        month_year=month_year,
        hourly_rate_used=10.0,
        total_work_hours=hours,
        base_salary_calculated=net_calc,
        bonus_added=0.0,
        deductions_applied=0.0,
        net_salary_calculated=net_calc,
        net_salary_final=net_final,
    )


def test_overlap_is_clamped_to_period():
    assert overlap_days(date(2024, 6, 25), date(2024, 7, 5), date(2024, 6, 1), date(2024, 6, 30)) == 6
    assert overlap_days(date(2024, 6, 25), date(2024, 7, 5), date(2024, 7, 1), date(2024, 7, 31)) == 5
    assert overlap_days(date(2024, 6, 1), date(2024, 6, 3), date(2024, 7, 1), date(2024, 7, 31)) == 0
    assert overlap_days(date(2024, 1, 1), date(2024, 12, 31), date(2024, 2, 1), date(2024, 2, 29)) == 29


def test_leave_spanning_months_is_split():
    leaves = [_leave(date(2024, 6, 25), date(2024, 7, 5))]

    assert leave_days_in_month(leaves, 2024, 6) == 6
    assert leave_days_in_month(leaves, 2024, 7) == 5
    assert leave_days_in_year(leaves, 2024) == 11


def test_only_approved_leave_counts():
    leaves = [
        _leave(date(2024, 6, 3), date(2024, 6, 4), status=LeaveStatus.PENDING),
        _leave(date(2024, 6, 5), date(2024, 6, 6), status=LeaveStatus.REJECTED),
    ]

    assert leave_days_in_month(leaves, 2024, 6) == 0


def test_work_minutes_sum_completed_records_only():
    def rec(minutes, status):
        return AttendanceRecord(
            record_id="r",
            employee_doc_id="e1",
            employee_name="Sara",
            date=date(2024, 6, 3),
            clock_in_time=datetime(2024, 6, 3, 8, 0),
            clock_out_time=None,
            work_duration_minutes=minutes,
            status=status,
        )

    records = [rec(480, AttendanceStatus.COMPLETED), rec(None, AttendanceStatus.CLOCKED_IN), rec(30, AttendanceStatus.COMPLETED)]

    assert total_work_minutes(records) == 510


def test_annual_report_prefers_final_net_and_leaves_gaps():
    employees = [Employee(doc_id="e1", employee_id="1001", name="Sara", email=None)]
    payrolls = [
        _payroll("2024-01", 1000.0, net_final=1100.0, hours=150.0),
        _payroll("2024-03", 900.0, hours=140.5),
        _payroll("2023-12", 5000.0),
    ]
    leaves = [_leave(date(2024, 6, 25), date(2024, 7, 5))]

    report = build_annual_report(2024, employees, payrolls, leaves)
    [row] = report.rows

    assert row.monthly_net_salaries[0] == 1100.0
    assert row.monthly_net_salaries[1] is None
    assert row.monthly_net_salaries[2] == 900.0
    assert row.total_net_salary == 2000.0
    assert row.total_work_hours == 290.5
    assert row.total_leave_days == 11
    assert report.employee_count == 1
    assert report.aggregate_net_salary == 2000.0
