from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, month_bounds, now_local, parse_month_year, year_bounds
from ..core.enums import EmployeeStatus
from ..employees.repository import EmployeeRepository
from ..leave.repository import LeaveRepository
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .aggregator import build_annual_report, leave_days_in_period, total_work_minutes
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .forms import PayrollForm
from .model import AnnualReport, MonthlyPayroll, MonthlySummary, PayrollFigures
from .repository import PayrollRepository


@dataclass(frozen=True)
class SavedPayroll:
    record_id: str
    created: bool
    figures: PayrollFigures


class PayrollService:
    def __init__(
        self,
        payrolls: PayrollRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        audit: SystemLogService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Clock = now_local,
    ):
        self._payrolls = payrolls
        self._attendance = attendance
        self._leaves = leaves
        self._employees = employees
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def save(self, form: PayrollForm, *, actor: Actor) -> SavedPayroll:
        """Upsert the payroll of one employee for one month."""

        figures = self._calculator.calculate(
            hourly_rate=form.hourly_rate,
            total_work_hours=form.total_work_hours,
            bonus=form.bonus,
            deductions=form.deductions,
        )
        data = {
            "employeeName": form.employee_name,
            "hourlyRateUsed": form.hourly_rate,
            "totalWorkHours": form.total_work_hours,
            "baseSalaryCalculated": figures.base_salary,
            "bonusAdded": figures.bonus,
            "deductionsApplied": figures.deductions,
            "netSalaryCalculated": figures.net_salary,
            "netSalaryFinal": round(form.final_net_salary, 2),
            "notes": form.notes or "",
        }
        record_id, created = self._payrolls.upsert(
            form.employee_doc_id, form.month_year, data, now=self._clock()
        )
        self._audit.record(
            "Save Payroll",
            actor,
            {
                "payrollRecordId": record_id,
                "employeeDocId": form.employee_doc_id,
                "employeeName": form.employee_name,
                "monthYear": form.month_year,
                "netSalaryFinal": data["netSalaryFinal"],
            },
        )
        return SavedPayroll(record_id=record_id, created=created, figures=figures)

    def existing(self, employee_doc_id: str, month_year: str) -> Optional[MonthlyPayroll]:
        return self._payrolls.find(employee_doc_id, month_year)

    def monthly_summary(self, employee_doc_id: str, month_year: str) -> MonthlySummary:
        year, month = parse_month_year(month_year)
        start, end = month_bounds(year, month)
        minutes = total_work_minutes(self._attendance.list_completed(employee_doc_id, start, end))
        leaves = self._leaves.list_approved_overlapping(start, end, employee_doc_id=employee_doc_id)
        return MonthlySummary(
            employee_doc_id=employee_doc_id,
            month_year=month_year,
            total_work_minutes=minutes,
            total_work_hours=round(minutes / 60, 2),
            approved_leave_days=leave_days_in_period(leaves, start, end),
        )

    def annual_report(self, year: int) -> AnnualReport:
        start, end = year_bounds(year)
        return build_annual_report(
            year,
            self._employees.list_all(status=EmployeeStatus.ACTIVE),
            self._payrolls.list_for_year(year),
            self._leaves.list_approved_overlapping(start, end),
        )
