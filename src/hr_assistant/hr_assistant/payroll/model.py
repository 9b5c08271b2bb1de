from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PayrollFigures:
    base_salary: float
    bonus: float
    deductions: float
    net_salary: float


@dataclass(frozen=True)
class MonthlyPayroll:
    record_id: str
    employee_doc_id: str
    employee_name: str
    month_year: str
    hourly_rate_used: float
    total_work_hours: float
    base_salary_calculated: float
    bonus_added: float
    deductions_applied: float
    net_salary_calculated: float
    net_salary_final: Optional[float]
    notes: str = ""
    calculated_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class MonthlySummary:
    """Inputs shown on the payroll form for one employee and month."""

    employee_doc_id: str
    month_year: str
    total_work_minutes: int
    total_work_hours: float
    approved_leave_days: int


@dataclass(frozen=True)
class AnnualReportRow:
    employee_doc_id: str
    employee_name: str
    company_employee_id: str
    monthly_net_salaries: list[Optional[float]] = field(default_factory=lambda: [None] * 12)
    total_work_hours: float = 0.0
    total_leave_days: int = 0
    total_net_salary: float = 0.0


@dataclass(frozen=True)
class AnnualReport:
    year: int
    rows: list[AnnualReportRow]

    @property
    def employee_count(self) -> int:
        return len(self.rows)

    @property
    def aggregate_net_salary(self) -> float:
        return round(sum(r.total_net_salary for r in self.rows), 2)

    @property
    def aggregate_work_hours(self) -> float:
        return round(sum(r.total_work_hours for r in self.rows), 2)
