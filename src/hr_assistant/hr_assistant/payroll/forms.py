from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from ..common.datetime_utils import parse_month_year
from ..common.validators import FormSchema


def _check_month_year(v: str) -> str:
    try:
        parse_month_year(v)
    except ValueError:
        raise ValueError("Month/Year must be in YYYY-MM format.")
    return v


class PayrollForm(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
    employee_name: str = Field(alias="employeeName")
    month_year: str = Field(alias="monthYear")
    hourly_rate: float = Field(alias="hourlyRateForCalc", ge=0)
    total_work_hours: float = Field(alias="totalWorkHoursFetched", ge=0)
    bonus: float = Field(0.0, ge=0)
    deductions: float = Field(0.0, ge=0)
    final_net_salary: float = Field(alias="finalNetSalary", ge=0)
    notes: Optional[str] = None

    @field_validator("month_year")
    @classmethod
    def _month_year(cls, v: str) -> str:
        return _check_month_year(v)


class MonthQuery(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
    month_year: str = Field(alias="monthYear")

    @field_validator("month_year")
    @classmethod
    def _month_year(cls, v: str) -> str:
        return _check_month_year(v)


class YearQuery(FormSchema):
    year: int = Field(ge=2000, le=2100)
