from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from ..common.validators import FormSchema
from ..core.constants import DEFAULT_LIST_LIMIT


class ClockInForm(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
    employee_name: str = Field(alias="employeeName")


class ClockOutForm(FormSchema):
    attendance_record_id: str = Field(alias="attendanceRecordId")
    employee_doc_id: str = Field(alias="employeeDocId")
    employee_name: str = Field(alias="employeeName")


class DateRangeQuery(FormSchema):
    start: date
    end: date

    @model_validator(mode="after")
    def _ordered(self) -> "DateRangeQuery":
        if self.end < self.start:
            raise ValueError("End date cannot be before start date.")
        return self


class TerminalLogQuery(FormSchema):
    start: Optional[date] = None
    end: Optional[date] = None
    machine: Optional[str] = None
    limit: int = Field(DEFAULT_LIST_LIMIT, ge=1, le=5000)
