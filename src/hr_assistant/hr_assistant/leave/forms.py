from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import Field, HttpUrl, ValidationInfo, field_validator

from ..common.validators import FormSchema


def _check_reason(v: str) -> str:
    if len(v) < 10:
        raise ValueError("Reason must be at least 10 characters.")
    if len(v) > 500:
        raise ValueError("Reason must be at most 500 characters.")
    return v


class _LeaveDates(FormSchema):
    leave_type: str = Field(alias="leaveType")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    reason: str
    attachment_url: Optional[HttpUrl] = Field(None, alias="attachmentURL")

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, v: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("End date cannot be before start date.")
        return v

    @field_validator("reason")
    @classmethod
    def _reason_length(cls, v: str) -> str:
        return _check_reason(v)

    @property
    def attachment(self) -> Optional[str]:
        return str(self.attachment_url) if self.attachment_url else None


class SubmitLeaveForm(_LeaveDates):
    requesting_employee_doc_id: str = Field(alias="requestingEmployeeDocId")


class EditLeaveForm(_LeaveDates):
    request_id: str = Field(alias="requestId")
    version: Optional[int] = Field(None, ge=0)


class UpdateLeaveStatusForm(FormSchema):
    request_id: str = Field(alias="requestId")
    new_status: Literal["Approved", "Rejected"] = Field(alias="newStatus")
    manager_notes: Optional[str] = Field(None, alias="managerNotes")
    version: Optional[int] = Field(None, ge=0)


class DeleteLeaveForm(FormSchema):
    request_id: str = Field(alias="requestId")
