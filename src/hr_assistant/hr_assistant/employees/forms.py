from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from ..common.validators import FormSchema
from ..core.enums import EmployeeStatus, Role

_EMERGENCY = {
    "emergency_contact_name": "name",
    "emergency_contact_relationship": "relationship",
    "emergency_contact_number": "number",
}
_NOT_STORED = set(_EMERGENCY) | {"password", "login_role"}


class EmployeeProfileForm(FormSchema):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: EmailStr
    name_ar: Optional[str] = Field(None, alias="nameAr")
    personal_email: Optional[EmailStr] = Field(None, alias="personalEmail")
    phone: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    group_name: Optional[str] = Field(None, alias="groupName")
    stage: Optional[str] = None
    system: Optional[str] = None
    campus: Optional[str] = None
    subject: Optional[str] = None
    gender: Optional[str] = None
    national_id: Optional[str] = Field(None, alias="nationalId")
    religion: Optional[str] = None
    children_at_nis: Optional[str] = Field(None, alias="childrenAtNIS")
    report_line1: Optional[str] = Field(None, alias="reportLine1")
    report_line2: Optional[str] = Field(None, alias="reportLine2")
    hourly_rate: Optional[float] = Field(None, alias="hourlyRate", ge=0)
    joining_date: Optional[date] = Field(None, alias="joiningDate")
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")
    emergency_contact_name: Optional[str] = Field(None, alias="emergencyContactName")
    emergency_contact_relationship: Optional[str] = Field(None, alias="emergencyContactRelationship")
    emergency_contact_number: Optional[str] = Field(None, alias="emergencyContactNumber")

    def to_document(self) -> dict[str, Any]:
        """Submitted (non-blank) fields as a document fragment."""

        doc = self.model_dump(by_alias=True, exclude_none=True, exclude=_NOT_STORED)
        contact = self.emergency_contact()
        if contact:
            doc["emergencyContact"] = contact
        return doc

    def emergency_contact(self) -> dict[str, str]:
        return {key: getattr(self, attr) for attr, key in _EMERGENCY.items() if getattr(self, attr) is not None}


class CreateEmployeeForm(EmployeeProfileForm):
    status: EmployeeStatus = EmployeeStatus.ACTIVE


class CreateEmployeeWithLoginForm(CreateEmployeeForm):
    password: str
    login_role: Optional[Role] = Field(None, alias="loginRole")

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v


class UpdateEmployeeForm(EmployeeProfileForm):
    """Partial update: every field is optional, blank fields are left untouched."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[EmailStr] = None
    status: Optional[EmployeeStatus] = None


class DeactivateEmployeeForm(FormSchema):
    leaving_date: date = Field(alias="leavingDate")
    reason_for_leaving: str = Field(alias="reasonForLeaving")

    @field_validator("reason_for_leaving")
    @classmethod
    def _reason_length(cls, v: str) -> str:
        if len(v) < 5:
            raise ValueError("Reason must be at least 5 characters.")
        if len(v) > 500:
            raise ValueError("Reason must be at most 500 characters.")
        return v
