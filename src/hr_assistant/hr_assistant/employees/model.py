from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus

# snake_case attribute -> document field
FIELD_MAP = {
    "employee_id": "employeeId",
    "name": "name",
    "first_name": "firstName",
    "last_name": "lastName",
    "name_ar": "nameAr",
    "email": "email",
    "personal_email": "personalEmail",
    "phone": "phone",
    "title": "title",
    "department": "department",
    "role": "role",
    "group_name": "groupName",
    "stage": "stage",
    "system": "system",
    "campus": "campus",
    "subject": "subject",
    "gender": "gender",
    "national_id": "nationalId",
    "religion": "religion",
    "children_at_nis": "childrenAtNIS",
    "report_line1": "reportLine1",
    "report_line2": "reportLine2",
    "hourly_rate": "hourlyRate",
    "status": "status",
    "joining_date": "joiningDate",
    "leaving_date": "leavingDate",
    "reason_for_leaving": "reasonForLeaving",
    "date_of_birth": "dateOfBirth",
    "user_id": "userId",
}

DATE_FIELDS = ("joiningDate", "leavingDate", "dateOfBirth")


@dataclass(frozen=True)
class EmergencyContact:
    name: Optional[str] = None
    relationship: Optional[str] = None
    number: Optional[str] = None


@dataclass(frozen=True)
class Employee:
    doc_id: str
    employee_id: str
    name: str
    email: Optional[str]
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name_ar: Optional[str] = None
    personal_email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    group_name: Optional[str] = None
    stage: Optional[str] = None
    system: Optional[str] = None
    campus: Optional[str] = None
    subject: Optional[str] = None
    gender: Optional[str] = None
    national_id: Optional[str] = None
    religion: Optional[str] = None
    children_at_nis: Optional[str] = None
    report_line1: Optional[str] = None
    report_line2: Optional[str] = None
    hourly_rate: Optional[float] = None
    joining_date: Optional[date] = None
    leaving_date: Optional[date] = None
    reason_for_leaving: Optional[str] = None
    date_of_birth: Optional[date] = None
    emergency_contact: Optional[EmergencyContact] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
