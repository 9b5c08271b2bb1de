from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import EmailStr, Field, TypeAdapter, ValidationInfo, field_validator
from pydantic import ValidationError as SchemaError

from ..common.validators import FormSchema
from ..core.constants import EMAIL_LISTS
from ..core.enums import ListOperation

ReferenceList = Literal[
    "roles", "groupNames", "systems", "campuses", "leaveTypes", "stage", "subjects", "machineNames", "reportLines1"
]
SyncTarget = Literal["groupNames", "roles", "campuses", "stage", "subjects", "machineNames", "reportLines1"]

_EMAIL = TypeAdapter(EmailStr)


class HolidayForm(FormSchema):
    name: str
    holiday_date: date = Field(alias="date")

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Holiday name must be at least 2 characters long.")
        return v


class DeleteHolidayForm(FormSchema):
    holiday_id: str = Field(alias="holidayId")


class WeekendForm(FormSchema):
    weekend: list[int] = Field(default_factory=list)

    @field_validator("weekend")
    @classmethod
    def _valid_days(cls, v: list[int]) -> list[int]:
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("Weekend days must be between 0 (Sunday) and 6 (Saturday).")
        return sorted(set(v))


class WorkdayForm(FormSchema):
    hours: float = Field(ge=1, le=24)


class ManageListItemForm(FormSchema):
    collection_name: ReferenceList = Field(alias="collectionName")
    operation: ListOperation
    name: Optional[str] = None
    id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _email_items(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is not None and info.data.get("collection_name") in EMAIL_LISTS:
            try:
                return str(_EMAIL.validate_python(v))
            except SchemaError:
                raise ValueError("Must be a valid email.")
        return v


class SyncListForm(FormSchema):
    target: SyncTarget
