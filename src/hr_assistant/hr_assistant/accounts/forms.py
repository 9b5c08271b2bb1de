from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..common.validators import FormSchema
from ..core.enums import Role


class LoginForm(FormSchema):
    email: EmailStr
    password: str


class CreateLoginForm(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
    password: str
    role: Optional[Role] = None

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v


class DeleteLoginForm(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
