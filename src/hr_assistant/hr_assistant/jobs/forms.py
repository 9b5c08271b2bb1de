from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, HttpUrl, field_validator

from ..common.validators import FormSchema


class CreateJobForm(FormSchema):
    title: str = Field(min_length=3)
    department: str = Field(min_length=2)
    location: str = Field(min_length=2)
    short_requirements: list[str] = Field(alias="shortRequirements")

    @field_validator("short_requirements", mode="before")
    @classmethod
    def _split_lines(cls, v):
        if isinstance(v, str):
            v = v.splitlines()
        if v is None:
            return v
        return [str(line).strip() for line in v if str(line).strip()]

    @field_validator("short_requirements")
    @classmethod
    def _at_least_one(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Please enter at least one requirement.")
        return v


class ApplyForJobForm(FormSchema):
    job_id: str = Field(alias="jobId")
    name: str = Field(min_length=2)
    email: EmailStr
    resume_url: HttpUrl = Field(alias="resumeURL")
    salary: Optional[float] = Field(None, ge=0)
    net_salary: Optional[float] = Field(None, alias="netSalary", ge=0)


class DeleteJobForm(FormSchema):
    job_id: str = Field(alias="jobId")
