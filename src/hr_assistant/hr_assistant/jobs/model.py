from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class JobPosting:
    job_id: str
    title: str
    department: str
    location: str
    short_requirements: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class JobApplication:
    application_id: str
    job_id: str
    job_title: str
    name: str
    email: str
    resume_url: str
    salary: Optional[float] = None
    net_salary: Optional[float] = None
    submitted_at: Optional[datetime] = None
