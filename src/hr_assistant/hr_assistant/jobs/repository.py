from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import JobApplication, JobPosting


class JobRepository(Protocol):
    def create_posting(
        self,
        *,
        title: str,
        department: str,
        location: str,
        short_requirements: list[str],
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get_posting(self, job_id: str) -> Optional[JobPosting]:
        raise NotImplementedError

    def delete_posting(self, job_id: str) -> bool:
        raise NotImplementedError

    def list_postings(self) -> Sequence[JobPosting]:
        raise NotImplementedError

    def create_application(
        self,
        *,
        job_id: str,
        job_title: str,
        name: str,
        email: str,
        resume_url: str,
        salary: Optional[float],
        net_salary: Optional[float],
        submitted_at: datetime,
    ) -> str:
        raise NotImplementedError

    def list_applications(self, *, job_id: Optional[str] = None) -> Sequence[JobApplication]:
        raise NotImplementedError
