from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..core.exceptions import NotFoundError
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .forms import ApplyForJobForm, CreateJobForm
from .model import JobApplication, JobPosting
from .repository import JobRepository


class JobService:
    """Job openings and the applications received for them."""

    def __init__(self, jobs: JobRepository, audit: SystemLogService, *, clock: Clock = now_local):
        self._jobs = jobs
        self._audit = audit
        self._clock = clock

    def list_postings(self) -> Sequence[JobPosting]:
        return self._jobs.list_postings()

    def get_posting(self, job_id: str) -> JobPosting:
        job = self._jobs.get_posting(job_id)
        if not job:
            raise NotFoundError("Job opening not found.")
        return job

    def create_posting(self, form: CreateJobForm, *, actor: Actor) -> str:
        job_id = self._jobs.create_posting(
            title=form.title,
            department=form.department,
            location=form.location,
            short_requirements=form.short_requirements,
            created_at=self._clock(),
        )
        self._audit.record("Create Job Opening", actor, {"jobId": job_id, "title": form.title})
        return job_id

    def delete_posting(self, job_id: str, *, actor: Actor) -> None:
        job = self.get_posting(job_id)
        self._jobs.delete_posting(job.job_id)
        self._audit.record("Delete Job Opening", actor, {"jobId": job.job_id, "title": job.title})

    def apply(self, form: ApplyForJobForm) -> str:
        """Anonymous candidates may apply; no audit entry is written."""

        job = self.get_posting(form.job_id)
        return self._jobs.create_application(
            job_id=job.job_id,
            job_title=job.title,
            name=form.name,
            email=str(form.email),
            resume_url=str(form.resume_url),
            salary=form.salary,
            net_salary=form.net_salary,
            submitted_at=self._clock(),
        )

    def list_applications(self, *, job_id: Optional[str] = None) -> Sequence[JobApplication]:
        return self._jobs.list_applications(job_id=job_id)
