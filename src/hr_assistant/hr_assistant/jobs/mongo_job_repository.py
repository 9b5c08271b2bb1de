from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from bson import ObjectId
from pymongo import DESCENDING

from ..database.connection import DatabaseConnection
from .model import JobApplication, JobPosting
from .repository import JobRepository

POSTINGS = "jobs"
APPLICATIONS = "jobApplications"


def _to_posting(doc: dict) -> JobPosting:
    return JobPosting(
        job_id=str(doc["_id"]),
        title=doc.get("title", ""),
        department=doc.get("department", ""),
        location=doc.get("location", ""),
        short_requirements=list(doc.get("shortRequirements") or []),
        created_at=doc.get("createdAt"),
    )


def _to_application(doc: dict) -> JobApplication:
    return JobApplication(
        application_id=str(doc["_id"]),
        job_id=doc.get("jobId", ""),
        job_title=doc.get("jobTitle", ""),
        name=doc.get("name", ""),
        email=doc.get("email", ""),
        resume_url=doc.get("resumeURL", ""),
        salary=doc.get("salary"),
        net_salary=doc.get("netSalary"),
        submitted_at=doc.get("submittedAt"),
    )


class MongoJobRepository(JobRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def create_posting(
        self,
        *,
        title: str,
        department: str,
        location: str,
        short_requirements: list[str],
        created_at: datetime,
    ) -> str:
        res = self._conn.collection(POSTINGS).insert_one(
            {
                "title": title,
                "department": department,
                "location": location,
                "shortRequirements": list(short_requirements),
                "createdAt": created_at,
            }
        )
        return str(res.inserted_id)

    def get_posting(self, job_id: str) -> Optional[JobPosting]:
        if not ObjectId.is_valid(str(job_id)):
            return None
        doc = self._conn.collection(POSTINGS).find_one({"_id": ObjectId(str(job_id))})
        return _to_posting(doc) if doc else None

    def delete_posting(self, job_id: str) -> bool:
        if not ObjectId.is_valid(str(job_id)):
            return False
        res = self._conn.collection(POSTINGS).delete_one({"_id": ObjectId(str(job_id))})
        return res.deleted_count == 1

    def list_postings(self) -> Sequence[JobPosting]:
        cur = self._conn.collection(POSTINGS).find({}).sort("createdAt", DESCENDING)
        return [_to_posting(d) for d in cur]

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
        res = self._conn.collection(APPLICATIONS).insert_one(
            {
                "jobId": job_id,
                "jobTitle": job_title,
                "name": name,
                "email": email,
                "resumeURL": resume_url,
                "salary": salary,
                "netSalary": net_salary,
                "submittedAt": submitted_at,
            }
        )
        return str(res.inserted_id)

    def list_applications(self, *, job_id: Optional[str] = None) -> Sequence[JobApplication]:
        query: dict[str, Any] = {"jobId": job_id} if job_id else {}
        cur = self._conn.collection(APPLICATIONS).find(query).sort("submittedAt", DESCENDING)
        return [_to_application(d) for d in cur]
