from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        requesting_employee_doc_id: str,
        employee_name: str,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        number_of_days: int,
        attachment_url: Optional[str],
        submitted_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        request_id: str,
        *,
        status: LeaveStatus,
        manager_notes: str,
        expected_version: int,
        updated_at: datetime,
    ) -> bool:
        """Conditional write: only a Pending request still at ``expected_version``."""

        raise NotImplementedError

    def edit(
        self,
        request_id: str,
        *,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        number_of_days: int,
        attachment_url: Optional[str],
        expected_version: int,
        updated_at: datetime,
    ) -> bool:
        """Rewrite the request and reopen it (Pending, notes cleared).

        Conditional on ``expected_version``.
        """

        raise NotImplementedError

    def delete(self, request_id: str) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_doc_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_approved_overlapping(
        self, start: date, end: date, *, employee_doc_id: Optional[str] = None
    ) -> Sequence[LeaveRequest]:
        """Approved requests intersecting ``[start, end]``."""

        raise NotImplementedError
