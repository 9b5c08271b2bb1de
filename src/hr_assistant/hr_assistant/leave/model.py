from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    requesting_employee_doc_id: str
    employee_name: str
    leave_type: str
    start_date: date
    end_date: date
    reason: str
    number_of_days: int
    status: LeaveStatus
    attachment_url: Optional[str] = None
    manager_notes: str = ""
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING
