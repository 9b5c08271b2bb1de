from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.feed import ChangeFeed, Subscription
from ..employees.repository import EmployeeRepository
from ..notifications.leave_notifier import LeaveNotifier
from ..settings.service import SettingsService
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .forms import EditLeaveForm, SubmitLeaveForm, UpdateLeaveStatusForm
from .model import LeaveRequest
from .repository import LeaveRepository
from .workdays import count_working_days

logger = logging.getLogger(__name__)

STALE_REQUEST = "This leave request was changed by someone else. Reload it and try again."


class LeaveService:
    """Leave workflow.

    Pending -> Approved | Rejected through ``update_status``; ``edit`` reopens
    any request (Pending, manager notes cleared, working days recomputed).
    Both are conditional on the request ``version`` read by the caller.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        settings: SettingsService,
        notifier: LeaveNotifier,
        audit: SystemLogService,
        *,
        feed: Optional[ChangeFeed] = None,
        clock: Clock = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._settings = settings
        self._notifier = notifier
        self._audit = audit
        self._feed = feed
        self._clock = clock

    def _working_days(self, form) -> int:
        calendar = self._settings.work_calendar(form.start_date, form.end_date)
        return count_working_days(form.start_date, form.end_date, calendar)

    def get(self, request_id: str) -> LeaveRequest:
        req = self._leaves.get(request_id)
        if not req:
            raise NotFoundError("Leave request not found.")
        return req

    def submit(self, form: SubmitLeaveForm, *, actor: Optional[Actor] = None) -> LeaveRequest:
        employee = self._employees.get(form.requesting_employee_doc_id)
        if not employee:
            raise NotFoundError("Employee record not found.")

        request_id = self._leaves.create(
            requesting_employee_doc_id=employee.doc_id,
            employee_name=employee.name or "Unknown Employee",
            leave_type=form.leave_type,
            start_date=form.start_date,
            end_date=form.end_date,
            reason=form.reason,
            number_of_days=self._working_days(form),
            attachment_url=form.attachment,
            submitted_at=self._clock(),
        )
        request = self.get(request_id)

        manager = None
        if employee.report_line1:
            manager = self._employees.find_by_email(employee.report_line1.lower())
        self._notifier.notify_manager(request, employee, manager)

        self._audit.record(
            "Submit Leave Request",
            actor,
            {"requestId": request_id, "employeeName": request.employee_name, "numberOfDays": request.number_of_days},
        )
        return request

    def update_status(self, form: UpdateLeaveStatusForm, *, actor: Actor) -> LeaveRequest:
        current = self.get(form.request_id)
        expected = current.version if form.version is None else form.version
        if not current.is_pending:
            raise ValidationError(f"This request has already been {current.status.value.lower()}.")
        if expected != current.version:
            raise ConflictError(STALE_REQUEST)

        new_status = LeaveStatus(form.new_status)
        ok = self._leaves.decide(
            current.request_id,
            status=new_status,
            manager_notes=form.manager_notes or "",
            expected_version=expected,
            updated_at=self._clock(),
        )
        if not ok:
            raise ConflictError(STALE_REQUEST)

        self._audit.record(
            "Update Leave Status",
            actor,
            {"requestId": current.request_id, "employeeName": current.employee_name, "newStatus": new_status.value},
            old_data={"status": current.status.value, "managerNotes": current.manager_notes},
            new_data={"status": new_status.value, "managerNotes": form.manager_notes or ""},
        )
        return self.get(current.request_id)

    def edit(self, form: EditLeaveForm, *, actor: Actor) -> LeaveRequest:
        current = self.get(form.request_id)
        expected = current.version if form.version is None else form.version
        if expected != current.version:
            raise ConflictError(STALE_REQUEST)

        number_of_days = self._working_days(form)
        ok = self._leaves.edit(
            current.request_id,
            leave_type=form.leave_type,
            start_date=form.start_date,
            end_date=form.end_date,
            reason=form.reason,
            number_of_days=number_of_days,
            attachment_url=form.attachment or current.attachment_url,
            expected_version=expected,
            updated_at=self._clock(),
        )
        if not ok:
            raise ConflictError(STALE_REQUEST)

        self._audit.record(
            "Edit Leave Request",
            actor,
            {"requestId": current.request_id, "employeeName": current.employee_name},
            old_data={
                "leaveType": current.leave_type,
                "startDate": current.start_date,
                "endDate": current.end_date,
                "reason": current.reason,
                "status": current.status.value,
            },
            new_data={
                "leaveType": form.leave_type,
                "startDate": form.start_date,
                "endDate": form.end_date,
                "reason": form.reason,
                "status": LeaveStatus.PENDING.value,
                "numberOfDays": number_of_days,
            },
        )
        return self.get(current.request_id)

    def delete(self, request_id: str, *, actor: Actor) -> None:
        current = self.get(request_id)
        if not self._leaves.delete(request_id):
            raise NotFoundError("Leave request not found.")
        self._audit.record(
            "Delete Leave Request", actor, {"requestId": request_id, "employeeName": current.employee_name}
        )

    def list_mine(self, employee_doc_id: str, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(employee_doc_id=employee_doc_id, status=status, limit=DEFAULT_LIST_LIMIT)

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(status=status, limit=DEFAULT_LIST_LIMIT)

    def subscribe_pending(self) -> Subscription[Sequence[LeaveRequest]]:
        """Live pending queue: a new snapshot after every leave write."""

        if self._feed is None:
            raise RuntimeError("Live updates are not configured.")
        return self._feed.subscribe("leaveRequests", lambda: self.list_all(status=LeaveStatus.PENDING))
