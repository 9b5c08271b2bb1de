from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.hr_assistant.hr_assistant.core.enums import LeaveStatus
from src.hr_assistant.hr_assistant.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.hr_assistant.hr_assistant.database.feed import ChangeFeed
from src.hr_assistant.hr_assistant.employees.model import Employee
from src.hr_assistant.hr_assistant.leave.forms import EditLeaveForm, SubmitLeaveForm, UpdateLeaveStatusForm
from src.hr_assistant.hr_assistant.leave.model import LeaveRequest
from src.hr_assistant.hr_assistant.leave.service import LeaveService
from src.hr_assistant.hr_assistant.settings.model import WorkCalendar
from src.hr_assistant.hr_assistant.system_log.model import Actor


class FakeLeaveRepo:
    def __init__(self, feed=None):
        self._rows: dict[str, LeaveRequest] = {}
        self._feed = feed

    def _changed(self):
        if self._feed:
            self._feed.publish("leaveRequests")

    def create(self, **kwargs):
        rid = f"l{len(self._rows) + 1}"
        self._rows[rid] = LeaveRequest(request_id=rid, status=LeaveStatus.PENDING, **kwargs)
        self._changed()
        return rid

    def get(self, request_id):
        return self._rows.get(request_id)

    def decide(self, request_id, *, status, manager_notes, expected_version, updated_at):
        req = self._rows.get(request_id)
        if not req or req.status != LeaveStatus.PENDING or req.version != expected_version:
            return False
        self._rows[request_id] = replace(
            req, status=status, manager_notes=manager_notes, updated_at=updated_at, version=req.version + 1
        )
        self._changed()
        return True

    def edit(self, request_id, *, expected_version, updated_at, **fields):
        req = self._rows.get(request_id)
        if not req or req.version != expected_version:
            return False
        self._rows[request_id] = replace(
            req,
            status=LeaveStatus.PENDING,
            manager_notes="",
            updated_at=updated_at,
            version=req.version + 1,
            **fields,
        )
        self._changed()
        return True

    def delete(self, request_id):
        removed = self._rows.pop(request_id, None) is not None
        self._changed()
        return removed

    def list_requests(self, *, employee_doc_id=None, status=None, limit=200):
        rows = [
            r
            for r in self._rows.values()
            if (employee_doc_id is None or r.requesting_employee_doc_id == employee_doc_id)
            and (status is None or r.status == status)
        ]
        return rows[:limit]


class FakeEmployees:
    def __init__(self, *employees):
        self._rows = {e.doc_id: e for e in employees}

    def get(self, doc_id):
        return self._rows.get(doc_id)

    def find_by_email(self, email):
        return next((e for e in self._rows.values() if e.email == email), None)


class FakeSettings:
    def __init__(self, weekend=(5, 6), holidays=()):
        self._calendar = WorkCalendar(weekend_days=frozenset(weekend), holidays=frozenset(holidays))

    def work_calendar(self, start, end):
        return self._calendar


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def notify_manager(self, request, employee, manager=None):
        self.sent.append((request.request_id, employee.report_line1, manager.name if manager else None))
        return True


class FakeAudit:
    def __init__(self):
        self.entries = []

    def record(self, action, actor, details=None, *, old_data=None, new_data=None):
        self.entries.append((action, details, old_data, new_data))
        return "log1"


ADMIN = Actor(actor_id="u-admin", email="admin@example.com", role="admin")


@pytest.fixture
def employees():
    return FakeEmployees(
        Employee(
            doc_id="e1",
            employee_id="1001",
            name="Sara Ali",
            email="sara@example.com",
            report_line1="Boss@Example.com",
        ),
        Employee(doc_id="m1", employee_id="1000", name="The Boss", email="boss@example.com"),
    )


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def audit():
    return FakeAudit()


@pytest.fixture
def service(employees, notifier, audit, clock):
    feed = ChangeFeed()
    return LeaveService(
        FakeLeaveRepo(feed), employees, FakeSettings(), notifier, audit, feed=feed, clock=clock
    )


def _submit_form(**overrides):
    data = {
        "requestingEmployeeDocId": "e1",
        "leaveType": "Annual Leave",
        "startDate": "2024-06-25",
        "endDate": "2024-07-05",
        "reason": "Family trip abroad",
    }
    data.update(overrides)
    return SubmitLeaveForm.model_validate(data)


def test_submit_counts_working_days_and_notifies_manager(service, notifier, audit, fixed_now):
    req = service.submit(_submit_form(), actor=ADMIN)

    # 2024-06-25..07-05 has 11 days; Fri/Sat 28-29 Jun and 5 Jul are weekend
    assert req.number_of_days == 8
    assert req.status == LeaveStatus.PENDING
    assert req.submitted_at == fixed_now
    assert notifier.sent == [(req.request_id, "Boss@Example.com", "The Boss")]
    assert audit.entries[0][0] == "Submit Leave Request"


def test_submit_for_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.submit(_submit_form(requestingEmployeeDocId="nope"))


def test_approve_then_edit_reopens_and_clears_notes(service):
    req = service.submit(_submit_form())

    approved = service.update_status(
        UpdateLeaveStatusForm(requestId=req.request_id, newStatus="Approved", managerNotes="Enjoy"),
        actor=ADMIN,
    )
    assert approved.status == LeaveStatus.APPROVED
    assert approved.manager_notes == "Enjoy"

    edited = service.edit(
        EditLeaveForm.model_validate(
            {
                "requestId": req.request_id,
                "leaveType": "Annual Leave",
                "startDate": "2024-06-25",
                "endDate": "2024-06-27",
                "reason": "Shorter family trip",
                "version": approved.version,
            }
        ),
        actor=ADMIN,
    )

    assert edited.status == LeaveStatus.PENDING
    assert edited.manager_notes == ""
    assert edited.number_of_days == 3


def test_deciding_twice_is_rejected(service):
    req = service.submit(_submit_form())
    form = UpdateLeaveStatusForm(requestId=req.request_id, newStatus="Rejected")
    service.update_status(form, actor=ADMIN)

    with pytest.raises(ValidationError, match="already been rejected"):
        service.update_status(form, actor=ADMIN)


def test_stale_version_is_a_conflict(service):
    req = service.submit(_submit_form())
    service.edit(
        EditLeaveForm.model_validate(
            {
                "requestId": req.request_id,
                "leaveType": "Sick Leave",
                "startDate": "2024-06-25",
                "endDate": "2024-06-26",
                "reason": "Feeling unwell today",
            }
        ),
        actor=ADMIN,
    )

    with pytest.raises(ConflictError):
        service.update_status(
            UpdateLeaveStatusForm(requestId=req.request_id, newStatus="Approved", version=0), actor=ADMIN
        )


def test_update_status_writes_old_and_new_data(service, audit):
    req = service.submit(_submit_form())
    service.update_status(UpdateLeaveStatusForm(requestId=req.request_id, newStatus="Approved"), actor=ADMIN)

    action, details, old_data, new_data = audit.entries[-1]
    assert action == "Update Leave Status"
    assert old_data["status"] == "Pending"
    assert new_data["status"] == "Approved"


def test_delete_and_lists(service):
    a = service.submit(_submit_form())
    service.submit(_submit_form(reason="Another long reason"))
    service.update_status(UpdateLeaveStatusForm(requestId=a.request_id, newStatus="Approved"), actor=ADMIN)

    assert len(service.list_mine("e1")) == 2
    assert len(service.list_all(status=LeaveStatus.PENDING)) == 1

    service.delete(a.request_id, actor=ADMIN)
    with pytest.raises(NotFoundError):
        service.get(a.request_id)


def test_pending_subscription_sees_new_requests(service):
    with service.subscribe_pending() as sub:
        assert list(sub.get(timeout=0)) == []

        service.submit(_submit_form())
        snapshot = sub.get(timeout=0)

    assert [r.employee_name for r in snapshot] == ["Sara Ali"]


def test_subscription_needs_a_feed(employees, notifier, audit, clock):
    svc = LeaveService(FakeLeaveRepo(), employees, FakeSettings(), notifier, audit, clock=clock)

    with pytest.raises(RuntimeError):
        svc.subscribe_pending()
