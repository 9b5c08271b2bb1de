from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Access role attached to a login account."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class LeaveStatus(str, Enum):
    """Approval flow of a leave request.

    PENDING -> APPROVED | REJECTED. Editing a request puts it back to PENDING.
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AttendanceStatus(str, Enum):
    """Status of an in-app clock-in record."""

    CLOCKED_IN = "ClockedIn"
    COMPLETED = "Completed"


class PunchType(str, Enum):
    """Direction of a raw terminal event."""

    IN = "in"
    OUT = "out"


class ListOperation(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
