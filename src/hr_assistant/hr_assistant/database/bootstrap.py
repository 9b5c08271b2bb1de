from __future__ import annotations

import logging
from typing import Iterable

from pymongo import ASCENDING, DESCENDING, IndexModel
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..core.constants import REFERENCE_LISTS
from ..core.enums import EmployeeStatus, Role
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

INDEXES: dict[str, list[IndexModel]] = {
    "employee": [
        IndexModel([("employeeId", ASCENDING)], unique=True, sparse=True),
        IndexModel([("email", ASCENDING)], unique=True, sparse=True),
        IndexModel([("userId", ASCENDING)], sparse=True),
        IndexModel([("status", ASCENDING)]),
    ],
    "attendanceRecords": [
        IndexModel([("employeeDocId", ASCENDING), ("date", ASCENDING)], unique=True),
    ],
    "attendance_log": [
        IndexModel([("userId", ASCENDING), ("date", ASCENDING)]),
        IndexModel([("date", DESCENDING)]),
    ],
    "leaveRequests": [
        IndexModel([("requestingEmployeeDocId", ASCENDING), ("submittedAt", DESCENDING)]),
        IndexModel([("status", ASCENDING), ("startDate", ASCENDING), ("endDate", ASCENDING)]),
    ],
    "monthlyPayrolls": [
        IndexModel([("employeeDocId", ASCENDING), ("monthYear", ASCENDING)], unique=True),
        IndexModel([("monthYear", ASCENDING)]),
    ],
    "holidays": [IndexModel([("date", ASCENDING)], unique=True)],
    "jobApplications": [IndexModel([("jobId", ASCENDING), ("submittedAt", DESCENDING)])],
    "system_logs": [IndexModel([("timestamp", DESCENDING)])],
    "auth_users": [IndexModel([("email", ASCENDING)], unique=True)],
}

DEFAULT_LIST_ITEMS: dict[str, tuple[str, ...]] = {
    "leaveTypes": ("Annual Leave", "Sick Leave", "Emergency Leave", "Unpaid Leave", "Maternity Leave"),
    "roles": ("Teacher", "Administrator", "Coordinator", "Support Staff"),
    "systems": ("Unassigned",),
}


def ensure_indexes(conn: DatabaseConnection) -> int:
    """Create the indexes the queries rely on. Idempotent."""

    created = 0
    for name, indexes in INDEXES.items():
        created += len(conn.collection(name).create_indexes(indexes))
    for list_name in REFERENCE_LISTS:
        conn.collection(list_name).create_index([("name", ASCENDING)], unique=True)
        created += 1
    logger.info("Ensured %d indexes", created)
    return created


def seed_reference_lists(conn: DatabaseConnection, items: dict[str, Iterable[str]] = DEFAULT_LIST_ITEMS) -> int:
    """Insert default list items that are missing."""

    added = 0
    for list_name, names in items.items():
        col = conn.collection(list_name)
        for name in names:
            res = col.update_one({"name": name}, {"$setOnInsert": {"name": name}}, upsert=True)
            if res.upserted_id is not None:
                added += 1
    return added


def ensure_demo_admin(
    conn: DatabaseConnection,
    *,
    email: str = "admin@example.com",
    password: str = "admin123",
) -> str:
    """Admin login plus its employee record, created once."""

    now = now_local()
    accounts = conn.collection("auth_users")
    account = accounts.find_one({"email": email})
    if account:
        uid = str(account["_id"])
    else:
        uid = str(
            accounts.insert_one(
                {
                    "email": email,
                    "passwordHash": generate_password_hash(password),
                    "displayName": "Admin Demo",
                    "role": Role.ADMIN.value,
                    "disabled": False,
                    "createdAt": now,
                }
            ).inserted_id
        )

    conn.collection("employee").update_one(
        {"email": email},
        {
            "$set": {"userId": uid},
            "$setOnInsert": {
                "employeeId": "1000",
                "name": "Admin Demo",
                "firstName": "Admin",
                "lastName": "Demo",
                "status": EmployeeStatus.ACTIVE.value,
                "system": "Unassigned",
                "createdAt": now,
                "updatedAt": now,
            },
        },
        upsert=True,
    )
    return uid


def list_collections(conn: DatabaseConnection) -> list[str]:
    return sorted(conn.db.list_collection_names())
