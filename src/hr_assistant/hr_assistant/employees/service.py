from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from ..accounts.provider import AuthProvider
from ..common.datetime_utils import Clock, now_local
from ..core.constants import FIRST_EMPLOYEE_NUMBER
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..database.mongo_base import to_bson_value
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .forms import (
    CreateEmployeeForm,
    CreateEmployeeWithLoginForm,
    DeactivateEmployeeForm,
    EmployeeProfileForm,
    UpdateEmployeeForm,
)
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

UNASSIGNED_SYSTEM = "Unassigned"


@dataclass(frozen=True)
class ImportSummary:
    created: int
    updated: int
    skipped: int


def _full_name(first: Optional[str], last: Optional[str]) -> str:
    return " ".join(p for p in (first, last) if p)


def _email_taken(field: str = "email") -> ValidationError:
    msg = "An employee with this email already exists."
    return ValidationError(msg, {field: [msg]})


class EmployeeService:
    def __init__(
        self,
        employees: EmployeeRepository,
        auth: AuthProvider,
        audit: SystemLogService,
        *,
        clock: Clock = now_local,
    ):
        self._employees = employees
        self._auth = auth
        self._audit = audit
        self._clock = clock

    # -------- Queries --------
    def get(self, doc_id: str) -> Employee:
        emp = self._employees.get(doc_id)
        if not emp:
            raise NotFoundError("Employee not found.")
        return emp

    def list_employees(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        return self._employees.list_all(status=status)

    def next_employee_id(self) -> str:
        current = self._employees.max_employee_number()
        if current is None or current < FIRST_EMPLOYEE_NUMBER:
            return str(FIRST_EMPLOYEE_NUMBER)
        return str(current + 1)

    # -------- Create --------
    def _new_document(self, form: EmployeeProfileForm, **extra: Any) -> dict[str, Any]:
        now = self._clock()
        doc = form.to_document()
        doc.update(
            {
                "employeeId": self.next_employee_id(),
                "name": _full_name(form.first_name, form.last_name),
                "email": str(form.email).lower(),
                "status": doc.get("status", EmployeeStatus.ACTIVE.value),
                "system": doc.get("system") or UNASSIGNED_SYSTEM,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        doc.update(extra)
        return doc

    def create(self, form: CreateEmployeeForm, *, actor: Actor) -> Employee:
        if self._employees.find_by_email(str(form.email).lower()):
            raise _email_taken()

        doc = self._new_document(form)
        doc_id = self._employees.create(doc)
        self._audit.record(
            "Create Employee",
            actor,
            {"employeeDocId": doc_id, "employeeId": doc["employeeId"], "employeeName": doc["name"]},
        )
        return self.get(doc_id)

    def create_with_login(self, form: CreateEmployeeWithLoginForm, *, actor: Actor) -> Employee:
        """Create the employee document, then its login account.

        When the account cannot be created the employee document is deleted
        again, so no employee is left without the login it was created for.
        """

        email = str(form.email).lower()
        if self._employees.find_by_email(email):
            raise _email_taken()

        doc = self._new_document(form)
        doc_id = self._employees.create(doc)
        try:
            uid = self._auth.create_user(
                email=email,
                password=form.password,
                display_name=doc["name"],
                role=form.login_role or Role.EMPLOYEE,
            )
            self._employees.update(doc_id, {"userId": uid, "updatedAt": self._clock()})
        except Exception:
            logger.warning("Login creation failed for %s; removing employee %s", email, doc_id)
            self._employees.delete(doc_id)
            raise

        self._audit.record(
            "Create Employee With Login",
            actor,
            {"employeeDocId": doc_id, "employeeId": doc["employeeId"], "employeeName": doc["name"], "userId": uid},
        )
        return self.get(doc_id)

    def create_own_profile(self, form: EmployeeProfileForm, *, user_id: str, actor: Actor) -> Employee:
        """Self-service profile for a signed-in user without an employee record."""

        if self._employees.find_by_user_id(user_id):
            raise ValidationError("You already have an employee profile.")
        if self._employees.find_by_email(str(form.email).lower()):
            raise _email_taken()

        doc = self._new_document(form, userId=user_id, status=EmployeeStatus.ACTIVE.value)
        doc_id = self._employees.create(doc)
        self._audit.record("Create Own Profile", actor, {"employeeDocId": doc_id, "employeeName": doc["name"]})
        return self.get(doc_id)

    # -------- Update --------
    def update(self, doc_id: str, form: UpdateEmployeeForm, *, actor: Actor) -> Employee:
        current = self._employees.get_raw(doc_id)
        if not current:
            raise NotFoundError("Employee not found.")

        changes = form.to_document()
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            other = self._employees.find_by_email(changes["email"])
            if other and other.doc_id != str(doc_id):
                raise _email_taken()

        contact = changes.pop("emergencyContact", None)
        if contact:
            merged = dict(current.get("emergencyContact") or {})
            merged.update(contact)
            changes["emergencyContact"] = merged

        if "firstName" in changes or "lastName" in changes:
            changes["name"] = _full_name(
                changes.get("firstName", current.get("firstName")),
                changes.get("lastName", current.get("lastName")),
            )

        # stored dates are midnight datetimes
        changes = {k: v for k, v in changes.items() if current.get(k) != to_bson_value(v)}
        if not changes:
            raise ValidationError("No changes were submitted.")

        changes["updatedAt"] = self._clock()
        if not self._employees.update(doc_id, changes):
            raise NotFoundError("Employee not found.")

        old_data = {k: current.get(k) for k in changes if k != "updatedAt"}
        new_data = {k: v for k, v in changes.items() if k != "updatedAt"}
        self._audit.record(
            "Update Employee",
            actor,
            {"employeeDocId": str(doc_id), "employeeName": changes.get("name", current.get("name"))},
            old_data=old_data,
            new_data=new_data,
        )
        return self.get(doc_id)

    def deactivate(self, doc_id: str, form: DeactivateEmployeeForm, *, actor: Actor) -> Employee:
        emp = self.get(doc_id)
        self._employees.update(
            doc_id,
            {
                "status": EmployeeStatus.TERMINATED.value,
                "leavingDate": form.leaving_date,
                "reasonForLeaving": form.reason_for_leaving,
                "updatedAt": self._clock(),
            },
        )
        self._audit.record(
            "Deactivate Employee",
            actor,
            {
                "employeeDocId": emp.doc_id,
                "employeeName": emp.name,
                "leavingDate": form.leaving_date,
                "reasonForLeaving": form.reason_for_leaving,
            },
        )
        return self.get(doc_id)

    def activate(self, doc_id: str, *, actor: Actor) -> Employee:
        emp = self.get(doc_id)
        self._employees.update(
            doc_id,
            {"status": EmployeeStatus.ACTIVE.value, "updatedAt": self._clock()},
            unset=("leavingDate", "reasonForLeaving"),
        )
        self._audit.record("Activate Employee", actor, {"employeeDocId": emp.doc_id, "employeeName": emp.name})
        return self.get(doc_id)

    def delete(self, doc_id: str, *, actor: Actor) -> None:
        emp = self.get(doc_id)
        if not self._employees.delete(doc_id):
            raise NotFoundError("Employee not found.")
        self._audit.record(
            "Delete Employee",
            actor,
            {"employeeDocId": emp.doc_id, "employeeId": emp.employee_id, "employeeName": emp.name},
        )

    # -------- Bulk --------
    def import_rows(self, rows: Iterable[dict[str, Any]], *, actor: Actor) -> ImportSummary:
        """Upsert spreadsheet rows by ``employeeId``; new ids continue the sequence."""

        created = updated = skipped = 0
        next_number = int(self.next_employee_id())

        for row in rows:
            row = dict(row)
            if not row.get("name"):
                row["name"] = _full_name(row.get("firstName"), row.get("lastName"))
            if not row["name"]:
                skipped += 1
                continue
            if row.get("email"):
                row["email"] = str(row["email"]).lower()

            now = self._clock()
            existing = self._employees.find_by_employee_id(row["employeeId"]) if row.get("employeeId") else None
            if existing:
                row["updatedAt"] = now
                self._employees.update(existing.doc_id, row)
                updated += 1
                continue

            if not row.get("employeeId"):
                row["employeeId"] = str(next_number)
                next_number += 1
            elif row["employeeId"].isdigit():
                next_number = max(next_number, int(row["employeeId"]) + 1)

            row.setdefault("status", EmployeeStatus.ACTIVE.value)
            row["system"] = row.get("system") or UNASSIGNED_SYSTEM
            row["createdAt"] = now
            row["updatedAt"] = now
            self._employees.create(row)
            created += 1

        summary = ImportSummary(created=created, updated=updated, skipped=skipped)
        self._audit.record(
            "Import Employees", actor, {"created": created, "updated": updated, "skipped": skipped}
        )
        return summary

    def deduplicate(self, *, actor: Actor) -> int:
        """Drop nameless records and keep only the newest per employeeId/email."""

        docs = self._employees.list_raw()
        to_delete: set[str] = set()

        def _stamp(doc: dict) -> datetime:
            stamp = doc.get("updatedAt") or doc.get("createdAt")
            if isinstance(stamp, datetime):
                return stamp.replace(tzinfo=None)
            return doc["_id"].generation_time.replace(tzinfo=None)

        named = []
        for doc in docs:
            if not (doc.get("name") or "").strip():
                to_delete.add(str(doc["_id"]))
            else:
                named.append(doc)

        for key in ("employeeId", "email"):
            kept: dict[str, dict] = {}
            for doc in sorted(named, key=_stamp, reverse=True):
                if str(doc["_id"]) in to_delete:
                    continue
                value = doc.get(key)
                if value in (None, ""):
                    continue
                value = str(value).strip().lower()
                if value in kept:
                    to_delete.add(str(doc["_id"]))
                else:
                    kept[value] = doc

        removed = self._employees.delete_many(sorted(to_delete)) if to_delete else 0
        if removed:
            self._audit.record("Deduplicate Employees", actor, {"removed": removed})
        return removed
