from __future__ import annotations

import logging

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .forms import CreateLoginForm, DeleteLoginForm, LoginForm
from .model import SessionUser
from .provider import AuthProvider

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, auth: AuthProvider, employees: EmployeeRepository):
        self._auth = auth
        self._employees = employees

    def authenticate(self, form: LoginForm) -> SessionUser:
        account = self._auth.verify(str(form.email), form.password)
        if not account:
            raise AuthenticationError("Invalid email or password.")

        employee = self._employees.find_by_user_id(account.uid)
        return SessionUser(
            uid=account.uid,
            email=account.email,
            display_name=account.display_name or (employee.name if employee else account.email),
            role=account.role,
            employee_doc_id=employee.doc_id if employee else None,
        )


class AccountService:
    """Login accounts linked to employee records through ``employee.userId``."""

    def __init__(self, auth: AuthProvider, employees: EmployeeRepository, audit: SystemLogService):
        self._auth = auth
        self._employees = employees
        self._audit = audit

    def create_login(self, form: CreateLoginForm, *, actor: Actor) -> str:
        emp = self._employees.get(form.employee_doc_id)
        if not emp:
            raise NotFoundError("Employee not found.")
        if emp.user_id:
            raise ValidationError(f"Employee {emp.name} already has a linked account.")
        if not emp.email:
            raise ValidationError(f"Employee {emp.name} has no email address on file.")

        uid = self._auth.create_user(
            email=emp.email,
            password=form.password,
            display_name=emp.name,
            role=form.role or Role.EMPLOYEE,
        )
        try:
            if not self._employees.update(emp.doc_id, {"userId": uid}):
                raise NotFoundError("Employee not found.")
        except Exception:
            logger.warning("Linking login %s to employee %s failed; deleting the account", uid, emp.doc_id)
            try:
                self._auth.delete_user(uid)
            except Exception:
                logger.exception("Could not delete orphaned login account %s", uid)
            raise

        self._audit.record(
            "Create Login", actor, {"employeeDocId": emp.doc_id, "employeeName": emp.name, "userId": uid}
        )
        return uid

    def delete_login(self, form: DeleteLoginForm, *, actor: Actor) -> str:
        """Delete the account and unlink it; returns the message for the form."""

        emp = self._employees.get(form.employee_doc_id)
        if not emp:
            raise NotFoundError("Employee not found.")
        if not emp.user_id:
            raise ValidationError(f"Employee {emp.name} has no linked account.")

        message = "Successfully deleted login account."
        try:
            self._auth.delete_user(emp.user_id)
        except NotFoundError:
            message = "The login account was not found. Unlinking from employee record."

        self._employees.update(emp.doc_id, {}, unset=("userId",))
        self._audit.record(
            "Delete Login", actor, {"employeeDocId": emp.doc_id, "employeeName": emp.name, "userId": emp.user_id}
        )
        return message
