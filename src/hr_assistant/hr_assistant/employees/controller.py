from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import current_actor, form_payload, login_required, respond, roles_required
from ..container import Container
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from .forms import (
    CreateEmployeeForm,
    CreateEmployeeWithLoginForm,
    DeactivateEmployeeForm,
    EmployeeProfileForm,
    UpdateEmployeeForm,
)
from .importer import read_spreadsheet

STAFF = (Role.ADMIN, Role.HR)


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @roles_required(*STAFF)
    def list_employees():
        raw_status = request.args.get("status")
        try:
            status = EmployeeStatus(raw_status) if raw_status else None
        except ValueError:
            raise ValidationError("Unknown employee status.", {"status": ["Unknown employee status."]})
        return jsonify({"employees": service.list_employees(status=status)})

    @app.route("/api/employees/<doc_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(doc_id: str):
        if session.get("role") == Role.EMPLOYEE.value and session.get("employee_doc_id") != doc_id:
            raise NotFoundError("Employee not found.")
        return jsonify({"employee": service.get(doc_id)})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @roles_required(*STAFF)
    def create_employee():
        payload = form_payload()

        def _run():
            if payload.get("password"):
                return service.create_with_login(
                    validate_form(CreateEmployeeWithLoginForm, payload), actor=current_actor()
                )
            return service.create(validate_form(CreateEmployeeForm, payload), actor=current_actor())

        result = handle_form(
            _run,
            success=lambda emp: f"Employee {emp.name} created successfully.",
            failure="Failed to create employee. An unexpected error occurred.",
            data=lambda emp: {"employee": emp},
        )
        return respond(result)

    @app.route("/api/profile", methods=["POST"], endpoint="create_own_profile")
    @login_required
    def create_own_profile():
        payload = form_payload()
        result = handle_form(
            lambda: service.create_own_profile(
                validate_form(EmployeeProfileForm, payload), user_id=session["uid"], actor=current_actor()
            ),
            success="Your profile has been created.",
            failure="Failed to create your profile. An unexpected error occurred.",
            data=lambda emp: {"employee": emp},
        )
        if result.success:
            session["employee_doc_id"] = result.data["employee"].doc_id
        return respond(result)

    @app.route("/api/employees/<doc_id>", methods=["POST"], endpoint="update_employee")
    @roles_required(*STAFF)
    def update_employee(doc_id: str):
        payload = form_payload()
        result = handle_form(
            lambda: service.update(doc_id, validate_form(UpdateEmployeeForm, payload), actor=current_actor()),
            success=lambda emp: f"Employee {emp.name} updated successfully.",
            failure="Failed to update employee. An unexpected error occurred.",
            data=lambda emp: {"employee": emp},
        )
        return respond(result)

    @app.route("/api/employees/<doc_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    @roles_required(*STAFF)
    def deactivate_employee(doc_id: str):
        payload = form_payload()
        result = handle_form(
            lambda: service.deactivate(doc_id, validate_form(DeactivateEmployeeForm, payload), actor=current_actor()),
            success=lambda emp: f"Employee {emp.name} has been deactivated.",
            failure="Failed to deactivate employee. An unexpected error occurred.",
        )
        return respond(result)

    @app.route("/api/employees/<doc_id>/activate", methods=["POST"], endpoint="activate_employee")
    @roles_required(*STAFF)
    def activate_employee(doc_id: str):
        result = handle_form(
            lambda: service.activate(doc_id, actor=current_actor()),
            success=lambda emp: f"Employee {emp.name} has been reactivated.",
            failure="Failed to activate employee. An unexpected error occurred.",
        )
        return respond(result)

    @app.route("/api/employees/<doc_id>/delete", methods=["POST"], endpoint="delete_employee")
    @roles_required(*STAFF)
    def delete_employee(doc_id: str):
        result = handle_form(
            lambda: service.delete(doc_id, actor=current_actor()),
            success="Employee deleted successfully.",
            failure="Failed to delete employee. An unexpected error occurred.",
        )
        return respond(result)

    @app.route("/api/employees/import", methods=["POST"], endpoint="import_employees")
    @roles_required(*STAFF)
    def import_employees():
        def _run():
            upload = request.files.get("file")
            if upload is None or not upload.filename:
                raise ValidationError("Please choose a file to upload.", {"file": ["Please choose a file to upload."]})
            return service.import_rows(read_spreadsheet(upload.stream, upload.filename), actor=current_actor())

        result = handle_form(
            _run,
            success=lambda s: f"Import finished: {s.created} created, {s.updated} updated, {s.skipped} skipped.",
            failure="Failed to import employees. An unexpected error occurred.",
            data=lambda s: {"summary": s},
        )
        return respond(result)

    @app.route("/api/employees/deduplicate", methods=["POST"], endpoint="deduplicate_employees")
    @roles_required(Role.ADMIN)
    def deduplicate_employees():
        result = handle_form(
            lambda: service.deduplicate(actor=current_actor()),
            success=lambda removed: f"Removed {removed} duplicate or incomplete record(s).",
            failure="Failed to clean up employee records.",
            data=lambda removed: {"removed": removed},
        )
        return respond(result)
