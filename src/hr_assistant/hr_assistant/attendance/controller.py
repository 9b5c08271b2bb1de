from __future__ import annotations

from flask import Flask, jsonify

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import (
    current_employee_doc_id,
    form_payload,
    login_required,
    query_args,
    respond,
    roles_required,
    scope_to_self,
    send_download,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..reports.export import XLSX_MIMETYPE, daily_attendance_to_excel, terminal_log_to_excel
from .forms import ClockInForm, ClockOutForm, DateRangeQuery, TerminalLogQuery


def _daily_rows(records):
    return [
        {
            "date": r.date,
            "checkIn": r.check_in,
            "checkOut": r.check_out,
            "machine": r.machine,
            "valid": r.valid,
            "durationMinutes": r.duration_minutes,
        }
        for r in records
    ]


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        payload = scope_to_self(form_payload(), "employeeDocId")
        result = handle_form(
            lambda: service.clock_in(validate_form(ClockInForm, payload)),
            success=f"{payload.get('employeeName') or 'Employee'} clocked in successfully.",
            failure="Failed to clock in. An unexpected error occurred.",
            data=lambda record_id: {"attendanceRecordId": record_id},
        )
        return respond(result)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        payload = scope_to_self(form_payload(), "employeeDocId")
        result = handle_form(
            lambda: service.clock_out(validate_form(ClockOutForm, payload)),
            success=lambda minutes: (
                f"{payload.get('employeeName') or 'Employee'} clocked out successfully. "
                f"Worked {minutes // 60}h {minutes % 60}m."
            ),
            failure="Failed to clock out. An unexpected error occurred.",
            data=lambda minutes: {"workDurationMinutes": minutes},
        )
        return respond(result)

    @app.route("/api/attendance/open", methods=["GET"], endpoint="open_attendance")
    @login_required
    def open_attendance():
        employee_doc_id = current_employee_doc_id()
        if not employee_doc_id:
            raise NotFoundError("No employee profile is linked to this account.")
        return jsonify({"record": service.open_record(employee_doc_id)})

    @app.route("/api/attendance/employees/<doc_id>/daily", methods=["GET"], endpoint="employee_daily_log")
    @roles_required(Role.ADMIN, Role.HR)
    def employee_daily_log(doc_id: str):
        q = query_args(DateRangeQuery)
        return jsonify({"days": _daily_rows(service.employee_daily_log(doc_id, q.start, q.end))})

    @app.route("/api/attendance/me/daily", methods=["GET"], endpoint="my_daily_log")
    @login_required
    def my_daily_log():
        employee_doc_id = current_employee_doc_id()
        if not employee_doc_id:
            raise NotFoundError("No employee profile is linked to this account.")
        q = query_args(DateRangeQuery)
        return jsonify({"days": _daily_rows(service.employee_daily_log(employee_doc_id, q.start, q.end))})

    @app.route("/api/attendance/employees/<doc_id>/daily.xlsx", methods=["GET"], endpoint="export_daily_log")
    @roles_required(Role.ADMIN, Role.HR)
    def export_daily_log(doc_id: str):
        q = query_args(DateRangeQuery)
        employee = container.employee_service.get(doc_id)
        records = service.employee_daily_log(doc_id, q.start, q.end)
        buffer = daily_attendance_to_excel(records, employee_name=employee.name)
        filename = f"attendance_{employee.employee_id}_{q.start.isoformat()}_{q.end.isoformat()}.xlsx"
        return send_download(buffer, filename, XLSX_MIMETYPE)

    @app.route("/api/attendance/log", methods=["GET"], endpoint="terminal_log")
    @roles_required(Role.ADMIN, Role.HR)
    def terminal_log():
        return jsonify({"events": service.terminal_log(query_args(TerminalLogQuery))})

    @app.route("/api/attendance/log.xlsx", methods=["GET"], endpoint="export_terminal_log")
    @roles_required(Role.ADMIN, Role.HR)
    def export_terminal_log():
        return send_download(terminal_log_to_excel(service.iter_terminal_log()), "attendance_log.xlsx", XLSX_MIMETYPE)
