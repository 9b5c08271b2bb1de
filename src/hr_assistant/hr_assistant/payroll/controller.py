from __future__ import annotations

from flask import Flask, jsonify

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import current_actor, form_payload, query_args, respond, roles_required, send_download
from ..container import Container
from ..core.enums import Role
from ..reports.export import (
    PDF_MIMETYPE,
    XLSX_MIMETYPE,
    annual_report_rows,
    annual_report_to_excel,
    annual_report_to_pdf,
)
from .forms import MonthQuery, PayrollForm, YearQuery

STAFF = (Role.ADMIN, Role.HR)


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll", methods=["POST"], endpoint="save_payroll")
    @roles_required(*STAFF)
    def save_payroll():
        payload = form_payload()
        result = handle_form(
            lambda: service.save(validate_form(PayrollForm, payload), actor=current_actor()),
            success=lambda saved: (
                f"Payroll for {payload.get('employeeName')} ({payload.get('monthYear')}) "
                f"{'saved' if saved.created else 'updated'} successfully."
            ),
            failure="Failed to save payroll. An unexpected error occurred.",
            data=lambda saved: {"recordId": saved.record_id, "created": saved.created, "figures": saved.figures},
        )
        return respond(result)

    @app.route("/api/payroll/existing", methods=["GET"], endpoint="existing_payroll")
    @roles_required(*STAFF)
    def existing_payroll():
        q = query_args(MonthQuery)
        return jsonify({"payroll": service.existing(q.employee_doc_id, q.month_year)})

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @roles_required(*STAFF)
    def payroll_summary():
        q = query_args(MonthQuery)
        return jsonify({"summary": service.monthly_summary(q.employee_doc_id, q.month_year)})

    @app.route("/api/reports/annual", methods=["GET"], endpoint="annual_report")
    @roles_required(*STAFF)
    def annual_report():
        report = service.annual_report(query_args(YearQuery).year)
        return jsonify(
            {
                "year": report.year,
                "employeeCount": report.employee_count,
                "aggregateNetSalary": report.aggregate_net_salary,
                "aggregateWorkHours": report.aggregate_work_hours,
                "rows": report.rows,
                "display": annual_report_rows(report),
            }
        )

    @app.route("/api/reports/annual.xlsx", methods=["GET"], endpoint="annual_report_xlsx")
    @roles_required(*STAFF)
    def annual_report_xlsx():
        report = service.annual_report(query_args(YearQuery).year)
        return send_download(annual_report_to_excel(report), f"payroll_report_{report.year}.xlsx", XLSX_MIMETYPE)

    @app.route("/api/reports/annual.pdf", methods=["GET"], endpoint="annual_report_pdf")
    @roles_required(*STAFF)
    def annual_report_pdf():
        report = service.annual_report(query_args(YearQuery).year)
        return send_download(annual_report_to_pdf(report), f"payroll_report_{report.year}.pdf", PDF_MIMETYPE)
