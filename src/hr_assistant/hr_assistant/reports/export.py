from __future__ import annotations

from io import BytesIO
from typing import Iterable

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..attendance.model import AttendanceEvent, DailyAttendance
from ..core.constants import MONTH_LABELS
from ..payroll.model import AnnualReport
from .formatting import format_clock, format_currency, format_date, format_days, format_hours, format_minutes

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"

ANNUAL_COLUMNS = ["Employee Name", "Employee ID", *MONTH_LABELS, "Total Work Hours", "Total Leave Days", "Total Net Salary"]


def annual_report_rows(report: AnnualReport) -> list[list[str]]:
    rows = []
    for r in report.rows:
        rows.append(
            [
                r.employee_name,
                r.company_employee_id,
                *(format_currency(v) for v in r.monthly_net_salaries),
                format_hours(r.total_work_hours),
                format_days(r.total_leave_days),
                format_currency(r.total_net_salary),
            ]
        )
    return rows


def annual_report_frame(report: AnnualReport) -> pd.DataFrame:
    return pd.DataFrame(annual_report_rows(report), columns=ANNUAL_COLUMNS)


def _excel(frames: dict[str, pd.DataFrame]) -> BytesIO:
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for sheet, df in frames.items():
            df.to_excel(writer, index=False, sheet_name=sheet[:31])
    output.seek(0)
    return output


def annual_report_to_excel(report: AnnualReport) -> BytesIO:
    return _excel({f"Payroll {report.year}": annual_report_frame(report)})


def annual_report_to_pdf(report: AnnualReport) -> BytesIO:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), leftMargin=20, rightMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(f"Annual Payroll Report {report.year}", styles["Heading1"]),
        Paragraph(
            f"Employees: {report.employee_count} | Net salary: {format_currency(report.aggregate_net_salary)}"
            f" | Work hours: {report.aggregate_work_hours:.2f} hrs",
            styles["Normal"],
        ),
        Spacer(1, 12),
    ]

    table = Table([ANNUAL_COLUMNS, *annual_report_rows(report)], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 6),
                ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer


def daily_attendance_to_excel(records: Iterable[DailyAttendance], *, employee_name: str = "") -> BytesIO:
    df = pd.DataFrame(
        [
            {
                "Date": format_date(r.date),
                "Check In": format_clock(r.check_in),
                "Check Out": format_clock(r.check_out),
                "Worked": format_minutes(r.duration_minutes) if r.valid else "Invalid",
                "Machine": r.machine or "-",
            }
            for r in records
        ],
        columns=["Date", "Check In", "Check Out", "Worked", "Machine"],
    )
    return _excel({employee_name or "Attendance": df})


def terminal_log_to_excel(events: Iterable[AttendanceEvent]) -> BytesIO:
    df = pd.DataFrame(
        [
            {
                "Employee ID": e.user_id,
                "Name": e.employee_name or "-",
                "Date": format_date(e.date),
                "Check In": format_clock(e.check_in),
                "Check Out": format_clock(e.check_out),
                "Machine": e.machine or "-",
            }
            for e in events
        ],
        columns=["Employee ID", "Name", "Date", "Check In", "Check Out", "Machine"],
    )
    return _excel({"Attendance Log": df})
