from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..employees.model import Employee
from ..leave.model import LeaveRequest
from .mailer import Mailer

logger = logging.getLogger(__name__)

_TEMPLATES = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


class LeaveNotifier:
    """E-mails the reporting manager when a leave request is submitted.

    ``base_url`` is the public address of the app, used for the review link.
    """

    def __init__(self, mailer: Mailer, base_url: str):
        self._mailer = mailer
        self._base_url = (base_url or "").rstrip("/")

    def review_url(self, request_id: str) -> str:
        return f"{self._base_url}/leave/all-requests/{request_id}"

    def notify_manager(self, request: LeaveRequest, employee: Employee, manager: Optional[Employee] = None) -> bool:
        """Send the review mail; returns False when nothing could be sent."""

        to = employee.report_line1
        if not to or "@" not in to:
            logger.info("No reporting manager e-mail for %s; skipping notification", employee.name)
            return False

        context = {
            "manager_name": manager.name if manager else to,
            "employee_name": request.employee_name,
            "leave_type": request.leave_type,
            "start_date": request.start_date.isoformat(),
            "end_date": request.end_date.isoformat(),
            "number_of_days": request.number_of_days,
            "reason": request.reason,
            "review_url": self.review_url(request.request_id),
        }
        try:
            self._mailer.send(
                to=to,
                subject=f"Leave request from {request.employee_name}",
                html=_TEMPLATES.get_template("leave_request.html").render(**context),
                text=_TEMPLATES.get_template("leave_request.txt").render(**context),
            )
        except Exception:
            logger.exception("Failed to send leave notification for request %s", request.request_id)
            return False
        return True
