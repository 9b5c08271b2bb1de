from __future__ import annotations

from flask import Flask, Response, jsonify, request, stream_with_context

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import (
    current_actor,
    current_employee_doc_id,
    form_payload,
    login_required,
    respond,
    roles_required,
    scope_to_self,
)
from ..container import Container
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from .forms import DeleteLeaveForm, EditLeaveForm, SubmitLeaveForm, UpdateLeaveStatusForm


def _status_arg():
    raw = request.args.get("status")
    if not raw:
        return None
    try:
        return LeaveStatus(raw)
    except ValueError:
        raise ValidationError("Unknown leave status.", {"status": ["Unknown leave status."]})


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        payload = scope_to_self(form_payload(), "requestingEmployeeDocId")
        result = handle_form(
            lambda: service.submit(validate_form(SubmitLeaveForm, payload), actor=current_actor()),
            success="Leave request submitted successfully.",
            failure="Failed to submit leave request. An unexpected error occurred.",
            data=lambda req: {"request": req},
        )
        return respond(result)

    @app.route("/api/leave/mine", methods=["GET"], endpoint="my_leave_requests")
    @login_required
    def my_leave_requests():
        employee_doc_id = current_employee_doc_id()
        if not employee_doc_id:
            raise NotFoundError("No employee profile is linked to this account.")
        return jsonify({"requests": service.list_mine(employee_doc_id, status=_status_arg())})

    @app.route("/api/leave/all", methods=["GET"], endpoint="all_leave_requests")
    @roles_required(Role.ADMIN, Role.HR)
    def all_leave_requests():
        return jsonify({"requests": service.list_all(status=_status_arg())})

    @app.route("/api/leave/<request_id>", methods=["GET"], endpoint="get_leave_request")
    @login_required
    def get_leave_request(request_id: str):
        req = service.get(request_id)
        if current_actor().role == Role.EMPLOYEE.value and req.requesting_employee_doc_id != current_employee_doc_id():
            raise NotFoundError("Leave request not found.")
        return jsonify({"request": req})

    @app.route("/api/leave/status", methods=["POST"], endpoint="update_leave_status")
    @roles_required(Role.ADMIN, Role.HR)
    def update_leave_status():
        payload = form_payload()
        result = handle_form(
            lambda: service.update_status(validate_form(UpdateLeaveStatusForm, payload), actor=current_actor()),
            success=lambda req: f"Leave request has been {req.status.value.lower()}.",
            failure="Failed to update leave request. An unexpected error occurred.",
            data=lambda req: {"request": req},
        )
        return respond(result)

    @app.route("/api/leave/edit", methods=["POST"], endpoint="edit_leave")
    @roles_required(Role.ADMIN, Role.HR)
    def edit_leave():
        payload = form_payload()
        result = handle_form(
            lambda: service.edit(validate_form(EditLeaveForm, payload), actor=current_actor()),
            success="Leave request updated and set back to Pending.",
            failure="Failed to edit leave request. An unexpected error occurred.",
            data=lambda req: {"request": req},
        )
        return respond(result)

    @app.route("/api/leave/delete", methods=["POST"], endpoint="delete_leave")
    @roles_required(Role.ADMIN, Role.HR)
    def delete_leave():
        payload = form_payload()
        result = handle_form(
            lambda: service.delete(validate_form(DeleteLeaveForm, payload).request_id, actor=current_actor()),
            success="Leave request deleted successfully.",
            failure="Failed to delete leave request. An unexpected error occurred.",
        )
        return respond(result)

    @app.route("/api/leave/pending/stream", methods=["GET"], endpoint="pending_leave_stream")
    @roles_required(Role.ADMIN, Role.HR)
    def pending_leave_stream():
        def events():
            # subscribed only once the body is read; closing the response closes it
            with service.subscribe_pending() as subscription:
                for snapshot in subscription.snapshots(heartbeat=15.0):
                    if snapshot is None:
                        yield ": keep-alive\n\n"
                    else:
                        yield f"data: {app.json.dumps({'requests': list(snapshot)})}\n\n"

        return Response(
            stream_with_context(events()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
