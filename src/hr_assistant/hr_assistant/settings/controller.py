from __future__ import annotations

from flask import Flask, jsonify

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import current_actor, form_payload, login_required, respond, roles_required
from ..container import Container
from ..core.constants import REFERENCE_LISTS
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .forms import DeleteHolidayForm, HolidayForm, ManageListItemForm, SyncListForm, WeekendForm, WorkdayForm

STAFF = (Role.ADMIN, Role.HR)


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        return jsonify({"weekendDays": service.weekend_days(), "standardHours": service.standard_hours()})

    @app.route("/api/settings/weekend", methods=["POST"], endpoint="update_weekend")
    @roles_required(*STAFF)
    def update_weekend():
        payload = form_payload(list_fields=("weekend",))
        result = handle_form(
            lambda: service.update_weekend(validate_form(WeekendForm, payload), actor=current_actor()),
            success="Weekend settings updated successfully.",
            failure="Failed to update weekend settings.",
            data=lambda days: {"weekendDays": days},
        )
        return respond(result)

    @app.route("/api/settings/workday", methods=["POST"], endpoint="update_workday")
    @roles_required(*STAFF)
    def update_workday():
        payload = form_payload()
        result = handle_form(
            lambda: service.update_workday(validate_form(WorkdayForm, payload), actor=current_actor()),
            success="Workday settings updated successfully.",
            failure="Failed to update workday settings.",
            data=lambda hours: {"standardHours": hours},
        )
        return respond(result)

    @app.route("/api/holidays", methods=["GET"], endpoint="list_holidays")
    @login_required
    def list_holidays():
        return jsonify({"holidays": service.list_holidays()})

    @app.route("/api/holidays", methods=["POST"], endpoint="add_holiday")
    @roles_required(*STAFF)
    def add_holiday():
        payload = form_payload()
        result = handle_form(
            lambda: service.add_holiday(validate_form(HolidayForm, payload), actor=current_actor()),
            success=f'Holiday "{payload.get("name")}" added successfully.',
            failure="Failed to add holiday. An unexpected error occurred.",
            data=lambda holiday_id: {"holidayId": holiday_id},
        )
        return respond(result)

    @app.route("/api/holidays/delete", methods=["POST"], endpoint="delete_holiday")
    @roles_required(*STAFF)
    def delete_holiday():
        payload = form_payload()
        result = handle_form(
            lambda: service.delete_holiday(
                validate_form(DeleteHolidayForm, payload).holiday_id, actor=current_actor()
            ),
            success="Holiday deleted successfully.",
            failure="Failed to delete holiday.",
        )
        return respond(result)

    @app.route("/api/lists/<list_name>", methods=["GET"], endpoint="list_items")
    @login_required
    def list_items(list_name: str):
        if list_name not in REFERENCE_LISTS:
            raise NotFoundError("List not found.")
        return jsonify({"items": service.list_items(list_name)})

    @app.route("/api/lists", methods=["POST"], endpoint="manage_list_item")
    @roles_required(*STAFF)
    def manage_list_item():
        payload = form_payload()
        result = handle_form(
            lambda: service.manage_list_item(validate_form(ManageListItemForm, payload), actor=current_actor()),
            success=lambda message: message,
            failure="An unexpected error occurred. Please try again.",
        )
        return respond(result)

    @app.route("/api/lists/sync", methods=["POST"], endpoint="sync_list")
    @roles_required(Role.ADMIN)
    def sync_list():
        payload = form_payload()
        result = handle_form(
            lambda: service.sync_list(validate_form(SyncListForm, payload).target, actor=current_actor()),
            success=lambda message: message,
            failure="Failed to sync the list. An unexpected error occurred.",
        )
        return respond(result)
