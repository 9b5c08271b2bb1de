from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..attendance.repository import AttendanceLogRepository
from ..common.datetime_utils import Clock, now_local
from ..core.constants import DEFAULT_STANDARD_HOURS, DEFAULT_WEEKEND_DAYS
from ..core.enums import ListOperation
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..system_log.model import Actor
from ..system_log.service import SystemLogService
from .forms import HolidayForm, ManageListItemForm, WeekendForm, WorkdayForm
from .model import Holiday, ListItem, WorkCalendar
from .repository import HolidayRepository, ReferenceListRepository, SettingsRepository

logger = logging.getLogger(__name__)

# target list -> (source, field)
SYNC_SOURCES = {
    "groupNames": ("employee", "groupName"),
    "roles": ("employee", "role"),
    "campuses": ("employee", "campus"),
    "stage": ("employee", "stage"),
    "subjects": ("employee", "subject"),
    "reportLines1": ("employee", "reportLine1"),
    "machineNames": ("attendance_log", "machine"),
}


class SettingsService:
    def __init__(
        self,
        settings: SettingsRepository,
        holidays: HolidayRepository,
        lists: ReferenceListRepository,
        employees: EmployeeRepository,
        attendance_log: AttendanceLogRepository,
        audit: SystemLogService,
        *,
        clock: Clock = now_local,
    ):
        self._settings = settings
        self._holidays = holidays
        self._lists = lists
        self._employees = employees
        self._attendance_log = attendance_log
        self._audit = audit
        self._clock = clock

    # -------- Calendar --------
    def weekend_days(self) -> list[int]:
        days = self._settings.get_weekend_days()
        return list(days) if days is not None else list(DEFAULT_WEEKEND_DAYS)

    def standard_hours(self) -> float:
        hours = self._settings.get_standard_hours()
        return hours if hours is not None else float(DEFAULT_STANDARD_HOURS)

    def work_calendar(self, start: date, end: date) -> WorkCalendar:
        return WorkCalendar(
            weekend_days=frozenset(self.weekend_days()),
            holidays=frozenset(h.date for h in self._holidays.list_between(start, end)),
        )

    def update_weekend(self, form: WeekendForm, *, actor: Actor) -> list[int]:
        self._settings.set_weekend_days(form.weekend)
        self._audit.record("Update Weekend Settings", actor, {"newWeekendDays": form.weekend})
        return form.weekend

    def update_workday(self, form: WorkdayForm, *, actor: Actor) -> float:
        self._settings.set_standard_hours(form.hours)
        self._audit.record("Update Workday Settings", actor, {"newStandardHours": form.hours})
        return form.hours

    # -------- Holidays --------
    def list_holidays(self) -> Sequence[Holiday]:
        return self._holidays.list_all()

    def add_holiday(self, form: HolidayForm, *, actor: Actor) -> str:
        if self._holidays.find_on(form.holiday_date):
            raise ValidationError("A holiday on this date already exists.")
        holiday_id = self._holidays.add(name=form.name, day=form.holiday_date, created_at=self._clock())
        self._audit.record(
            "Add Holiday", actor, {"holidayName": form.name, "holidayDate": form.holiday_date.isoformat()}
        )
        return holiday_id

    def delete_holiday(self, holiday_id: str, *, actor: Actor) -> None:
        if not self._holidays.delete(holiday_id):
            raise NotFoundError("Holiday not found.")
        self._audit.record("Delete Holiday", actor, {"holidayId": holiday_id})

    # -------- Reference lists --------
    def list_items(self, list_name: str) -> Sequence[ListItem]:
        return self._lists.list_items(list_name)

    def manage_list_item(self, form: ManageListItemForm, *, actor: Actor) -> str:
        """Add, rename or delete one list item; returns the message for the form."""

        list_name, name, item_id = form.collection_name, form.name, form.id
        details = {"operation": form.operation.value, "collectionName": list_name}

        if form.operation == ListOperation.ADD:
            if not name:
                raise ValidationError("Name is required.", {"name": ["Name is required."]})
            if self._lists.find_by_name(list_name, name):
                raise ValidationError(f'An item with the name "{name}" already exists.')
            self._lists.add(list_name, name)
            self._audit.record("Manage List Item", actor, {**details, "itemName": name})
            return f'"{name}" added successfully.'

        if form.operation == ListOperation.UPDATE:
            if not item_id or not name:
                raise ValidationError("ID and name are required for update.")
            existing = self._lists.find_by_name(list_name, name)
            if existing and existing.item_id != item_id:
                raise ValidationError(f'An item with the name "{name}" already exists.')
            if not self._lists.rename(list_name, item_id, name):
                raise NotFoundError("Item not found.")
            self._audit.record("Manage List Item", actor, {**details, "itemId": item_id, "newItemName": name})
            return f'Item updated to "{name}" successfully.'

        if not item_id:
            raise ValidationError("ID is required for deletion.")
        if not self._lists.delete(list_name, item_id):
            raise NotFoundError("Item not found.")
        self._audit.record("Manage List Item", actor, {**details, "itemId": item_id})
        return "Item deleted successfully."

    def sync_list(self, target: str, *, actor: Actor) -> str:
        """Add distinct source field values missing from a reference list."""

        source, field = SYNC_SOURCES[target]
        if source == "attendance_log":
            values = self._attendance_log.distinct_values(field)
        else:
            values = self._employees.distinct_values(field)

        existing = {item.name for item in self._lists.list_items(target)}
        new_values = sorted({str(v).strip() for v in values if v and str(v).strip()} - existing)
        if not new_values:
            return f'The "{target}" list is already up-to-date.'

        added = self._lists.add_many(target, new_values)
        self._audit.record(
            "Sync List", actor, {"sourceCollection": source, "targetCollection": target, "itemsAdded": added}
        )
        return f'Successfully added {added} new item(s) to the "{target}" list.'
