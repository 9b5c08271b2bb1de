from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_assistant.hr_assistant.common.validators import validate_form
from src.hr_assistant.hr_assistant.core.exceptions import ValidationError
from src.hr_assistant.hr_assistant.settings.forms import HolidayForm, ManageListItemForm, WeekendForm
from src.hr_assistant.hr_assistant.settings.model import Holiday, ListItem
from src.hr_assistant.hr_assistant.settings.service import SettingsService
from src.hr_assistant.hr_assistant.system_log.model import Actor


class FakeSettings:
    def __init__(self, weekend=None, hours=None):
        self.weekend = weekend
        self.hours = hours

    def get_weekend_days(self):
        return self.weekend

    def set_weekend_days(self, days):
        self.weekend = list(days)

    def get_standard_hours(self):
        return self.hours

    def set_standard_hours(self, hours):
        self.hours = hours


class FakeHolidays:
    def __init__(self):
        self.rows: dict[str, Holiday] = {}

    def list_all(self):
        return sorted(self.rows.values(), key=lambda h: h.date)

    def list_between(self, start, end):
        return [h for h in self.list_all() if start <= h.date <= end]

    def find_on(self, day):
        return next((h for h in self.rows.values() if h.date == day), None)

    def get(self, holiday_id):
        return self.rows.get(holiday_id)

    def add(self, *, name, day, created_at):
        holiday_id = f"h{len(self.rows) + 1}"
        self.rows[holiday_id] = Holiday(holiday_id=holiday_id, name=name, date=day, created_at=created_at)
        return holiday_id

    def delete(self, holiday_id):
        return self.rows.pop(holiday_id, None) is not None


class FakeLists:
    def __init__(self):
        self.items: dict[str, list[ListItem]] = {}
        self._seq = 0

    def list_items(self, list_name):
        return sorted(self.items.get(list_name, []), key=lambda i: i.name)

    def find_by_name(self, list_name, name):
        return next((i for i in self.items.get(list_name, []) if i.name == name), None)

    def add(self, list_name, name):
        self._seq += 1
        item = ListItem(item_id=f"i{self._seq}", name=name)
        self.items.setdefault(list_name, []).append(item)
        return item.item_id

    def rename(self, list_name, item_id, name):
        items = self.items.get(list_name, [])
        for n, item in enumerate(items):
            if item.item_id == item_id:
                items[n] = ListItem(item_id=item_id, name=name)
                return True
        return False

    def delete(self, list_name, item_id):
        items = self.items.get(list_name, [])
        before = len(items)
        self.items[list_name] = [i for i in items if i.item_id != item_id]
        return len(self.items[list_name]) < before

    def add_many(self, list_name, names):
        names = list(names)
        for name in names:
            self.add(list_name, name)
        return len(names)


class FakeDistinct:
    def __init__(self, values=None):
        self.values = values or {}

    def distinct_values(self, field):
        return self.values.get(field, [])


class FakeAudit:
    def __init__(self):
        self.entries = []

    def record(self, action, actor, details=None, **kwargs):
        self.entries.append((action, details))


ACTOR = Actor(actor_id="u-admin", email="admin@example.com", role="admin")


def make_service(*, settings=None, employees=None, machines=None):
    audit = FakeAudit()
    service = SettingsService(
        settings or FakeSettings(),
        FakeHolidays(),
        FakeLists(),
        employees or FakeDistinct(),
        machines or FakeDistinct(),
        audit,
        clock=lambda: datetime(2024, 6, 20, 9, 15),
    )
    return service, audit


def test_defaults_when_nothing_is_stored():
    service, _ = make_service()

    assert service.weekend_days() == [5, 6]
    assert service.standard_hours() == 8.0


def test_weekend_update_is_sorted_and_audited():
    settings = FakeSettings()
    service, audit = make_service(settings=settings)

    service.update_weekend(validate_form(WeekendForm, {"weekend": [6, 5, 6]}), actor=ACTOR)

    assert settings.weekend == [5, 6]
    assert audit.entries == [("Update Weekend Settings", {"newWeekendDays": [5, 6]})]


def test_weekend_day_out_of_range_is_a_field_error():
    with pytest.raises(ValidationError) as exc:
        validate_form(WeekendForm, {"weekend": [7]})

    assert "weekend" in exc.value.field_errors


def test_work_calendar_uses_sunday_zero_numbering():
    service, _ = make_service(settings=FakeSettings(weekend=[5, 6]))
    service.add_holiday(validate_form(HolidayForm, {"name": "Eid", "date": "2024-06-17"}), actor=ACTOR)

    calendar = service.work_calendar(date(2024, 6, 1), date(2024, 6, 30))

    assert not calendar.is_working_day(date(2024, 6, 21))  # Friday
    assert not calendar.is_working_day(date(2024, 6, 22))  # Saturday
    assert calendar.is_working_day(date(2024, 6, 23))  # Sunday
    assert not calendar.is_working_day(date(2024, 6, 17))


def test_only_one_holiday_per_date():
    service, _ = make_service()
    form = validate_form(HolidayForm, {"name": "Eid", "date": "2024-06-17"})
    service.add_holiday(form, actor=ACTOR)

    with pytest.raises(ValidationError, match="already exists"):
        service.add_holiday(validate_form(HolidayForm, {"name": "Other", "date": "2024-06-17"}), actor=ACTOR)


def test_manage_list_rejects_duplicate_names():
    service, _ = make_service()
    add = {"collectionName": "roles", "operation": "add", "name": "Teacher"}
    assert service.manage_list_item(validate_form(ManageListItemForm, add), actor=ACTOR) == '"Teacher" added successfully.'

    with pytest.raises(ValidationError, match='"Teacher" already exists'):
        service.manage_list_item(validate_form(ManageListItemForm, add), actor=ACTOR)


def test_manage_list_update_and_delete():
    service, audit = make_service()
    service.manage_list_item(
        validate_form(ManageListItemForm, {"collectionName": "roles", "operation": "add", "name": "Teacher"}),
        actor=ACTOR,
    )
    item_id = service.list_items("roles")[0].item_id

    message = service.manage_list_item(
        validate_form(
            ManageListItemForm, {"collectionName": "roles", "operation": "update", "id": item_id, "name": "Lecturer"}
        ),
        actor=ACTOR,
    )
    assert message == 'Item updated to "Lecturer" successfully.'
    assert [i.name for i in service.list_items("roles")] == ["Lecturer"]

    service.manage_list_item(
        validate_form(ManageListItemForm, {"collectionName": "roles", "operation": "delete", "id": item_id}),
        actor=ACTOR,
    )
    assert service.list_items("roles") == []
    assert [a for a, _ in audit.entries] == ["Manage List Item"] * 3


def test_report_line_items_must_be_emails():
    with pytest.raises(ValidationError) as exc:
        validate_form(ManageListItemForm, {"collectionName": "reportLines1", "operation": "add", "name": "bob"})

    assert exc.value.field_errors == {"name": ["Must be a valid email."]}


def test_sync_list_adds_only_missing_values():
    employees = FakeDistinct({"campus": ["North", "South", " ", None, "North"]})
    service, audit = make_service(employees=employees)
    service.manage_list_item(
        validate_form(ManageListItemForm, {"collectionName": "campuses", "operation": "add", "name": "North"}),
        actor=ACTOR,
    )

    message = service.sync_list("campuses", actor=ACTOR)

    assert message == 'Successfully added 1 new item(s) to the "campuses" list.'
    assert [i.name for i in service.list_items("campuses")] == ["North", "South"]
    assert service.sync_list("campuses", actor=ACTOR) == 'The "campuses" list is already up-to-date.'
    assert audit.entries[-1][0] == "Sync List"


def test_sync_machine_names_reads_terminal_log():
    service, _ = make_service(machines=FakeDistinct({"machine": ["Gate A"]}))

    service.sync_list("machineNames", actor=ACTOR)

    assert [i.name for i in service.list_items("machineNames")] == ["Gate A"]
