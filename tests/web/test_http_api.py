from __future__ import annotations

from datetime import datetime

import pytest

from src.hr_assistant.hr_assistant.accounts.model import AuthAccount
from src.hr_assistant.hr_assistant.accounts.service import AccountService, AuthService
from src.hr_assistant.hr_assistant.container import Container
from src.hr_assistant.hr_assistant.core.enums import Role
from src.hr_assistant.hr_assistant.database.feed import ChangeFeed
from src.hr_assistant.hr_assistant.main import create_app
from src.hr_assistant.hr_assistant.settings.model import Holiday
from src.hr_assistant.hr_assistant.settings.service import SettingsService
from src.hr_assistant.hr_assistant.system_log.service import SystemLogService

NOW = datetime(2024, 6, 20, 9, 15)


class FakeAuth:
    ACCOUNTS = {
        ("admin@example.com", "admin123"): AuthAccount(uid="u1", email="admin@example.com", display_name="Admin", role=Role.ADMIN),
        ("sara@example.com", "secret1"): AuthAccount(uid="u2", email="sara@example.com", display_name="Sara", role=Role.EMPLOYEE),
    }

    def verify(self, email, password):
        return self.ACCOUNTS.get((email, password))


class NoEmployees:
    def find_by_user_id(self, user_id):
        return None

    def distinct_values(self, field):
        return []


class FakeSettings:
    def get_weekend_days(self):
        return None

    def get_standard_hours(self):
        return None


class FakeHolidays:
    def __init__(self):
        self.rows = []

    def list_all(self):
        return list(self.rows)

    def find_on(self, day):
        return next((h for h in self.rows if h.date == day), None)

    def add(self, *, name, day, created_at):
        self.rows.append(Holiday(holiday_id=f"h{len(self.rows) + 1}", name=name, date=day, created_at=created_at))
        return self.rows[-1].holiday_id


class FakeLeaveService:
    def __init__(self, feed):
        self._feed = feed

    def subscribe_pending(self):
        return self._feed.subscribe("leaveRequests", lambda: [])


class FakeLogs:
    def __init__(self):
        self.actions = []

    def append(self, *, action, **fields):
        self.actions.append(action)
        return str(len(self.actions))


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    logs, employees = FakeLogs(), NoEmployees()
    audit = SystemLogService(logs, clock=lambda: NOW)
    feed = ChangeFeed()
    container = Container(
        conn=None,
        feed=feed,
        auth_provider=FakeAuth(),
        system_log_service=audit,
        auth_service=AuthService(FakeAuth(), employees),
        account_service=AccountService(FakeAuth(), employees, audit),
        employee_service=None,
        settings_service=SettingsService(
            FakeSettings(), FakeHolidays(), None, employees, None, audit, clock=lambda: NOW
        ),
        attendance_service=None,
        leave_service=FakeLeaveService(feed),
        payroll_service=None,
        job_service=None,
    )
    flask_app = create_app(container=container)
    flask_app.config["AUDIT_ACTIONS"] = logs.actions
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email="admin@example.com", password="admin123"):
    return client.post("/login", json={"email": email, "password": password})


def test_protected_route_requires_login(client):
    res = client.get("/api/settings")

    assert res.status_code == 401
    assert res.get_json()["errors"] == {"form": ["Please sign in to continue."]}


def test_login_sets_session(client):
    res = login(client)

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["user"]["role"] == "admin"

    me = client.get("/api/me").get_json()
    assert me["email"] == "admin@example.com"
    assert me["employeeDocId"] is None


def test_bad_credentials(client):
    res = login(client, password="nope")

    assert res.status_code == 400
    assert res.get_json()["message"] == "Invalid email or password."


def test_invalid_login_form_returns_field_errors(client):
    res = client.post("/login", json={"email": "not-an-email"})

    assert res.status_code == 400
    errors = res.get_json()["errors"]
    assert set(errors) == {"email", "password"}
    assert errors["password"] == ["This field is required."]


def test_settings_defaults(client):
    login(client)

    assert client.get("/api/settings").get_json() == {"weekendDays": [5, 6], "standardHours": 8.0}


def test_employee_cannot_manage_holidays(client):
    login(client, "sara@example.com", "secret1")

    res = client.post("/api/holidays", json={"name": "Eid", "date": "2024-06-17"})

    assert res.status_code == 403


def test_add_and_list_holidays(app, client):
    login(client)

    res = client.post("/api/holidays", json={"name": "Eid", "date": "2024-06-17"})
    assert res.status_code == 200
    assert res.get_json()["data"] == {"holidayId": "h1"}

    holidays = client.get("/api/holidays").get_json()["holidays"]
    assert holidays == [
        {"holiday_id": "h1", "name": "Eid", "date": "2024-06-17", "created_at": "2024-06-20T09:15:00"}
    ]
    assert app.config["AUDIT_ACTIONS"] == ["Add Holiday"]


def test_unknown_reference_list_is_404(client):
    login(client)

    res = client.get("/api/lists/colours")

    assert res.status_code == 404
    assert res.get_json()["message"] == "List not found."


def test_logout_clears_session(client):
    login(client)
    client.post("/logout")

    assert client.get("/api/me").status_code == 401


def test_pending_stream_subscribes_only_while_read(app, client):
    feed = app.extensions["container"].feed
    login(client)

    res = client.get("/api/leave/pending/stream", buffered=False)
    assert res.status_code == 200
    assert res.mimetype == "text/event-stream"
    assert feed.subscriber_count("leaveRequests") == 0

    chunk = next(iter(res.response))
    assert chunk.startswith(b"data: ")
    assert feed.subscriber_count("leaveRequests") == 1

    res.close()
    assert feed.subscriber_count("leaveRequests") == 0


def test_unread_pending_stream_leaves_no_subscription(app, client):
    feed = app.extensions["container"].feed
    login(client)

    client.get("/api/leave/pending/stream", buffered=False).close()

    assert feed.subscriber_count("leaveRequests") == 0
