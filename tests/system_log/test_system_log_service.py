from __future__ import annotations

from datetime import datetime

import pytest

from src.hr_assistant.hr_assistant.core.exceptions import NotFoundError
from src.hr_assistant.hr_assistant.system_log.model import Actor, SystemLogEntry
from src.hr_assistant.hr_assistant.system_log.service import SystemLogService

NOW = datetime(2024, 6, 20, 9, 15)


class FakeLogRepo:
    def __init__(self, fail=False):
        self.fail = fail
        self.rows: dict[str, SystemLogEntry] = {}
        self.last_limit = None

    def append(self, *, action, timestamp, actor_id, actor_email, actor_role, details, changes=None):
        if self.fail:
            raise RuntimeError("write failed")
        log_id = f"l{len(self.rows) + 1}"
        self.rows[log_id] = SystemLogEntry(
            log_id=log_id,
            action=action,
            timestamp=timestamp,
            actor_id=actor_id,
            actor_email=actor_email,
            actor_role=actor_role,
            details=details,
            changes=changes,
        )
        return log_id

    def list_recent(self, *, limit=100):
        self.last_limit = limit
        return list(self.rows.values())[:limit]

    def get(self, log_id):
        return self.rows.get(log_id)


def test_record_stores_actor_and_timestamp():
    repo = FakeLogRepo()
    service = SystemLogService(repo, clock=lambda: NOW)

    log_id = service.record("Add Holiday", Actor("u1", "admin@example.com", "admin"), {"holidayName": "Eid"})

    entry = repo.rows[log_id]
    assert entry.timestamp == NOW
    assert entry.actor_email == "admin@example.com"
    assert entry.details == {"holidayName": "Eid"}
    assert entry.changes is None


def test_record_keeps_old_and_new_data():
    repo = FakeLogRepo()
    service = SystemLogService(repo, clock=lambda: NOW)

    log_id = service.record("Update Employee", None, old_data={"title": "Teacher"}, new_data={"title": "Head"})

    entry = repo.rows[log_id]
    assert entry.changes == {"oldData": {"title": "Teacher"}, "newData": {"title": "Head"}}
    assert entry.actor_id is None


def test_record_never_raises(caplog):
    service = SystemLogService(FakeLogRepo(fail=True), clock=lambda: NOW)

    assert service.record("Delete Holiday", Actor()) is None
    assert "Failed to write system log entry" in caplog.text


def test_list_recent_clamps_limit():
    repo = FakeLogRepo()
    service = SystemLogService(repo, clock=lambda: NOW)

    service.list_recent(limit=0)

    assert repo.last_limit == 1


def test_get_unknown_entry():
    with pytest.raises(NotFoundError, match="Log entry not found."):
        SystemLogService(FakeLogRepo(), clock=lambda: NOW).get("nope")
