from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Sequence

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from ..common.datetime_utils import as_date, parse_clock_time
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from ..database.mongo_base import to_bson_date
from .model import AttendanceEvent, AttendanceRecord
from .repository import AttendanceLogRepository, AttendanceRepository

logger = logging.getLogger(__name__)

RECORDS = "attendanceRecords"
TERMINAL_LOG = "attendance_log"


def _to_record(doc: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(doc["_id"]),
        employee_doc_id=doc.get("employeeDocId", ""),
        employee_name=doc.get("employeeName", ""),
        date=as_date(doc.get("date")),
        clock_in_time=doc.get("clockInTime"),
        clock_out_time=doc.get("clockOutTime"),
        work_duration_minutes=doc.get("workDurationMinutes"),
        status=AttendanceStatus(doc.get("status") or AttendanceStatus.CLOCKED_IN.value),
    )


def _day_range(day: date) -> dict:
    start = to_bson_date(day)
    return {"$gte": start, "$lt": start + timedelta(days=1)}


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(RECORDS)

    def _changed(self) -> None:
        if self._feed:
            self._feed.publish(RECORDS)

    def get(self, record_id: str) -> Optional[AttendanceRecord]:
        if not ObjectId.is_valid(str(record_id)):
            return None
        doc = self._col.find_one({"_id": ObjectId(str(record_id))})
        return _to_record(doc) if doc else None

    def get_for_employee_on(self, employee_doc_id: str, day: date) -> Optional[AttendanceRecord]:
        doc = self._col.find_one({"employeeDocId": employee_doc_id, "date": _day_range(day)})
        return _to_record(doc) if doc else None

    def get_open(self, employee_doc_id: str, day: date) -> Optional[AttendanceRecord]:
        cur = (
            self._col.find({"employeeDocId": employee_doc_id, "date": _day_range(day), "clockOutTime": None})
            .sort("clockInTime", DESCENDING)
            .limit(1)
        )
        docs = list(cur)
        return _to_record(docs[0]) if docs else None

    def create_clock_in(self, *, employee_doc_id: str, employee_name: str, day: date, clock_in_time: datetime) -> str:
        try:
            res = self._col.insert_one(
                {
                    "employeeDocId": employee_doc_id,
                    "employeeName": employee_name,
                    "date": to_bson_date(day),
                    "clockInTime": clock_in_time,
                    "clockOutTime": None,
                    "workDurationMinutes": None,
                    "status": AttendanceStatus.CLOCKED_IN.value,
                }
            )
        except DuplicateKeyError:
            raise ConflictError(f"{employee_name} is already clocked in today.")
        self._changed()
        return str(res.inserted_id)

    def complete(self, record_id: str, *, clock_out_time: datetime, work_duration_minutes: int) -> bool:
        if not ObjectId.is_valid(str(record_id)):
            return False
        res = self._col.update_one(
            {"_id": ObjectId(str(record_id)), "clockOutTime": None},
            {
                "$set": {
                    "clockOutTime": clock_out_time,
                    "workDurationMinutes": int(work_duration_minutes),
                    "status": AttendanceStatus.COMPLETED.value,
                    "lastUpdatedAt": clock_out_time,
                }
            },
        )
        self._changed()
        return res.modified_count == 1

    def list_completed(self, employee_doc_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        cur = self._col.find(
            {
                "employeeDocId": employee_doc_id,
                "status": AttendanceStatus.COMPLETED.value,
                "date": {"$gte": to_bson_date(start), "$lt": to_bson_date(end) + timedelta(days=1)},
            }
        ).sort("date", ASCENDING)
        return [_to_record(d) for d in cur]


def _clock(value, doc_id) -> Optional[time]:
    try:
        return parse_clock_time(value) if value not in (None, "") else None
    except ValueError:
        logger.warning("Skipping unreadable terminal time %r in %s", value, doc_id)
        return None


def _to_event(doc: dict) -> Optional[AttendanceEvent]:
    try:
        day = as_date(doc.get("date"))
    except (TypeError, ValueError):
        day = None
    if day is None:
        logger.warning("Skipping terminal event %s without a readable date", doc.get("_id"))
        return None
    return AttendanceEvent(
        user_id=str(doc.get("userId", "")),
        employee_name=doc.get("employeeName"),
        date=day,
        check_in=_clock(doc.get("check_in"), doc.get("_id")),
        check_out=_clock(doc.get("check_out"), doc.get("_id")),
        machine=doc.get("machine"),
        event_id=str(doc["_id"]),
    )


def _date_filter(start: Optional[date], end: Optional[date]) -> dict:
    # terminal dates are stored as YYYY-MM-DD strings, which sort lexically
    cond = {}
    if start:
        cond["$gte"] = start.isoformat()
    if end:
        cond["$lte"] = end.isoformat()
    return {"date": cond} if cond else {}


class MongoAttendanceLogRepository(AttendanceLogRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _col(self):
        return self._conn.collection(TERMINAL_LOG)

    def _events(self, cursor) -> list[AttendanceEvent]:
        return [ev for ev in (_to_event(d) for d in cursor) if ev is not None]

    def list_for_user(self, user_id: str, start: date, end: date) -> Sequence[AttendanceEvent]:
        user_ids = [str(user_id)]
        if str(user_id).isdigit():
            user_ids.append(int(user_id))
        query = {"userId": {"$in": user_ids}, **_date_filter(start, end)}
        # ObjectId order is ingestion order
        return self._events(self._col.find(query).sort("_id", ASCENDING))

    def list_recent(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        machine: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[AttendanceEvent]:
        query = _date_filter(start, end)
        if machine:
            query["machine"] = machine
        cur = self._col.find(query).sort([("date", DESCENDING), ("_id", DESCENDING)]).limit(int(limit))
        return self._events(cur)

    def iter_all(self, *, batch_size: int = 5000) -> Iterator[AttendanceEvent]:
        last_id = None
        while True:
            query = {"_id": {"$gt": last_id}} if last_id is not None else {}
            docs = list(self._col.find(query).sort("_id", ASCENDING).limit(int(batch_size)))
            if not docs:
                return
            yield from self._events(docs)
            last_id = docs[-1]["_id"]

    def distinct_values(self, field: str) -> Sequence[str]:
        return [v for v in self._col.distinct(field) if v]
