from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from bson import ObjectId
from pymongo import ASCENDING

from ..common.datetime_utils import as_date
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from ..database.mongo_base import to_bson_value
from .model import DATE_FIELDS, FIELD_MAP, EmergencyContact, Employee
from .repository import EmployeeRepository

COLLECTION = "employee"


def _status(value: Any) -> EmployeeStatus:
    try:
        return EmployeeStatus(value)
    except ValueError:
        return EmployeeStatus.ACTIVE


def _rate(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_employee(doc: dict) -> Employee:
    values: dict[str, Any] = {}
    for attr, key in FIELD_MAP.items():
        raw = doc.get(key)
        if key in DATE_FIELDS:
            raw = as_date(raw)
        elif key == "employeeId" and raw is not None:
            raw = str(raw)
        values[attr] = raw

    ec = doc.get("emergencyContact") or None
    return Employee(
        doc_id=str(doc["_id"]),
        **{
            **values,
            "employee_id": values.get("employee_id") or "",
            "name": values.get("name") or "",
            "status": _status(values.get("status")),
            "hourly_rate": _rate(values.get("hourly_rate")),
        },
        emergency_contact=EmergencyContact(**{k: ec.get(k) for k in ("name", "relationship", "number")}) if ec else None,
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


def _prepare(data: dict[str, Any]) -> dict[str, Any]:
    return to_bson_value(dict(data))


class MongoEmployeeRepository(EmployeeRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(COLLECTION)

    def _changed(self) -> None:
        if self._feed:
            self._feed.publish(COLLECTION)

    def get_raw(self, doc_id: str) -> Optional[dict]:
        if not ObjectId.is_valid(str(doc_id)):
            return None
        return self._col.find_one({"_id": ObjectId(str(doc_id))})

    def get(self, doc_id: str) -> Optional[Employee]:
        doc = self.get_raw(doc_id)
        return to_employee(doc) if doc else None

    def _find_one(self, query: dict) -> Optional[Employee]:
        doc = self._col.find_one(query)
        return to_employee(doc) if doc else None

    def find_by_email(self, email: str) -> Optional[Employee]:
        return self._find_one({"email": email})

    def find_by_user_id(self, user_id: str) -> Optional[Employee]:
        return self._find_one({"userId": user_id})

    def find_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self._find_one({"employeeId": str(employee_id)})

    def list_all(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        query: dict[str, Any] = {"name": {"$nin": [None, ""]}}
        if status:
            query["status"] = status.value
        return [to_employee(d) for d in self._col.find(query).sort("name", ASCENDING)]

    def list_by_ids(self, doc_ids: Iterable[str]) -> Sequence[Employee]:
        ids = [ObjectId(i) for i in doc_ids if ObjectId.is_valid(str(i))]
        if not ids:
            return []
        return [to_employee(d) for d in self._col.find({"_id": {"$in": ids}})]

    def max_employee_number(self) -> Optional[int]:
        numbers = [
            int(str(d["employeeId"]))
            for d in self._col.find({"employeeId": {"$exists": True}}, {"employeeId": 1})
            if str(d.get("employeeId", "")).isdigit()
        ]
        return max(numbers) if numbers else None

    def create(self, data: dict[str, Any]) -> str:
        res = self._col.insert_one(_prepare(data))
        self._changed()
        return str(res.inserted_id)

    def update(self, doc_id: str, changes: dict[str, Any], *, unset: Iterable[str] = ()) -> bool:
        if not ObjectId.is_valid(str(doc_id)):
            return False
        op: dict[str, Any] = {}
        if changes:
            op["$set"] = _prepare(changes)
        unset_fields = {k: "" for k in unset}
        if unset_fields:
            op["$unset"] = unset_fields
        if not op:
            return True
        res = self._col.update_one({"_id": ObjectId(str(doc_id))}, op)
        self._changed()
        return res.matched_count == 1

    def delete(self, doc_id: str) -> bool:
        if not ObjectId.is_valid(str(doc_id)):
            return False
        res = self._col.delete_one({"_id": ObjectId(str(doc_id))})
        self._changed()
        return res.deleted_count == 1

    def delete_many(self, doc_ids: Iterable[str]) -> int:
        ids = [ObjectId(i) for i in doc_ids if ObjectId.is_valid(str(i))]
        if not ids:
            return 0
        res = self._col.delete_many({"_id": {"$in": ids}})
        self._changed()
        return int(res.deleted_count)

    def list_raw(self) -> Sequence[dict]:
        return list(self._col.find({}))

    def distinct_values(self, field: str) -> Sequence[str]:
        return [v for v in self._col.distinct(field) if v]
