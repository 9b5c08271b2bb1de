from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from bson import ObjectId
from pymongo import DESCENDING

from ..common.datetime_utils import as_date
from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from ..database.mongo_base import to_bson_date
from .model import LeaveRequest
from .repository import LeaveRepository

COLLECTION = "leaveRequests"


def _to_request(doc: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(doc["_id"]),
        requesting_employee_doc_id=doc.get("requestingEmployeeDocId", ""),
        employee_name=doc.get("employeeName") or "Unknown Employee",
        leave_type=doc.get("leaveType", ""),
        start_date=as_date(doc.get("startDate")),
        end_date=as_date(doc.get("endDate")),
        reason=doc.get("reason", ""),
        number_of_days=int(doc.get("numberOfDays") or 0),
        status=LeaveStatus(doc.get("status") or LeaveStatus.PENDING.value),
        attachment_url=doc.get("attachmentURL"),
        manager_notes=doc.get("managerNotes") or "",
        submitted_at=doc.get("submittedAt"),
        updated_at=doc.get("updatedAt"),
        version=int(doc.get("version") or 0),
    )


def _version_filter(expected_version: int) -> dict:
    # documents written before versioning have no field and count as 0
    if expected_version == 0:
        return {"$in": [0, None]}
    return expected_version


class MongoLeaveRepository(LeaveRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(COLLECTION)

    def _changed(self) -> None:
        if self._feed:
            self._feed.publish(COLLECTION)

    def create(
        self,
        *,
        requesting_employee_doc_id: str,
        employee_name: str,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        number_of_days: int,
        attachment_url: Optional[str],
        submitted_at: datetime,
    ) -> str:
        res = self._col.insert_one(
            {
                "requestingEmployeeDocId": requesting_employee_doc_id,
                "employeeName": employee_name,
                "leaveType": leave_type,
                "startDate": to_bson_date(start_date),
                "endDate": to_bson_date(end_date),
                "reason": reason,
                "numberOfDays": int(number_of_days),
                "status": LeaveStatus.PENDING.value,
                "attachmentURL": attachment_url,
                "submittedAt": submitted_at,
                "managerNotes": "",
                "version": 0,
            }
        )
        self._changed()
        return str(res.inserted_id)

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        if not ObjectId.is_valid(str(request_id)):
            return None
        doc = self._col.find_one({"_id": ObjectId(str(request_id))})
        return _to_request(doc) if doc else None

    def _conditional_update(self, request_id: str, query: dict[str, Any], fields: dict[str, Any]) -> bool:
        if not ObjectId.is_valid(str(request_id)):
            return False
        res = self._col.update_one(
            {"_id": ObjectId(str(request_id)), **query},
            {"$set": fields, "$inc": {"version": 1}},
        )
        if res.modified_count == 1:
            self._changed()
            return True
        return False

    def decide(
        self,
        request_id: str,
        *,
        status: LeaveStatus,
        manager_notes: str,
        expected_version: int,
        updated_at: datetime,
    ) -> bool:
        return self._conditional_update(
            request_id,
            {"status": LeaveStatus.PENDING.value, "version": _version_filter(expected_version)},
            {"status": status.value, "managerNotes": manager_notes, "updatedAt": updated_at},
        )

    def edit(
        self,
        request_id: str,
        *,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str,
        number_of_days: int,
        attachment_url: Optional[str],
        expected_version: int,
        updated_at: datetime,
    ) -> bool:
        return self._conditional_update(
            request_id,
            {"version": _version_filter(expected_version)},
            {
                "leaveType": leave_type,
                "startDate": to_bson_date(start_date),
                "endDate": to_bson_date(end_date),
                "reason": reason,
                "numberOfDays": int(number_of_days),
                "attachmentURL": attachment_url,
                "status": LeaveStatus.PENDING.value,
                "managerNotes": "",
                "updatedAt": updated_at,
            },
        )

    def delete(self, request_id: str) -> bool:
        if not ObjectId.is_valid(str(request_id)):
            return False
        res = self._col.delete_one({"_id": ObjectId(str(request_id))})
        self._changed()
        return res.deleted_count == 1

    def list_requests(
        self,
        *,
        employee_doc_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        query: dict[str, Any] = {}
        if employee_doc_id:
            query["requestingEmployeeDocId"] = employee_doc_id
        if status:
            query["status"] = status.value
        cur = self._col.find(query).sort("submittedAt", DESCENDING).limit(int(limit))
        return [_to_request(d) for d in cur]

    def list_approved_overlapping(
        self, start: date, end: date, *, employee_doc_id: Optional[str] = None
    ) -> Sequence[LeaveRequest]:
        query: dict[str, Any] = {
            "status": LeaveStatus.APPROVED.value,
            "startDate": {"$lte": to_bson_date(end)},
            "endDate": {"$gte": to_bson_date(start)},
        }
        if employee_doc_id:
            query["requestingEmployeeDocId"] = employee_doc_id
        return [_to_request(d) for d in self._col.find(query)]
