from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from pymongo import ASCENDING, ReturnDocument

from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from .model import MonthlyPayroll
from .repository import PayrollRepository

COLLECTION = "monthlyPayrolls"


def _float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None:
        return default
    return float(value)


def _to_payroll(doc: dict) -> MonthlyPayroll:
    return MonthlyPayroll(
        record_id=str(doc["_id"]),
        employee_doc_id=doc.get("employeeDocId", ""),
        employee_name=doc.get("employeeName", ""),
        month_year=doc.get("monthYear", ""),
        hourly_rate_used=_float(doc.get("hourlyRateUsed")),
        total_work_hours=_float(doc.get("totalWorkHours")),
        base_salary_calculated=_float(doc.get("baseSalaryCalculated")),
        bonus_added=_float(doc.get("bonusAdded")),
        deductions_applied=_float(doc.get("deductionsApplied")),
        net_salary_calculated=_float(doc.get("netSalaryCalculated")),
        net_salary_final=_float(doc.get("netSalaryFinal"), None),
        notes=doc.get("notes") or "",
        calculated_at=doc.get("calculatedAt"),
        last_updated_at=doc.get("lastUpdatedAt"),
    )


class MongoPayrollRepository(PayrollRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(COLLECTION)

    def find(self, employee_doc_id: str, month_year: str) -> Optional[MonthlyPayroll]:
        doc = self._col.find_one({"employeeDocId": employee_doc_id, "monthYear": month_year})
        return _to_payroll(doc) if doc else None

    def upsert(self, employee_doc_id: str, month_year: str, data: dict[str, Any], *, now: datetime) -> tuple[str, bool]:
        fields = {k: v for k, v in data.items() if k not in ("employeeDocId", "monthYear")}
        fields["lastUpdatedAt"] = now
        before = self._col.find_one_and_update(
            {"employeeDocId": employee_doc_id, "monthYear": month_year},
            {"$set": fields, "$setOnInsert": {"calculatedAt": now}},
            upsert=True,
            return_document=ReturnDocument.BEFORE,
        )
        if before is not None:
            record_id, created = str(before["_id"]), False
        else:
            doc = self._col.find_one({"employeeDocId": employee_doc_id, "monthYear": month_year}, {"_id": 1})
            record_id, created = str(doc["_id"]), True
        if self._feed:
            self._feed.publish(COLLECTION)
        return record_id, created

    def list_for_year(self, year: int, *, employee_doc_id: Optional[str] = None) -> Sequence[MonthlyPayroll]:
        query: dict[str, Any] = {"monthYear": {"$gte": f"{year:04d}-01", "$lte": f"{year:04d}-12"}}
        if employee_doc_id:
            query["employeeDocId"] = employee_doc_id
        return [_to_payroll(d) for d in self._col.find(query).sort("monthYear", ASCENDING)]
