from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from bson import ObjectId
from pymongo import ASCENDING

from ..common.datetime_utils import as_date
from ..core.constants import REFERENCE_LISTS
from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from ..database.mongo_base import to_bson_date
from .model import Holiday, ListItem
from .repository import HolidayRepository, ReferenceListRepository, SettingsRepository

SETTINGS = "settings"
HOLIDAYS = "holidays"


def _to_holiday(doc: dict) -> Holiday:
    return Holiday(
        holiday_id=str(doc["_id"]),
        name=doc.get("name", ""),
        date=as_date(doc.get("date")),
        created_at=doc.get("createdAt"),
    )


class MongoSettingsRepository(SettingsRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _col(self):
        return self._conn.collection(SETTINGS)

    def get_weekend_days(self) -> Optional[list[int]]:
        doc = self._col.find_one({"_id": "weekend"})
        days = (doc or {}).get("days")
        return [int(d) for d in days] if isinstance(days, list) else None

    def set_weekend_days(self, days: Sequence[int]) -> None:
        self._col.update_one({"_id": "weekend"}, {"$set": {"days": [int(d) for d in days]}}, upsert=True)

    def get_standard_hours(self) -> Optional[float]:
        doc = self._col.find_one({"_id": "workday"})
        hours = (doc or {}).get("standardHours")
        return float(hours) if hours is not None else None

    def set_standard_hours(self, hours: float) -> None:
        self._col.update_one({"_id": "workday"}, {"$set": {"standardHours": hours}}, upsert=True)


class MongoHolidayRepository(HolidayRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(HOLIDAYS)

    def list_all(self) -> Sequence[Holiday]:
        return [_to_holiday(d) for d in self._col.find({}).sort("date", ASCENDING)]

    def list_between(self, start: date, end: date) -> Sequence[Holiday]:
        cur = self._col.find({"date": {"$gte": to_bson_date(start), "$lte": to_bson_date(end)}})
        return [_to_holiday(d) for d in cur]

    def find_on(self, day: date) -> Optional[Holiday]:
        doc = self._col.find_one({"date": to_bson_date(day)})
        return _to_holiday(doc) if doc else None

    def get(self, holiday_id: str) -> Optional[Holiday]:
        if not ObjectId.is_valid(str(holiday_id)):
            return None
        doc = self._col.find_one({"_id": ObjectId(str(holiday_id))})
        return _to_holiday(doc) if doc else None

    def add(self, *, name: str, day: date, created_at: datetime) -> str:
        res = self._col.insert_one({"name": name, "date": to_bson_date(day), "createdAt": created_at})
        if self._feed:
            self._feed.publish(HOLIDAYS)
        return str(res.inserted_id)

    def delete(self, holiday_id: str) -> bool:
        if not ObjectId.is_valid(str(holiday_id)):
            return False
        res = self._col.delete_one({"_id": ObjectId(str(holiday_id))})
        if self._feed:
            self._feed.publish(HOLIDAYS)
        return res.deleted_count == 1


class MongoReferenceListRepository(ReferenceListRepository):
    """Each reference list is its own collection of ``{name}`` documents."""

    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def _col(self, list_name: str):
        if list_name not in REFERENCE_LISTS:
            raise ValueError(f"Unknown reference list: {list_name!r}")
        return self._conn.collection(list_name)

    def list_items(self, list_name: str) -> Sequence[ListItem]:
        cur = self._col(list_name).find({}).sort("name", ASCENDING)
        return [ListItem(item_id=str(d["_id"]), name=d.get("name", "")) for d in cur]

    def find_by_name(self, list_name: str, name: str) -> Optional[ListItem]:
        doc = self._col(list_name).find_one({"name": name})
        return ListItem(item_id=str(doc["_id"]), name=doc.get("name", "")) if doc else None

    def add(self, list_name: str, name: str) -> str:
        return str(self._col(list_name).insert_one({"name": name}).inserted_id)

    def rename(self, list_name: str, item_id: str, name: str) -> bool:
        if not ObjectId.is_valid(str(item_id)):
            return False
        res = self._col(list_name).update_one({"_id": ObjectId(str(item_id))}, {"$set": {"name": name}})
        return res.matched_count == 1

    def delete(self, list_name: str, item_id: str) -> bool:
        if not ObjectId.is_valid(str(item_id)):
            return False
        return self._col(list_name).delete_one({"_id": ObjectId(str(item_id))}).deleted_count == 1

    def add_many(self, list_name: str, names: Iterable[str]) -> int:
        docs = [{"name": n} for n in names]
        if not docs:
            return 0
        return len(self._col(list_name).insert_many(docs).inserted_ids)
