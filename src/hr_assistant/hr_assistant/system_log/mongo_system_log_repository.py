from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from bson import ObjectId
from pymongo import DESCENDING

from ..database.connection import DatabaseConnection
from ..database.feed import ChangeFeed
from ..database.mongo_base import to_bson_value
from .model import SystemLogEntry
from .repository import SystemLogRepository

COLLECTION = "system_logs"
_RESERVED = {"_id", "action", "timestamp", "actorId", "actorEmail", "actorRole", "changes"}


def _to_entry(doc: dict) -> SystemLogEntry:
    return SystemLogEntry(
        log_id=str(doc["_id"]),
        action=doc.get("action", ""),
        timestamp=doc.get("timestamp"),
        actor_id=doc.get("actorId"),
        actor_email=doc.get("actorEmail"),
        actor_role=doc.get("actorRole"),
        details={k: v for k, v in doc.items() if k not in _RESERVED},
        changes=doc.get("changes"),
    )


class MongoSystemLogRepository(SystemLogRepository):
    def __init__(self, conn: DatabaseConnection, feed: Optional[ChangeFeed] = None):
        self._conn = conn
        self._feed = feed

    @property
    def _col(self):
        return self._conn.collection(COLLECTION)

    def append(
        self,
        *,
        action: str,
        timestamp: datetime,
        actor_id: Optional[str],
        actor_email: Optional[str],
        actor_role: Optional[str],
        details: dict[str, Any],
        changes: Optional[dict[str, Any]] = None,
    ) -> str:
        doc = to_bson_value({k: v for k, v in details.items() if k not in _RESERVED})
        doc.update(
            {
                "action": action,
                "timestamp": timestamp,
                "actorId": actor_id,
                "actorEmail": actor_email,
                "actorRole": actor_role,
            }
        )
        if changes is not None:
            doc["changes"] = to_bson_value(changes)
        res = self._col.insert_one(doc)
        if self._feed:
            self._feed.publish(COLLECTION)
        return str(res.inserted_id)

    def list_recent(self, *, limit: int = 100) -> Sequence[SystemLogEntry]:
        cur = self._col.find({}).sort("timestamp", DESCENDING).limit(int(limit))
        return [_to_entry(d) for d in cur]

    def get(self, log_id: str) -> Optional[SystemLogEntry]:
        if not ObjectId.is_valid(log_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(log_id)})
        return _to_entry(doc) if doc else None
