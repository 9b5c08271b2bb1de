from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from bson import ObjectId

from ..core.exceptions import NotFoundError


def to_object_id(value: Any, *, what: str = "Record") -> ObjectId:
    """Convert a string id to ObjectId; malformed ids are reported as not found."""

    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(str(value)):
        return ObjectId(str(value))
    raise NotFoundError(f"{what} not found.")


def doc_id(doc: dict) -> str:
    return str(doc["_id"])


def to_bson_date(value: Optional[date]) -> Optional[datetime]:
    """BSON has no pure date type; calendar dates are stored at midnight."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def without_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


def to_bson_value(value: Any) -> Any:
    """Recursively convert dates and enums into BSON-encodable values."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return to_bson_date(value)
    if isinstance(value, dict):
        return {k: to_bson_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_bson_value(v) for v in value]
    return value
