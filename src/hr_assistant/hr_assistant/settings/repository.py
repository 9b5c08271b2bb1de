from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import Holiday, ListItem


class SettingsRepository(Protocol):
    """Singleton documents in ``settings`` (``weekend``, ``workday``)."""

    def get_weekend_days(self) -> Optional[list[int]]:
        raise NotImplementedError

    def set_weekend_days(self, days: Sequence[int]) -> None:
        raise NotImplementedError

    def get_standard_hours(self) -> Optional[float]:
        raise NotImplementedError

    def set_standard_hours(self, hours: float) -> None:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_between(self, start: date, end: date) -> Sequence[Holiday]:
        raise NotImplementedError

    def find_on(self, day: date) -> Optional[Holiday]:
        raise NotImplementedError

    def get(self, holiday_id: str) -> Optional[Holiday]:
        raise NotImplementedError

    def add(self, *, name: str, day: date, created_at: datetime) -> str:
        raise NotImplementedError

    def delete(self, holiday_id: str) -> bool:
        raise NotImplementedError


class ReferenceListRepository(Protocol):
    def list_items(self, list_name: str) -> Sequence[ListItem]:
        raise NotImplementedError

    def find_by_name(self, list_name: str, name: str) -> Optional[ListItem]:
        raise NotImplementedError

    def add(self, list_name: str, name: str) -> str:
        raise NotImplementedError

    def rename(self, list_name: str, item_id: str, name: str) -> bool:
        raise NotImplementedError

    def delete(self, list_name: str, item_id: str) -> bool:
        raise NotImplementedError

    def add_many(self, list_name: str, names: Iterable[str]) -> int:
        raise NotImplementedError
