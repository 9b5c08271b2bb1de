from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Document store for ``employee``.

    Write methods take document-shaped dicts (camelCase keys, see
    ``model.FIELD_MAP``).
    """

    def get(self, doc_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_raw(self, doc_id: str) -> Optional[dict]:
        """The stored document as-is (used for audit diffs)."""

        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_user_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def list_by_ids(self, doc_ids: Iterable[str]) -> Sequence[Employee]:
        raise NotImplementedError

    def max_employee_number(self) -> Optional[int]:
        """Highest numeric ``employeeId`` on file, ignoring non-numeric ids."""

        raise NotImplementedError

    def create(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def update(self, doc_id: str, changes: dict[str, Any], *, unset: Iterable[str] = ()) -> bool:
        raise NotImplementedError

    def delete(self, doc_id: str) -> bool:
        raise NotImplementedError

    def delete_many(self, doc_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def list_raw(self) -> Sequence[dict]:
        """All documents including those missing required fields."""

        raise NotImplementedError

    def distinct_values(self, field: str) -> Sequence[str]:
        raise NotImplementedError
