from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import MonthlyPayroll


class PayrollRepository(Protocol):
    def find(self, employee_doc_id: str, month_year: str) -> Optional[MonthlyPayroll]:
        raise NotImplementedError

    def upsert(self, employee_doc_id: str, month_year: str, data: dict[str, Any], *, now: datetime) -> tuple[str, bool]:
        """Create or replace the record of one employee and month.

        Returns ``(record_id, created)``.
        """

        raise NotImplementedError

    def list_for_year(self, year: int, *, employee_doc_id: Optional[str] = None) -> Sequence[MonthlyPayroll]:
        raise NotImplementedError
