from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollFigures


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        hourly_rate: float,
        total_work_hours: float,
        bonus: float = 0.0,
        deductions: float = 0.0,
    ) -> PayrollFigures:
        raise NotImplementedError
