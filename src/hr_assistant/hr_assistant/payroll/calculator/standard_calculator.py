from __future__ import annotations

from .base import PayrollCalculator
from ..model import PayrollFigures


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base = rate x hours, net = base + bonus - deductions (2 dp)."""

    def calculate(
        self,
        *,
        hourly_rate: float,
        total_work_hours: float,
        bonus: float = 0.0,
        deductions: float = 0.0,
    ) -> PayrollFigures:
        base = float(hourly_rate) * float(total_work_hours)
        net = base + float(bonus) - float(deductions)
        return PayrollFigures(
            base_salary=round(base, 2),
            bonus=round(float(bonus), 2),
            deductions=round(float(deductions), 2),
            net_salary=round(net, 2),
        )
