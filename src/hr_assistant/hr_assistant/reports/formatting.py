"""Display formatting for report cells. Missing values always render as ``-``."""

from __future__ import annotations

import math
from datetime import date, time
from typing import Any, Optional

from ..core.constants import PLACEHOLDER


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def format_currency(value: Optional[float]) -> str:
    """``1234.5`` -> ``$1234.50``."""

    if is_missing(value):
        return PLACEHOLDER
    return f"${float(value):.2f}"


def format_minutes(minutes: Optional[int]) -> str:
    """``135`` -> ``2h 15m``."""

    if is_missing(minutes):
        return PLACEHOLDER
    minutes = max(0, int(minutes))
    return f"{minutes // 60}h {minutes % 60}m"


def format_hours(hours: Optional[float]) -> str:
    """Hour totals: ``12.5`` -> ``12.50 hrs``; zero or missing -> ``-``."""

    if is_missing(hours) or float(hours) <= 0:
        return PLACEHOLDER
    return f"{float(hours):.2f} hrs"


def format_days(days: Optional[float]) -> str:
    """Day totals: ``3`` -> ``3 days``; zero or missing -> ``-``."""

    if is_missing(days) or float(days) <= 0:
        return PLACEHOLDER
    value = float(days)
    shown = str(int(value)) if value.is_integer() else f"{value:.1f}"
    return f"{shown} {'day' if value == 1 else 'days'}"


def format_clock(value: Optional[time]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.strftime("%H:%M:%S") if value.second else value.strftime("%H:%M")


def format_date(value: Optional[date]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.isoformat()
