from datetime import date, time

from src.hr_assistant.hr_assistant.reports.formatting import (
    format_clock,
    format_currency,
    format_date,
    format_days,
    format_hours,
    format_minutes,
)


def test_missing_salary_renders_placeholder():
    assert format_currency(None) == "-"
    assert format_currency(float("nan")) == "-"


def test_currency_has_two_decimals():
    assert format_currency(1234.5) == "$1234.50"
    assert format_currency(0) == "$0.00"


def test_minutes_as_hours_and_minutes():
    assert format_minutes(135) == "2h 15m"
    assert format_minutes(0) == "0h 0m"
    assert format_minutes(None) == "-"


def test_zero_totals_render_placeholder():
    assert format_hours(0) == "-"
    assert format_hours(12.5) == "12.50 hrs"
    assert format_days(0) == "-"
    assert format_days(1) == "1 day"
    assert format_days(3) == "3 days"


def test_clock_and_date():
    assert format_clock(time(8, 58)) == "08:58"
    assert format_clock(time(17, 32, 10)) == "17:32:10"
    assert format_clock(None) == "-"
    assert format_date(date(2024, 6, 3)) == "2024-06-03"
