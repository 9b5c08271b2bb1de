from datetime import date

from src.hr_assistant.hr_assistant.leave.workdays import count_working_days
from src.hr_assistant.hr_assistant.settings.model import WorkCalendar


def test_weekend_uses_sunday_zero_numbering():
    # Fri/Sat weekend; 2024-06-02 is a Sunday
    calendar = WorkCalendar(weekend_days=frozenset({5, 6}), holidays=frozenset())

    assert calendar.is_working_day(date(2024, 6, 2))
    assert not calendar.is_working_day(date(2024, 6, 7))
    assert not calendar.is_working_day(date(2024, 6, 8))


def test_holidays_are_excluded():
    calendar = WorkCalendar(weekend_days=frozenset({0, 6}), holidays=frozenset({date(2024, 6, 5)}))

    # Mon 3 .. Fri 7 June minus the Wednesday holiday
    assert count_working_days(date(2024, 6, 3), date(2024, 6, 7), calendar) == 4


def test_reversed_range_is_zero():
    calendar = WorkCalendar(weekend_days=frozenset(), holidays=frozenset())

    assert count_working_days(date(2024, 6, 7), date(2024, 6, 3), calendar) == 0
