from __future__ import annotations

from datetime import date, time

from src.hr_assistant.hr_assistant.attendance.model import AttendanceEvent
from src.hr_assistant.hr_assistant.attendance.reducer import reduce_daily


def _ev(day, check_in=None, check_out=None, machine="Gate A", event_id=None):
    return AttendanceEvent(
        user_id="1001",
        employee_name="A",
        date=day,
        check_in=check_in,
        check_out=check_out,
        machine=machine,
        event_id=event_id,
    )


def test_earliest_in_and_latest_out_per_day():
    d = date(2024, 6, 3)
    events = [
        _ev(d, check_in=time(8, 58)),
        _ev(d, check_in=time(9, 5)),
        _ev(d, check_out=time(17, 32)),
        _ev(d, check_out=time(17, 2)),
    ]

    [day] = reduce_daily(events)

    assert day.date == d
    assert day.check_in == time(8, 58)
    assert day.check_out == time(17, 32)
    assert day.valid is True
    assert day.duration_minutes == 8 * 60 + 34


def test_one_record_per_date_in_date_order():
    events = [
        _ev(date(2024, 6, 4), check_in=time(9, 0), check_out=time(17, 0)),
        _ev(date(2024, 6, 3), check_in=time(8, 0)),
    ]

    days = reduce_daily(events)

    assert [d.date for d in days] == [date(2024, 6, 3), date(2024, 6, 4)]
    assert days[0].check_out is None
    assert days[0].duration_minutes == 0
    assert days[1].duration_minutes == 8 * 60


def test_dates_without_events_are_not_filled():
    events = [
        _ev(date(2024, 6, 3), check_in=time(9, 0)),
        _ev(date(2024, 6, 7), check_in=time(9, 0)),
    ]

    assert len(reduce_daily(events)) == 2


def test_check_out_before_check_in_is_invalid():
    [day] = reduce_daily([_ev(date(2024, 6, 3), check_in=time(10, 0), check_out=time(9, 0))])

    assert day.valid is False
    assert day.duration_minutes == 0


def test_equal_timestamps_keep_ingestion_order():
    d = date(2024, 6, 3)
    events = [
        _ev(d, check_in=time(8, 0), machine="first"),
        _ev(d, check_in=time(8, 0), machine="second"),
        _ev(d, check_out=time(17, 0), machine="third"),
    ]

    [day] = reduce_daily(events)

    assert day.machine == "first"
    assert day.check_in == time(8, 0)


def test_equal_check_out_timestamps_keep_the_last_one():
    d = date(2024, 6, 3)
    events = [
        _ev(d, check_out=time(17, 0), machine="first"),
        _ev(d, check_out=time(17, 0), machine="second"),
    ]

    [day] = reduce_daily(events)

    assert day.check_in is None
    assert day.check_out == time(17, 0)
    assert day.machine == "second"


def test_empty_input():
    assert reduce_daily([]) == []
