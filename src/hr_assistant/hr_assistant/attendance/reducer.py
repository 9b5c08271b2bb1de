"""Daily reduction of raw terminal events.

Events arrive unordered and possibly duplicated. Each one is expanded into
punches (a row with both times yields two), the punches are sorted by
timestamp with a stable sort, and each date keeps its first check-in and its
last check-out. On equal timestamps the earlier-ingested event wins the
check-in and the later-ingested one wins the check-out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from itertools import groupby
from typing import Iterable, Optional

from ..core.enums import PunchType
from .model import AttendanceEvent, DailyAttendance


@dataclass(frozen=True)
class Punch:
    at: datetime
    kind: PunchType
    machine: Optional[str]


def to_punches(events: Iterable[AttendanceEvent]) -> list[Punch]:
    punches: list[Punch] = []
    for ev in events:
        if ev.check_in is not None:
            punches.append(Punch(datetime.combine(ev.date, ev.check_in), PunchType.IN, ev.machine))
        if ev.check_out is not None:
            punches.append(Punch(datetime.combine(ev.date, ev.check_out), PunchType.OUT, ev.machine))
    return punches


def reduce_day(day: date, punches: list[Punch]) -> DailyAttendance:
    """``punches`` must already be in timestamp order."""

    first_in: Optional[Punch] = None
    last_out: Optional[Punch] = None
    for p in punches:
        if p.kind == PunchType.IN:
            if first_in is None:
                first_in = p
        else:
            last_out = p

    check_in: Optional[time] = first_in.at.time() if first_in else None
    check_out: Optional[time] = last_out.at.time() if last_out else None
    valid = check_in is None or check_out is None or check_out >= check_in
    machine = (first_in or last_out).machine if (first_in or last_out) else None
    return DailyAttendance(date=day, check_in=check_in, check_out=check_out, machine=machine, valid=valid)


def reduce_daily(events: Iterable[AttendanceEvent]) -> list[DailyAttendance]:
    """One record per date that has events, ordered by date.

    Dates without events are absent (never zero-filled); a date with only
    check-ins has no check-out. A check-out earlier than the check-in marks
    the record invalid and its duration counts as zero.
    """

    punches = sorted(to_punches(events), key=lambda p: p.at)
    return [reduce_day(day, list(group)) for day, group in groupby(punches, key=lambda p: p.at.date())]
