# src/tick_lite/tasks/due_dates.py

"""
Due-date arithmetic.

Two kinds of offsets live here and they are not interchangeable:
- calendar steps (add_calendar_step) move the local wall-clock fields and keep
  the time of day; month/year steps roll over past month ends
  (Jan 31 + 1 month -> Mar 3 in a non-leap year);
- fixed offsets (add_days) add an exact number of seconds.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import StrEnum

SECONDS_PER_DAY = 86400


class CalendarUnit(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(instant: datetime | None) -> datetime | None:
    """Naive datetimes are local wall time; attach the local offset."""
    if instant is None or instant.tzinfo is not None:
        return instant
    return instant.astimezone()


def is_today(instant: datetime | None, now: datetime | None = None) -> bool:
    """True iff `instant` falls on the current local calendar date."""
    if instant is None:
        return False
    ref = now if now is not None else datetime.now()
    return instant.astimezone().date() == ref.astimezone().date()


def is_future(instant: datetime | None, now: datetime) -> bool:
    if instant is None:
        return False
    return as_aware(instant) > as_aware(now)


def add_days(instant: datetime, n: float) -> datetime:
    return instant + timedelta(seconds=n * SECONDS_PER_DAY)


def _add_months(wall: datetime, months: int) -> datetime:
    index = wall.month - 1 + months
    first = wall.replace(year=wall.year + index // 12, month=index % 12 + 1, day=1)
    # Day overflow rolls into the following month.
    return first + timedelta(days=wall.day - 1)


def _step_wall(wall: datetime, unit: CalendarUnit) -> datetime:
    if unit is CalendarUnit.DAY:
        return wall + timedelta(days=1)
    if unit is CalendarUnit.WEEK:
        return wall + timedelta(days=7)
    if unit is CalendarUnit.MONTH:
        return _add_months(wall, 1)
    if unit is CalendarUnit.YEAR:
        return _add_months(wall, 12)
    raise ValueError(f"unknown calendar unit: {unit!r}")


def add_calendar_step(instant: datetime, unit: CalendarUnit | str) -> datetime:
    """
    Add one calendar `unit` to `instant` using local wall-clock fields.

    Naive datetimes are treated as local wall time and returned naive.
    Aware datetimes are stepped in local time and converted back to their
    own tzinfo, so a daily step across a DST change keeps 09:00 at 09:00.
    """
    unit = CalendarUnit(unit)

    if instant.tzinfo is None:
        return _step_wall(instant, unit)

    wall = instant.astimezone().replace(tzinfo=None)
    stepped = _step_wall(wall, unit).astimezone()
    return stepped.astimezone(instant.tzinfo)
