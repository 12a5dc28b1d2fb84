# src/tick_lite/tasks/recurrence.py

from __future__ import annotations

from datetime import datetime

from .due_dates import CalendarUnit, add_calendar_step
from .task_models import Repeat

_UNIT_FOR_REPEAT: dict[Repeat, CalendarUnit] = {
    Repeat.DAILY: CalendarUnit.DAY,
    Repeat.WEEKLY: CalendarUnit.WEEK,
    Repeat.MONTHLY: CalendarUnit.MONTH,
    Repeat.YEARLY: CalendarUnit.YEAR,
}


def unit_for(repeat: Repeat) -> CalendarUnit | None:
    return _UNIT_FOR_REPEAT.get(repeat)


def compute_next_due(due: datetime | None, repeat: Repeat | str) -> datetime | None:
    """
    Next occurrence of a repeating task.

    No anchor (due is None) or no repeat rule -> None.
    """
    if due is None:
        return None
    unit = unit_for(Repeat.from_raw(repeat))
    if unit is None:
        return None
    return add_calendar_step(due, unit)
