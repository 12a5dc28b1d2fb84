# src/tick_lite/tasks/views.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from .due_dates import is_future, is_today
from .task_models import Task


class View(StrEnum):
    INBOX = "inbox"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    ALL = "all"

    @classmethod
    def from_raw(cls, raw: str | None) -> View:
        if not raw:
            return cls.INBOX
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.INBOX


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    pending: int
    completed: int


def matches_search(task: Task, search_text: str) -> bool:
    if not search_text:
        return True
    haystack = f"{task.title} {task.notes} {' '.join(task.tags)}".lower()
    return search_text.lower() in haystack


def in_view(task: Task, view: View, now: datetime) -> bool:
    if view is View.INBOX:
        return task.due is None and not task.completed
    if view is View.TODAY:
        return is_today(task.due, now) and not task.completed
    if view is View.UPCOMING:
        return task.due is not None and is_future(task.due, now) and not task.completed
    if view is View.COMPLETED:
        return task.completed
    return True


def classify(
    tasks: Iterable[Task],
    view: View | str,
    now: datetime,
    search_text: str = "",
) -> list[Task]:
    """
    Filter tasks into a named view.

    Search runs first (title + notes + tags, case-insensitive substring),
    then the view predicate. Input order is preserved and nothing is mutated.
    """
    v = View.from_raw(view)
    return [t for t in tasks if matches_search(t, search_text) and in_view(t, v, now)]


def count_stats(tasks: Iterable[Task]) -> TaskStats:
    total = pending = completed = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1
        else:
            pending += 1
    return TaskStats(total=total, pending=pending, completed=completed)


def recently_completed(tasks: Iterable[Task], limit: int = 8) -> list[Task]:
    out: list[Task] = []
    for t in tasks:
        if len(out) >= limit:
            break
        if t.completed:
            out.append(t)
    return out
