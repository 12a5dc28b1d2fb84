# src/tick_lite/tasks/task_models.py

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from .due_dates import as_aware


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_raw(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        for p in cls:
            if p.value.lower() == str(raw).strip().lower():
                return p
        return cls.MEDIUM


class Repeat(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_raw(cls, raw: str | None) -> Repeat:
        if not raw:
            return cls.NONE
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.NONE


def new_task_id() -> str:
    return secrets.token_urlsafe(6)


def parse_tags(raw: str | None) -> list[str]:
    """Split "a, b,,c" into ["a", "b", "c"]."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def _dt_to_str(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _str_to_dt(raw: Any) -> datetime | None:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    return as_aware(datetime.fromisoformat(str(raw)))


@dataclass(slots=True)
class TaskDraft:
    """User input for TaskStore.add (the quick-add form)."""

    title: str
    notes: str = ""
    due: datetime | None = None
    priority: Priority = Priority.MEDIUM
    tags: list[str] = field(default_factory=list)
    repeat: Repeat = Repeat.NONE


@dataclass(slots=True)
class Task:
    id: str
    title: str
    created_at: datetime

    notes: str = ""
    due: datetime | None = None
    priority: Priority = Priority.MEDIUM
    tags: list[str] = field(default_factory=list)
    repeat: Repeat = Repeat.NONE

    completed: bool = False
    completed_at: datetime | None = None

    @property
    def is_repeating(self) -> bool:
        return self.repeat is not Repeat.NONE

    def copy(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            created_at=self.created_at,
            notes=self.notes,
            due=self.due,
            priority=self.priority,
            tags=list(self.tags),
            repeat=self.repeat,
            completed=self.completed,
            completed_at=self.completed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Field-tagged record used by the JSON persistence adapter."""
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "due": _dt_to_str(self.due),
            "priority": self.priority.value,
            "tags": list(self.tags),
            "completed": self.completed,
            "completedAt": _dt_to_str(self.completed_at),
            "repeat": self.repeat.value,
            "createdAt": _dt_to_str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Raises ValueError/TypeError on records that cannot describe a task
        (missing id/title, non-boolean completed, unparsable timestamps).
        """
        task_id = str(data.get("id") or "").strip()
        title = str(data.get("title") or "").strip()
        if not task_id or not title:
            raise ValueError("record has no id or title")

        tags_raw = data.get("tags") or []
        if not isinstance(tags_raw, list):
            raise TypeError("tags must be a list")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError("completed must be a boolean")
        completed_at = _str_to_dt(data.get("completedAt")) if completed else None
        created_at = _str_to_dt(data.get("createdAt")) or completed_at or datetime.now().astimezone()

        if completed and completed_at is None:
            completed_at = created_at

        return cls(
            id=task_id,
            title=title,
            created_at=created_at,
            notes=str(data.get("notes") or "").strip(),
            due=_str_to_dt(data.get("due")),
            priority=Priority.from_raw(data.get("priority")),
            tags=[str(t) for t in tags_raw],
            repeat=Repeat.from_raw(data.get("repeat")),
            completed=completed,
            completed_at=completed_at,
        )
