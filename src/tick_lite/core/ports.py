# src/tick_lite/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/notification backends swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskPersistence(Protocol):
    """
    Durable storage for the whole task collection.

    load() returns None when there is no usable saved state (missing file,
    parse failure); the caller then falls back to a seed or an empty list.
    """

    def load(self) -> list[Task] | None: ...
    def save(self, tasks: Sequence[Task]) -> None: ...


class SnapshotSaver(Protocol):
    """
    Store-side port: receives a full snapshot after every mutation.

    revision increases with every mutation; implementations must never let a
    lower revision overwrite a higher one.
    """

    def submit(self, revision: int, tasks: list[Task]) -> None: ...


class Notifier(Protocol):
    """Where reminders go (desktop notification, log, test fake)."""

    def notify(self, title: str, body: str) -> None: ...


class TaskReader(Protocol):
    """Read-only view of the store used by the reminder scheduler."""

    def snapshot(self) -> list[Task]: ...
