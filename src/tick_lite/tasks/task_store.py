# src/tick_lite/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.ports import SnapshotSaver
from .due_dates import add_days, as_aware, utc_now
from .recurrence import compute_next_due
from .task_models import Priority, Repeat, Task, TaskDraft, new_task_id

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(slots=True, frozen=True)
class CompletionResult:
    """Outcome of toggle_complete: the toggled task and the spawned sibling, if any."""

    task: Task
    spawned: Task | None = None


class TaskStore:
    """
    In-memory task collection (newest first) and every mutating operation.

    Thread-safety:
    - all reads/writes go through one RLock
    - readers always get copies, never the live records

    Persistence:
    - every successful mutation bumps `revision` and submits a full snapshot
      to the injected saver (fire-and-forget; saver errors are logged)
    """

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        *,
        saver: SnapshotSaver | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._saver = saver
        self._clock = clock
        self._id_factory = id_factory
        self._revision = 0

        seen: set[str] = set()
        for t in tasks or []:
            if t.id in seen:
                logger.warning("Dropping task with duplicate id=%s", t.id)
                continue
            seen.add(t.id)
            task = t.copy()
            task.created_at = as_aware(task.created_at)
            task.due = as_aware(task.due)
            task.completed_at = as_aware(task.completed_at)
            self._tasks.append(task)

        logger.info("TaskStore ready total=%d", len(self._tasks))

    # ---- low-level helpers ----

    def _find(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def _fresh_id(self) -> str:
        while True:
            task_id = self._id_factory()
            if self._find(task_id) is None:
                return task_id

    def _commit(self, reason: str) -> None:
        # Called with the lock held.
        self._revision += 1
        if self._saver is None:
            return
        snapshot = [t.copy() for t in self._tasks]
        try:
            self._saver.submit(self._revision, snapshot)
        except Exception:
            logger.exception("Snapshot submit failed revision=%s reason=%s", self._revision, reason)

    # ---- reads ----

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def snapshot(self) -> list[Task]:
        with self._lock:
            return [t.copy() for t in self._tasks]

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            t = self._find(task_id)
            return t.copy() if t else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- mutations ----

    def add(self, draft: TaskDraft) -> Task | None:
        title = (draft.title or "").strip()
        if not title:
            logger.debug("add rejected: empty title")
            return None

        with self._lock:
            task = Task(
                id=self._fresh_id(),
                title=title,
                created_at=self._clock(),
                notes=(draft.notes or "").strip(),
                due=as_aware(draft.due),
                priority=Priority.from_raw(draft.priority),
                tags=list(draft.tags or []),
                repeat=Repeat.from_raw(draft.repeat),
            )
            self._tasks.insert(0, task)
            self._commit("add")
            logger.debug("Task added id=%s repeat=%s due=%s", task.id, task.repeat.value, task.due)
            return task.copy()

    def toggle_complete(self, task_id: str) -> CompletionResult | None:
        """
        Complete or un-complete a task.

        Completing a repeating task with a due date also prepends the next
        occurrence in the same transaction. Un-completing only reverts the
        task itself; siblings spawned earlier stay.
        """
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None

            if task.completed:
                task.completed = False
                task.completed_at = None
                self._commit("uncomplete")
                logger.info("Task %s -> open", task.id)
                return CompletionResult(task=task.copy())

            now = self._clock()
            spawned: Task | None = None
            if task.is_repeating:
                next_due = compute_next_due(task.due, task.repeat)
                if next_due is not None:
                    spawned = task.copy()
                    spawned.id = self._fresh_id()
                    spawned.due = next_due
                    spawned.created_at = now

            task.completed = True
            task.completed_at = now
            if spawned is not None:
                self._tasks.insert(0, spawned)

            self._commit("complete")
            if spawned is not None:
                logger.info("Task %s -> completed; next occurrence %s due=%s", task.id, spawned.id, spawned.due)
            else:
                logger.info("Task %s -> completed", task.id)
            return CompletionResult(task=task.copy(), spawned=spawned.copy() if spawned else None)

    def snooze(self, task_id: str, days: float = 1) -> Task | None:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None
            base = task.due if task.due is not None else self._clock()
            task.due = add_days(base, days)
            self._commit("snooze")
            logger.debug("Task %s snoozed %s day(s) -> due=%s", task.id, days, task.due)
            return task.copy()

    def edit(
        self,
        task_id: str,
        *,
        title: str = _UNSET,
        notes: str = _UNSET,
        due: datetime | None = _UNSET,
        priority: Priority | str = _UNSET,
        tags: list[str] = _UNSET,
        repeat: Repeat | str = _UNSET,
        completed: bool = _UNSET,
    ) -> Task | None:
        """Merge the given fields into a task. id and created_at cannot change."""
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None

            if title is not _UNSET:
                clean = (title or "").strip()
                if clean:
                    task.title = clean
                else:
                    logger.debug("edit ignored empty title for task %s", task_id)
            if notes is not _UNSET:
                task.notes = (notes or "").strip()
            if due is not _UNSET:
                task.due = as_aware(due)
            if priority is not _UNSET:
                task.priority = Priority.from_raw(priority)
            if tags is not _UNSET:
                task.tags = list(tags or [])
            if repeat is not _UNSET:
                task.repeat = Repeat.from_raw(repeat)
            if completed is not _UNSET:
                if completed and not task.completed:
                    task.completed_at = self._clock()
                elif not completed:
                    task.completed_at = None
                task.completed = bool(completed)

            self._commit("edit")
            return task.copy()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return False
            self._tasks.remove(task)
            self._commit("delete")
            logger.debug("Task %s deleted", task_id)
            return True

    def clear_all(self) -> None:
        with self._lock:
            n = len(self._tasks)
            self._tasks.clear()
            self._commit("clear")
            logger.info("Cleared %d task(s)", n)
