# src/tick_lite/storage/saver.py

"""
Ordered, fire-and-forget snapshot saving.

The store submits (revision, snapshot) after each mutation and returns
immediately. A single worker thread writes snapshots in revision order:
- only the newest pending snapshot is kept (older ones are superseded),
- a revision not above the highest one already accepted is dropped,
so an older mutation can never overwrite a newer one on disk.
"""

from __future__ import annotations

import logging
import threading

from ..core.ports import TaskPersistence
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class BackgroundSaver:
    def __init__(self, persistence: TaskPersistence, *, name: str = "tick-lite-saver") -> None:
        self._persistence = persistence
        self._cond = threading.Condition()
        self._pending: tuple[int, list[Task]] | None = None
        self._busy = False
        self._closed = False
        self._latest_revision = 0
        self._committed_revision = 0
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def committed_revision(self) -> int:
        with self._cond:
            return self._committed_revision

    def submit(self, revision: int, tasks: list[Task]) -> None:
        with self._cond:
            if self._closed:
                logger.warning("Saver closed; dropping revision=%s", revision)
                return
            if revision <= self._latest_revision:
                logger.debug("Stale snapshot dropped revision=%s latest=%s", revision, self._latest_revision)
                return
            self._latest_revision = revision
            self._pending = (revision, tasks)
            self._cond.notify_all()

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._pending is None and not self._closed:
                    self._cond.wait()
                if self._pending is None:
                    return
                revision, tasks = self._pending
                self._pending = None
                self._busy = True

            try:
                self._persistence.save(tasks)
            except Exception:
                logger.exception("Saving tasks failed revision=%s", revision)
            finally:
                with self._cond:
                    self._committed_revision = revision
                    self._busy = False
                    self._cond.notify_all()

    def flush(self, timeout: float | None = 5.0) -> bool:
        """Wait until every submitted snapshot has been handled. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending is None and not self._busy, timeout=timeout)

    def close(self, timeout: float | None = 5.0) -> None:
        self.flush(timeout=timeout)
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        self._thread.join(timeout=timeout)
