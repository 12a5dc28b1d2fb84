# src/tick_lite/storage/json_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from ..tasks.due_dates import add_days
from ..tasks.task_models import Priority, Repeat, Task, new_task_id

logger = logging.getLogger(__name__)


class JsonTaskPersistence:
    """
    Task collection stored as one JSON array of field-tagged records.

    Loading is best-effort:
    - missing file / invalid JSON / non-list payload -> None ("no saved state")
    - individual malformed records are skipped with a warning
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task] | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read tasks from %s; ignoring saved state", self._path)
            return None

        if not isinstance(data, list):
            logger.warning("Saved tasks in %s are not a list; ignoring saved state", self._path)
            return None

        out: list[Task] = []
        for i, rec in enumerate(data):
            if not isinstance(rec, dict):
                logger.warning("Skipping non-object task record #%d", i)
                continue
            try:
                out.append(Task.from_dict(rec))
            except (TypeError, ValueError):
                logger.warning("Skipping malformed task record #%d", i, exc_info=True)

        logger.info("Loaded %d task(s) from %s", len(out), self._path)
        return out

    def save(self, tasks: Sequence[Task]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(Exception):
            # Best-effort: keep personal data private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d task(s) to %s", len(tasks), self._path)


def seed_tasks(now: datetime) -> list[Task]:
    """Example tasks shown on first run."""
    return [
        Task(
            id=new_task_id(),
            title="Pay rent",
            created_at=now,
            notes="Collect cash from tenant",
            due=add_days(now, 1),
            priority=Priority.HIGH,
            tags=["rent", "monthly"],
            repeat=Repeat.MONTHLY,
        ),
        Task(
            id=new_task_id(),
            title="Fix sink in Apt 204",
            created_at=now,
            notes="Call plumber",
            due=add_days(now, 2),
            priority=Priority.MEDIUM,
            tags=["maintenance"],
            repeat=Repeat.NONE,
        ),
    ]
