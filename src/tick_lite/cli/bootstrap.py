# src/tick_lite/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads the saved task collection (or seeds it on first run),
- wires persistence, the task store and the notifier into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.notifier import DesktopNotifier, LogNotifier
from ..core.ports import Notifier, TaskPersistence
from ..core.state import AppState
from ..storage.json_store import JsonTaskPersistence, seed_tasks
from ..storage.saver import BackgroundSaver
from ..tasks.due_dates import utc_now
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def load_initial_tasks(persistence: TaskPersistence, *, seed_on_first_run: bool) -> list[Task]:
    """
    Saved tasks if there are any usable ones, else the seed (or nothing).

    An empty saved list is a valid state and is not reseeded.
    """
    try:
        loaded = persistence.load()
    except Exception:
        logger.exception("Loading saved tasks failed")
        loaded = None

    if loaded is not None:
        return loaded

    if not seed_on_first_run:
        return []

    seed = seed_tasks(utc_now())
    try:
        persistence.save(seed)
    except Exception:
        logger.exception("Saving seed tasks failed")
    logger.info("No saved tasks; seeded %d example task(s).", len(seed))
    return seed


def build_notifier(settings) -> Notifier:
    if getattr(settings, "notifications_enabled", False):
        return DesktopNotifier(app_name=getattr(settings, "app_name", "tick-lite"))
    return LogNotifier()


def create_initial_state(
    *,
    settings=None,
    persistence: TaskPersistence | None = None,
    notifier: Notifier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/persistence/notifier injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if persistence is None:
        _ensure_local_dirs(settings)
        persistence = JsonTaskPersistence(settings.tasks_path)

    tasks = load_initial_tasks(persistence, seed_on_first_run=settings.seed_on_first_run)
    saver = BackgroundSaver(persistence)

    return AppState(
        settings=settings,
        task_store=TaskStore(tasks, saver=saver),
        notifier=notifier if notifier is not None else build_notifier(settings),
        saver=saver,
    )


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown: flush pending saves (no exceptions should escape)."""
    if state.saver is None:
        return
    try:
        state.saver.close()
    except Exception:
        logger.exception("Failed to flush pending saves.")
