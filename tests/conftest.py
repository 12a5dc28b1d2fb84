# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tick_lite.core.state import AppState
from tick_lite.tasks.task_store import TaskStore

from .fakes import FakeNotifier, FrozenClock, RecordingSaver, sequential_ids


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tick-lite-test",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
        seed_on_first_run=True,
        reminders_enabled=False,
        reminder_interval_seconds=30.0,
        reminder_window_seconds=60.0,
        notifications_enabled=False,
        snooze_days_default=1.0,
    )


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def saver() -> RecordingSaver:
    return RecordingSaver()


@pytest.fixture()
def store(clock: FrozenClock, saver: RecordingSaver) -> TaskStore:
    return TaskStore(saver=saver, clock=clock, id_factory=sequential_ids())


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, notifier: FakeNotifier) -> AppState:
    """AppState wired with an in-memory store (no saver) and a fake notifier."""
    return AppState(
        settings=settings,
        task_store=TaskStore(id_factory=sequential_ids()),
        notifier=notifier,
    )
