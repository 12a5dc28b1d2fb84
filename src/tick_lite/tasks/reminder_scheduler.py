# src/tick_lite/tasks/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small polling loop that:
- takes a consistent snapshot of the task store,
- picks open tasks whose due instant is within +/- window of now,
- sends one notification per such task via an injected notifier.

No per-task memory is kept between ticks: a task stays inside a 60s window
for several 30s ticks and is announced on each of them.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import Notifier, TaskReader
from .due_dates import as_aware, utc_now
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0
DEFAULT_WINDOW_SECONDS = 60.0


@dataclass(slots=True, frozen=True)
class Reminder:
    task_id: str
    title: str
    body: str


def find_due_reminders(
    tasks: Iterable[Task],
    now: datetime,
    window_seconds: float = DEFAULT_WINDOW_SECONDS,
) -> list[Reminder]:
    """Open tasks with -window < (due - now) <= window."""
    now = as_aware(now)
    out: list[Reminder] = []
    for t in tasks:
        if t.completed or t.due is None:
            continue
        delta = (as_aware(t.due) - now).total_seconds()
        if -window_seconds < delta <= window_seconds:
            out.append(Reminder(task_id=t.id, title=f"Task due soon: {t.title}", body=t.notes or ""))
    return out


def reminder_tick(
    task_store: TaskReader,
    notifier: Notifier,
    now: datetime,
    *,
    window_seconds: float = DEFAULT_WINDOW_SECONDS,
) -> int:
    """Run one scan. Returns how many notifications were handed to the notifier."""
    try:
        tasks = task_store.snapshot()
    except Exception:
        logger.exception("snapshot failed")
        return 0

    sent = 0
    for reminder in find_due_reminders(tasks, now, window_seconds):
        try:
            notifier.notify(reminder.title, reminder.body)
            sent += 1
            logger.info("Reminder sent task_id=%s", reminder.task_id)
        except Exception:
            logger.exception("notify failed task_id=%s", reminder.task_id)
    return sent


async def run_reminder_scheduler(
        task_store: TaskReader,
        notifier: Notifier,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], datetime] = utc_now,
) -> None:
    """
    Simple polling scheduler.

    Every interval_seconds: reminder_tick(...) against the current clock.

    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        try:
            reminder_tick(task_store, notifier, clock(), window_seconds=window_seconds)
        except Exception:
            logger.exception("reminder tick failed")
        await asyncio.sleep(sleep_s)


@dataclass
class ReminderRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task[None]

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.task.cancel)
        except Exception:
            logger.debug("Failed to signal reminder stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_reminders_in_background(
    task_store: TaskReader,
    notifier: Notifier,
    *,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    window_seconds: float = DEFAULT_WINDOW_SECONDS,
) -> ReminderRunner | None:
    """
    Start the reminder loop in a background thread with its own event loop,
    so the blocking console REPL can run in parallel.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        task = loop.create_task(
            run_reminder_scheduler(
                task_store,
                notifier,
                interval_seconds=interval_seconds,
                window_seconds=window_seconds,
            )
        )

        holder["loop"] = loop
        holder["task"] = task
        ready.set()

        try:
            loop.run_until_complete(task)
        except asyncio.CancelledError:
            logger.info("Reminder scheduler cancelled.")
        except Exception:
            logger.exception("Reminder scheduler crashed.")
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="tick-lite-reminders", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    task = holder.get("task")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(task, asyncio.Task):
        logger.error("Reminder thread did not initialize properly.")
        return None

    logger.info("Reminder scheduler started (interval=%ss window=%ss).", interval_seconds, window_seconds)
    return ReminderRunner(thread=t, loop=loop, task=task)
