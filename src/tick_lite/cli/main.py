# src/tick_lite/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the reminder scheduler in a background thread (optional),
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.reminder_scheduler import ReminderRunner, start_reminders_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    reminders: ReminderRunner | None = None
    if settings.reminders_enabled:
        reminders = start_reminders_in_background(
            state.task_store,
            state.notifier,
            interval_seconds=settings.reminder_interval_seconds,
            window_seconds=settings.reminder_window_seconds,
        )

    try:
        run_console_loop(state)
    finally:
        if reminders is not None:
            reminders.stop()
            reminders.join(timeout=5.0)

        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
