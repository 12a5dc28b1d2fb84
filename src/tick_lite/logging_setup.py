# src/tick_lite/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tick_lite.log"


# Background components that would interleave with the prompt at INFO/DEBUG.
_BACKGROUND_LOGGERS = (
    "tick_lite.storage.",
    "tick_lite.tasks.reminder_scheduler",
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL readable:
    - tick_lite logs pass, except the saver thread and the reminder loop,
      which only reach the console at WARNING+ (they run every few seconds)
    - reminders routed through LogNotifier are warnings, so they still show
    - anything else (plyer backends, dbus, py.warnings) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if not name.startswith("tick_lite."):
            return record.levelno >= logging.ERROR

        if name.startswith(_BACKGROUND_LOGGERS):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/tick_lite",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: readable + filtered for interactive use
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)

    # Keep notification backends out of the file log too.
    for noisy in ("plyer", "dbus"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
