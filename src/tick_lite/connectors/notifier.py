# src/tick_lite/connectors/notifier.py

from __future__ import annotations

import logging

from plyer import notification

logger = logging.getLogger(__name__)


class DesktopNotifier:
    """
    OS desktop notification via plyer.

    Backend problems (no notification daemon, unsupported platform) are logged
    and swallowed: a reminder must never break the scheduler.
    """

    def __init__(self, app_name: str = "tick-lite", timeout: int = 10) -> None:
        self._app_name = app_name
        self._timeout = timeout

    def notify(self, title: str, body: str) -> None:
        try:
            notification.notify(
                title=title,
                message=body or " ",
                app_name=self._app_name,
                timeout=self._timeout,
            )
        except Exception:
            logger.warning("Desktop notification failed: %s", title, exc_info=True)


class LogNotifier:
    """Fallback used when desktop notifications are not enabled."""

    def notify(self, title: str, body: str) -> None:
        if body:
            logger.warning("%s - %s", title, body)
        else:
            logger.warning("%s", title)
