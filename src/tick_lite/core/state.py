# src/tick_lite/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..storage.saver import BackgroundSaver
from ..tasks.task_store import TaskStore
from ..tasks.views import View
from .ports import Notifier


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskStore
    notifier: Notifier
    saver: BackgroundSaver | None = None

    # Console-side view state (what /list shows without arguments).
    current_view: View = View.INBOX
    search_text: str = ""
