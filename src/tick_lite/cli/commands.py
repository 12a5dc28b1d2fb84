# src/tick_lite/cli/commands.py

from __future__ import annotations

import inspect
import logging
import math
import re
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, cast

from ..core.state import AppState
from ..tasks.due_dates import utc_now
from ..tasks.task_models import Priority, Repeat, Task, TaskDraft, parse_tags
from ..tasks.views import View, classify, count_stats, recently_completed

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_RELATIVE_DUE = re.compile(r"^\+(\d+(?:\.\d+)?)([mhdw])$")
_RELATIVE_UNITS = {"m": "minutes", "h": "hours", "d": "days", "w": "weeks"}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / formatting helpers ----


def parse_due(raw: str, now: datetime | None = None) -> datetime | None:
    """
    Parse a due value typed by the user.

    Accepted:
    - "none" / "-"            -> no due date
    - "+30m", "+2h", "+1d", "+1w" -> relative to now
    - ISO-8601 ("2026-10-16T09:00", "2026-10-16 09:00", "2026-10-16");
      naive values are local time

    Raises ValueError for anything else.
    """
    s = (raw or "").strip()
    if s.lower() in ("", "none", "-"):
        return None

    m = _RELATIVE_DUE.match(s.lower())
    if m:
        base = now if now is not None else utc_now()
        return base + timedelta(**{_RELATIVE_UNITS[m.group(2)]: float(m.group(1))})

    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def parse_fields(parts: list[str]) -> dict[str, str]:
    """["due=+1d", "tags=a,b"] -> {"due": "+1d", "tags": "a,b"}."""
    out: dict[str, str] = {}
    for part in parts:
        key, sep, value = part.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got {part.strip()!r}")
        out[key.strip().lower()] = value.strip()
    return out


def _split_pipes(args: list[str]) -> list[str]:
    return [p.strip() for p in " ".join(args).split("|") if p.strip()]


def _field_changes(fields: dict[str, str]) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for key, value in fields.items():
        if key == "title":
            changes["title"] = value
        elif key == "notes":
            changes["notes"] = value
        elif key == "due":
            changes["due"] = parse_due(value)
        elif key == "priority":
            changes["priority"] = Priority.from_raw(value)
        elif key == "tags":
            changes["tags"] = parse_tags(value)
        elif key == "repeat":
            changes["repeat"] = Repeat.from_raw(value)
        else:
            raise ValueError(f"unknown field {key!r}")
    return changes


def format_due(dt: datetime | None) -> str:
    if dt is None:
        return "No due"
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def format_task(task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    line = f"{box} {task.id}  {task.title}  ({format_due(task.due)}, {task.priority.value})"
    if task.repeat is not Repeat.NONE:
        line += f" repeats {task.repeat.value}"
    if task.tags:
        line += " " + " ".join(f"#{t}" for t in task.tags)
    if task.notes:
        line += f"\n      {task.notes}"
    return line


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Pay rent | due=+1d | priority=High | tags=rent,monthly | repeat=monthly | notes=...
    """
    parts = _split_pipes(args)
    if not parts:
        return "Usage: /add <title> [| due=... | priority=... | tags=a,b | repeat=... | notes=...]"

    try:
        changes = _field_changes(parse_fields(parts[1:]))
    except ValueError as e:
        return f"Cannot add task: {e}"

    draft = TaskDraft(
        title=parts[0],
        notes=changes.get("notes", ""),
        due=changes.get("due"),
        priority=changes.get("priority", Priority.MEDIUM),
        tags=changes.get("tags", []),
        repeat=changes.get("repeat", Repeat.NONE),
    )
    task = state.task_store.add(draft)
    if task is None:
        return "Task title is required."
    return f"Added:\n{format_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list                 -> current view and search
    /list today           -> switch view
    /list all rent        -> switch view and search for "rent"
    """
    if args and args[0].lower() in {v.value for v in View}:
        state.current_view = View(args[0].lower())
        state.search_text = " ".join(args[1:])
    elif args:
        state.search_text = " ".join(args)

    tasks = classify(state.task_store.snapshot(), state.current_view, utc_now(), state.search_text)
    header = "All tasks" if state.current_view is View.ALL else state.current_view.value.capitalize()
    if state.search_text:
        header += f" (search: {state.search_text})"
    if not tasks:
        return f"{header}:\n  No tasks here."
    return "\n".join([f"{header}:"] + [f"  {format_task(t)}" for t in tasks])


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    result = state.task_store.toggle_complete(args[0])
    if result is None:
        return f"No task with id {args[0]}."
    if not result.task.completed:
        return f"Reopened: {result.task.title}"
    reply = f"Completed: {result.task.title}"
    if result.spawned is not None:
        reply += f"\nNext occurrence {result.spawned.id} due {format_due(result.spawned.due)}"
    return reply


def cmd_snooze(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /snooze <id> [days]"
    days = float(getattr(state.settings, "snooze_days_default", 1.0))
    if len(args) > 1:
        try:
            days = float(args[1])
        except ValueError:
            return "Days must be a number."
        if not math.isfinite(days):
            return "Days must be a finite number."
    task = state.task_store.snooze(args[0], days)
    if task is None:
        return f"No task with id {args[0]}."
    return f"Snoozed: {task.title} -> {format_due(task.due)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> title=... | due=... | priority=... | tags=... | repeat=... | notes=..."""
    if len(args) < 2:
        return "Usage: /edit <id> key=value [| key=value ...]"
    try:
        changes = _field_changes(parse_fields(_split_pipes(args[1:])))
    except ValueError as e:
        return f"Cannot edit task: {e}"
    task = state.task_store.edit(args[0], **changes)
    if task is None:
        return f"No task with id {args[0]}."
    return f"Updated:\n{format_task(task)}"


def cmd_priority(state: AppState, args: list[str]) -> str:
    """Toggle High <-> Medium."""
    if not args:
        return "Usage: /priority <id>"
    current = state.task_store.get(args[0])
    if current is None:
        return f"No task with id {args[0]}."
    new = Priority.MEDIUM if current.priority is Priority.HIGH else Priority.HIGH
    task = state.task_store.edit(args[0], priority=new)
    if task is None:
        return f"No task with id {args[0]}."
    return f"Priority of {task.title}: {task.priority.value}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <id>"
    if not state.task_store.delete(args[0]):
        return f"No task with id {args[0]}."
    return "Deleted."


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    n = len(state.task_store)
    if emit and n:
        emit(f"[TASKS] Removing {n} task(s)...")
    state.task_store.clear_all()
    logger.debug("Clear requested (removed=%d)", n)
    return f"Removed {n} task(s)."


def cmd_stats(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.snapshot()
    stats = count_stats(tasks)
    lines = [
        "Stats:",
        f"  Total: {stats.total}",
        f"  Pending: {stats.pending}",
        f"  Completed: {stats.completed}",
        "Recently completed:",
    ]
    recent = recently_completed(tasks)
    if not recent:
        lines.append("  No completed tasks yet.")
    for t in recent:
        lines.append(f"  {t.title}  {format_due(t.completed_at)}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> | due=+1d | priority=High | tags=a,b | repeat=weekly | notes=...",
)
registry.register(
    "list",
    cmd_list,
    help_text="Show a view: /list [inbox|today|upcoming|completed|all] [search...]",
    aliases=["ls"],
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("snooze", cmd_snooze, help_text="Push the due date: /snooze <id> [days].")
registry.register("edit", cmd_edit, help_text="Edit fields: /edit <id> key=value | key=value.")
registry.register("priority", cmd_priority, help_text="Toggle High/Medium priority: /priority <id>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Remove every task.")
registry.register("stats", cmd_stats, help_text="Show totals and recently completed tasks.")
