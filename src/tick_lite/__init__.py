"""tick-lite: a small personal task tracker with recurring tasks and local reminders."""

__version__ = "0.1.0"
