"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, Priority, Repeat)
- due_dates.py: calendar / fixed-offset date arithmetic
- recurrence.py: next-occurrence computation for repeating tasks
- task_store.py: in-memory store with all mutating operations
- views.py: view classification, search, stats
- reminder_scheduler.py: polling loop that raises due-soon reminders
"""
