# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TICK_APP_NAME": "App display name (default: tick-lite).",
    "TICK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TICK_DATA_DIR": "Local data directory (default: .local/tick_lite).",
    "TICK_TASKS_PATH": "Saved task collection, JSON (default: <data_dir>/tasks.json).",
    "TICK_SEED_ON_FIRST_RUN": "Create two example tasks when nothing is saved yet (default: true).",
    # Reminders
    "TICK_REMINDERS_ENABLED": "Run the due-soon reminder loop (default: true).",
    "TICK_REMINDER_INTERVAL_SECONDS": "Seconds between reminder scans (default: 30).",
    "TICK_REMINDER_WINDOW_SECONDS": "Remind when due is within +/- this many seconds (default: 60).",
    "TICK_NOTIFICATIONS_ENABLED": "Send desktop notifications via plyer; otherwise reminders go to the log.",
    # Actions
    "TICK_SNOOZE_DAYS_DEFAULT": "Days added by /snooze without an argument (default: 1).",
}
