"""
Reminder subsystem.

Components:
- task_models.py: data structures (Task, ReminderState)
- task_store.py: SQLite-backed storage
- timeparse.py: HH:MM validation and lenient time parsing
- timers.py: one-shot timer backends (threads, asyncio)
- task_scheduler.py: one armed timer per pending task, fire -> notify -> delete
- task_api.py: small high-level helpers used by commands and the router
"""
