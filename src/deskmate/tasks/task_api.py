# src/deskmate/tasks/task_api.py

"""
High-level reminder helpers used by slash commands and the LLM router.

Each function returns the user-facing reply. Store and scheduler failures are
logged here and turned into a short failure reply.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import AppState
from .timeparse import parse_time_format

logger = logging.getLogger(__name__)


def add_reminder(
    state: AppState,
    description: str | None,
    raw_time: str | None,
    *,
    now: datetime | None = None,
) -> str:
    description = (description or "").strip()
    raw_time = (raw_time or "").strip()

    if not description or not raw_time:
        return "Please specify both task and time for the reminder."

    hhmm = parse_time_format(raw_time, now=now)
    if hhmm is None:
        return "Invalid time format. Use formats like '3pm', '15:30', '2:30pm', 'in 20 minutes'."

    upcoming = state.scheduler.is_upcoming_today(hhmm)
    try:
        task = state.scheduler.add_reminder(description, hhmm)
    except Exception:
        logger.exception("add_reminder failed description=%r time=%s", description, hhmm)
        return "Could not save the reminder."

    if not upcoming:
        return (
            f"Reminder saved: \"{task.description}\" at {task.time} (task {task.id}), "
            "but that time has already passed today, so it will not fire."
        )
    return f"Reminder set: \"{task.description}\" at {task.time} (task {task.id})."


def list_reminders(state: AppState) -> str:
    try:
        tasks = state.task_store.list_tasks()
    except Exception:
        logger.exception("list_tasks failed")
        return "Could not read tasks."

    if not tasks:
        return "No tasks found. You're all caught up!"

    lines = ["Your Tasks:"]
    for t in tasks:
        lines.append(f"{t.id}. {t.description} @ {t.time}")
    return "\n".join(lines)


def delete_reminder(state: AppState, task_id: object) -> str:
    try:
        tid = int(str(task_id).strip())
    except (TypeError, ValueError):
        return "Please specify which task to delete (a numeric task id)."

    # Timer first, then the row.
    state.scheduler.cancel_reminder(tid)
    try:
        removed = state.task_store.delete_task(tid)
    except Exception:
        logger.exception("delete_task failed task_id=%s", tid)
        return f"Could not delete task {tid}."

    if not removed:
        return f"Task {tid} not found."
    return f"Task {tid} deleted and reminder cancelled."


def clear_reminders(state: AppState) -> str:
    try:
        state.scheduler.clear_all()
    except Exception:
        logger.exception("clear_all failed")
        return "Could not clear tasks."
    return "All tasks cleared and reminders cancelled!"
