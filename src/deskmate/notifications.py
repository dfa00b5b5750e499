# src/deskmate/notifications.py

from __future__ import annotations

import logging

from .tasks.task_models import Task

logger = logging.getLogger(__name__)


def format_reminder_message(task: Task) -> str:
    """In-app text for a fired reminder."""
    return (
        "REMINDER ALERT!\n\n"
        f"Task: {task.description}\n"
        f"Time: {task.time}\n\n"
        "This task is removed automatically after this notification.\n"
        "Use /tasks (or \"show my tasks\") to see remaining reminders."
    )


def format_toast_message(task: Task) -> str:
    return f"{task.description} at {task.time}"


class SystemNotifier:
    """
    OS toast via plyer (Windows / macOS / Linux backends).

    plyer is imported lazily so a missing platform backend only fails the
    toast, not the app. Errors propagate; the scheduler logs and swallows them.
    plyer has no "play sound" switch, so the toast uses the platform default.
    """

    def __init__(self, *, app_name: str = "deskmate", timeout_seconds: int = 10) -> None:
        self._app_name = app_name
        self._timeout_seconds = int(timeout_seconds)

    def notify(self, *, title: str, message: str, timeout: int | None = None) -> None:
        from plyer import notification

        notification.notify(
            title=title,
            message=message,
            app_name=self._app_name,
            timeout=int(timeout if timeout is not None else self._timeout_seconds),
        )
        logger.debug("System notification sent: %s", title)


class NullNotifier:
    """Used when OS notifications are disabled."""

    def notify(self, *, title: str, message: str, timeout: int | None = None) -> None:
        return
