# src/deskmate/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

Keeps one armed one-shot timer per live, not-yet-fired task:
- loads persisted tasks at startup and arms a timer for each whose HH:MM is
  still ahead today (earlier ones are skipped, never rolled to tomorrow),
- on expiry: in-app callback -> OS toast -> store delete -> map cleanup,
  each step isolated from the previous one's failure,
- cancel / stop / clear_all drop timers (clear_all also wipes the store).

Nothing here retries. Failures are logged where they happen.
"""

import logging
import threading
from datetime import datetime
from typing import Callable

from ..core.ports import Notifier, ReminderCallback, ReminderRepo, TimerHandle, Timers
from ..notifications import format_reminder_message, format_toast_message
from .task_models import ReminderState, Task
from .timeparse import seconds_until
from .timers import ThreadingTimers

logger = logging.getLogger(__name__)


class ReminderScheduler:
    def __init__(
        self,
        task_store: ReminderRepo,
        *,
        timers: Timers | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
        notify_title: str = "Desktop Agent Reminder",
        notify_timeout_seconds: int = 10,
    ) -> None:
        self._store = task_store
        self._timers: Timers = timers if timers is not None else ThreadingTimers()
        self._notifier = notifier
        self._clock = clock or datetime.now
        self._notify_title = notify_title
        self._notify_timeout = int(notify_timeout_seconds)

        self._on_notify: ReminderCallback | None = None
        self._scheduled: dict[int, TimerHandle] = {}
        self._lock = threading.Lock()

    # ---- introspection ----

    def is_scheduled(self, task_id: int) -> bool:
        with self._lock:
            return int(task_id) in self._scheduled

    def scheduled_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._scheduled)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._scheduled)

    def is_upcoming_today(self, time_hhmm: str) -> bool:
        """Would a task at this HH:MM be armed (rather than skipped) right now?"""
        return seconds_until(time_hhmm, self._clock()) is not None

    # ---- lifecycle ----

    def initialize(self, on_notify: ReminderCallback | None) -> None:
        """
        Register the process-wide notification callback and arm timers for
        every persisted task. Call exactly once at startup.
        """
        self._on_notify = on_notify
        logger.info("Reminder system initialized.")
        self.schedule_existing_reminders()

    def schedule_existing_reminders(self) -> int:
        try:
            tasks = self._store.list_tasks()
        except Exception:
            logger.exception("Failed to load persisted reminders; none scheduled.")
            return 0

        for task in tasks:
            try:
                self.schedule_reminder(task)
            except ValueError:
                logger.warning("Reminder %s has malformed time %r; not scheduled.", task.id, task.time)

        armed = sum(1 for t in tasks if self.is_scheduled(t.id))
        logger.info("Scheduled %d of %d existing reminders.", armed, len(tasks))
        return armed

    def schedule_reminder(self, task: Task) -> None:
        """
        Arm a timer for today's task.time, or skip when that moment is not
        strictly in the future. Malformed time raises ValueError.
        """
        now = self._clock()
        delay = seconds_until(task.time, now)

        if delay is None:
            logger.info(
                "Reminder %s (%r at %s) -> %s: time already passed today.",
                task.id,
                task.description,
                task.time,
                ReminderState.SKIPPED.value,
            )
            return

        with self._lock:
            previous = self._scheduled.pop(task.id, None)
            if previous is not None:
                logger.warning("Reminder %s was already armed; replacing its timer.", task.id)
                self._timers.cancel(previous)

            holder: list[TimerHandle] = []
            handle = self._timers.call_later(delay, lambda: self._on_timer(task, holder))
            holder.append(handle)
            self._scheduled[task.id] = handle

        logger.info(
            "Reminder %s (%r) -> %s: fires at %s in %d min.",
            task.id,
            task.description,
            ReminderState.SCHEDULED.value,
            task.time,
            round(delay / 60),
        )

    def _on_timer(self, task: Task, holder: list[TimerHandle]) -> None:
        # Popping the entry is the claim; cancel_reminder after this is a no-op.
        with self._lock:
            current = self._scheduled.get(task.id)
            if current is None or not holder or current != holder[0]:
                logger.debug("Stale timer for reminder %s ignored.", task.id)
                return
            del self._scheduled[task.id]
        self.trigger_reminder(task)

    def trigger_reminder(self, task: Task) -> None:
        """Deliver the reminder, then delete the task. Terminal for this id."""
        logger.info("Triggering reminder %s: %s at %s", task.id, task.description, task.time)

        callback = self._on_notify
        if callback is not None:
            try:
                callback(format_reminder_message(task))
            except Exception:
                logger.exception("Reminder callback failed task_id=%s", task.id)

        if self._notifier is not None:
            try:
                self._notifier.notify(
                    title=self._notify_title,
                    message=format_toast_message(task),
                    timeout=self._notify_timeout,
                )
            except Exception:
                logger.exception("System notification failed task_id=%s", task.id)

        try:
            if self._store.delete_task(task.id):
                logger.info("Task %s deleted after reminder notification.", task.id)
            else:
                logger.info("Task %s was already gone from the store.", task.id)
        except Exception:
            logger.exception("Failed to delete task %s after reminder.", task.id)

        with self._lock:
            self._scheduled.pop(task.id, None)

        logger.info("Reminder %s -> %s.", task.id, ReminderState.FIRED.value)

    def cancel_reminder(self, task_id: int) -> bool:
        """Cancel an armed reminder. Unknown ids are a no-op (returns False)."""
        with self._lock:
            handle = self._scheduled.pop(int(task_id), None)
            if handle is None:
                logger.debug("cancel_reminder: task %s not scheduled.", task_id)
                return False
            self._timers.cancel(handle)

        logger.info("Reminder %s -> %s.", task_id, ReminderState.CANCELLED.value)
        return True

    def _cancel_all_locked(self) -> int:
        n = len(self._scheduled)
        for handle in self._scheduled.values():
            self._timers.cancel(handle)
        self._scheduled.clear()
        return n

    def stop(self) -> None:
        """Cancel every armed timer (shutdown). The store is left untouched."""
        with self._lock:
            n = self._cancel_all_locked()
        logger.info("Reminder system stopped; %d timer(s) cancelled.", n)

    # ---- composite operations used by the command layer ----

    def add_reminder(self, description: str, time_hhmm: str) -> Task:
        """Persist a new reminder (the store assigns the id) and schedule it."""
        task_id = self._store.add_task(description, time_hhmm)
        task = Task(id=task_id, description=description.strip(), time=time_hhmm)
        self.schedule_reminder(task)
        logger.info("New reminder %s: %s at %s", task.id, task.description, task.time)
        return task

    def clear_all(self) -> None:
        # Timers first, so nothing fires against rows that are about to vanish.
        with self._lock:
            n = self._cancel_all_locked()
        removed = self._store.clear_tasks()
        logger.info("All reminders cleared: %d timer(s) cancelled, %s row(s) removed.", n, removed)
