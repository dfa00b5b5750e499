# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
import sqlite3
from datetime import timedelta

import pytest

from deskmate.tasks.task_models import Task
from deskmate.tasks.task_scheduler import ReminderScheduler
from deskmate.tasks.task_store import TaskStore
from deskmate.tasks.timers import AsyncioTimers

from .conftest import NOW
from .fakes import FakeClock, ManualTimers, RecordingNotifier


def _add(store: TaskStore, description: str, hhmm: str) -> Task:
    task_id = store.add_task(description, hhmm)
    return Task(id=task_id, description=description, time=hhmm)


def test_future_task_arms_one_timer_and_fires_once(scheduler, store, timers) -> None:
    task = _add(store, "stand up", "14:30")
    received: list[str] = []
    scheduler.initialize(received.append)

    assert scheduler.scheduled_ids() == [task.id]
    assert len(timers.armed) == 1
    assert timers.armed[0].delay == pytest.approx(30 * 60)

    timers.fire_all()

    assert len(received) == 1
    assert store.get_task(task.id) is None
    assert not scheduler.is_scheduled(task.id)
    assert timers.armed == []


@pytest.mark.parametrize("hhmm", ["09:00", "13:59", "14:00"])
def test_past_or_current_time_is_skipped(scheduler, store, timers, hhmm) -> None:
    task = _add(store, "too late", hhmm)

    scheduler.schedule_reminder(task)

    assert timers.created == []
    assert scheduler.pending_count == 0
    assert store.get_task(task.id) is not None


def test_seconds_are_ignored_when_computing_target(store, timers) -> None:
    clock = FakeClock(NOW + timedelta(seconds=59, microseconds=500))
    scheduler = ReminderScheduler(store, timers=timers, clock=clock)

    scheduler.schedule_reminder(_add(store, "next minute", "14:01"))

    assert len(timers.armed) == 1
    assert timers.armed[0].delay == pytest.approx(0.9995)


def test_cancel_armed_reminder_prevents_firing(scheduler, store, timers) -> None:
    task = _add(store, "water plants", "18:00")
    received: list[str] = []
    scheduler.initialize(received.append)
    timer = timers.armed[0]

    assert scheduler.cancel_reminder(task.id) is True

    assert timer.cancelled
    assert not scheduler.is_scheduled(task.id)
    timers.fire(timer)
    assert received == []
    # cancel only touches the timer; the row goes via the explicit delete path
    assert store.get_task(task.id) is not None


def test_timer_that_lost_race_with_cancel_does_not_notify(scheduler, store, timers) -> None:
    task = _add(store, "race", "15:00")
    received: list[str] = []
    scheduler.initialize(received.append)
    timer = timers.armed[0]

    scheduler.cancel_reminder(task.id)
    # Simulate a timer thread that was already past its cancellation point.
    timer.callback()

    assert received == []
    assert store.get_task(task.id) is not None


def test_cancel_after_timer_claimed_its_entry_does_not_stop_delivery(scheduler, store, timers) -> None:
    task = _add(store, "claimed", "15:00")
    seen: list[tuple[bool, bool]] = []

    def on_notify(message: str) -> None:
        seen.append((scheduler.is_scheduled(task.id), scheduler.cancel_reminder(task.id)))

    scheduler.initialize(on_notify)
    timer = timers.armed[0]
    timers.fire(timer)
    timer.callback()

    assert seen == [(False, False)]
    assert not timer.cancelled
    assert store.get_task(task.id) is None


def test_cancel_absent_id_is_noop(scheduler, store, timers) -> None:
    _add(store, "keep me", "20:00")
    scheduler.initialize(None)
    before = scheduler.scheduled_ids()

    assert scheduler.cancel_reminder(999) is False
    assert scheduler.cancel_reminder(999) is False
    assert scheduler.scheduled_ids() == before


def test_clear_all_empties_map_and_store(scheduler, store, timers) -> None:
    _add(store, "past", "08:00")
    _add(store, "future a", "16:00")
    fired = _add(store, "future b", "17:00")
    scheduler.initialize(None)
    timers.fire(next(t for t in timers.armed if t.delay == pytest.approx(3 * 3600)))
    assert store.get_task(fired.id) is None

    scheduler.clear_all()

    assert scheduler.pending_count == 0
    assert store.count_tasks() == 0
    assert timers.armed == []


def test_trigger_twice_is_safe(scheduler, store, notifier) -> None:
    task = _add(store, "twice", "19:00")
    received: list[str] = []
    scheduler.initialize(received.append)

    scheduler.trigger_reminder(task)
    scheduler.trigger_reminder(task)

    assert scheduler.pending_count == 0
    assert store.count_tasks() == 0
    assert len(received) == 2


def test_restart_arms_only_future_tasks(store, timers, clock) -> None:
    past = _add(store, "morning run", "09:00")
    future = _add(store, "sleep", "23:59")

    scheduler = ReminderScheduler(store, timers=timers, clock=clock)
    scheduler.initialize(lambda _msg: None)

    assert scheduler.scheduled_ids() == [future.id]
    assert len(timers.armed) == 1
    assert store.get_task(past.id) is not None


def test_add_reminder_then_fire_scenario(scheduler, store, timers, notifier) -> None:
    received: list[str] = []
    scheduler.initialize(received.append)

    task = scheduler.add_reminder("call mom", "15:00")

    rows = store.list_tasks()
    assert [(t.description, t.time) for t in rows] == [("call mom", "15:00")]
    assert rows[0].id == task.id
    assert len(timers.armed) == 1
    assert timers.armed[0].delay * 1000 == pytest.approx(3_600_000)
    assert received == []

    timers.fire_all()

    assert len(received) == 1
    assert "call mom" in received[0]
    assert "15:00" in received[0]
    assert [t for t in store.list_tasks() if (t.description, t.time) == ("call mom", "15:00")] == []
    assert notifier.sent[0].message == "call mom at 15:00"
    assert notifier.sent[0].title == "Desktop Agent Reminder"


def test_notifier_failure_does_not_block_cleanup(store, timers, clock) -> None:
    notifier = RecordingNotifier(fail=True)
    scheduler = ReminderScheduler(store, timers=timers, notifier=notifier, clock=clock)
    received: list[str] = []
    scheduler.initialize(received.append)
    task = scheduler.add_reminder("toast fails", "15:00")

    timers.fire_all()

    assert len(received) == 1
    assert store.get_task(task.id) is None
    assert scheduler.pending_count == 0


def test_callback_failure_does_not_block_cleanup(scheduler, store, timers, notifier) -> None:
    def boom(_msg: str) -> None:
        raise RuntimeError("ui gone")

    scheduler.initialize(boom)
    task = scheduler.add_reminder("callback fails", "15:00")

    timers.fire_all()

    assert len(notifier.sent) == 1
    assert store.get_task(task.id) is None


class _DeleteFailsStore(TaskStore):
    def delete_task(self, task_id: int) -> bool:
        raise OSError("disk full")


def test_store_delete_failure_is_swallowed(tmp_path, timers, clock) -> None:
    store = _DeleteFailsStore(tmp_path / "broken.sqlite3")
    scheduler = ReminderScheduler(store, timers=timers, clock=clock)
    received: list[str] = []
    scheduler.initialize(received.append)
    task = scheduler.add_reminder("stale row", "15:00")

    timers.fire_all()

    assert len(received) == 1
    assert scheduler.pending_count == 0
    # the stale row stays visible to a later listing
    assert store.get_task(task.id) is not None


def test_row_deleted_elsewhere_before_firing(scheduler, store, timers) -> None:
    received: list[str] = []
    scheduler.initialize(received.append)
    task = scheduler.add_reminder("already gone", "15:00")
    store.delete_task(task.id)

    timers.fire_all()

    assert len(received) == 1
    assert scheduler.pending_count == 0


class _ListFailsStore(TaskStore):
    def list_tasks(self):
        raise OSError("locked")


def test_startup_read_failure_schedules_nothing(tmp_path, timers, clock) -> None:
    scheduler = ReminderScheduler(_ListFailsStore(tmp_path / "t.sqlite3"), timers=timers, clock=clock)

    scheduler.initialize(None)

    assert scheduler.pending_count == 0
    assert timers.created == []


def test_startup_skips_malformed_legacy_row_and_arms_the_rest(scheduler, store, timers) -> None:
    good = _add(store, "valid", "16:00")
    # Sorts ahead of the valid rows in ORDER BY time.
    conn = sqlite3.connect(store.db_path)
    try:
        conn.execute("INSERT INTO tasks(description, time) VALUES (?, ?)", ("legacy", "10 am"))
        conn.commit()
    finally:
        conn.close()
    later = _add(store, "later", "18:00")

    assert scheduler.schedule_existing_reminders() == 2
    assert scheduler.scheduled_ids() == sorted([good.id, later.id])
    assert store.count_tasks() == 3


def test_rescheduling_same_id_replaces_timer(scheduler, store, timers) -> None:
    task = _add(store, "once", "16:00")

    scheduler.schedule_reminder(task)
    first = timers.armed[0]
    scheduler.schedule_reminder(task)

    assert first.cancelled
    assert len(timers.armed) == 1
    assert scheduler.scheduled_ids() == [task.id]


def test_stop_cancels_timers_but_keeps_rows(scheduler, store, timers) -> None:
    _add(store, "a", "15:00")
    _add(store, "b", "16:00")
    scheduler.initialize(None)

    scheduler.stop()

    assert scheduler.pending_count == 0
    assert timers.armed == []
    assert store.count_tasks() == 2


def test_malformed_time_is_a_precondition_violation(scheduler) -> None:
    with pytest.raises(ValueError):
        scheduler.schedule_reminder(Task(id=1, description="bad", time="3pm"))


@pytest.mark.asyncio
async def test_scheduler_on_asyncio_timers_fires_and_deletes(store) -> None:
    target = NOW.replace(hour=15)
    clock = FakeClock(target - timedelta(milliseconds=20))
    scheduler = ReminderScheduler(store, timers=AsyncioTimers(), clock=clock)
    received: list[str] = []
    scheduler.initialize(received.append)

    task = scheduler.add_reminder("async reminder", "15:00")
    assert scheduler.is_scheduled(task.id)

    await asyncio.sleep(0.2)

    assert len(received) == 1
    assert store.count_tasks() == 0
    assert scheduler.pending_count == 0
