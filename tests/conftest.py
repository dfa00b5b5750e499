# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from deskmate.core.state import AppState
from deskmate.tasks.task_scheduler import ReminderScheduler
from deskmate.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeLLMClient, ManualTimers, RecordingNotifier

# 14:00 local time; most scenarios place reminders relative to this.
NOW = datetime(2026, 10, 17, 14, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="deskmate-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        llm_models=["test-model"],
        notify_enabled=False,
        notify_title="Desktop Agent Reminder",
        notify_timeout_seconds=10,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture()
def timers() -> ManualTimers:
    return ManualTimers()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def scheduler(
    store: TaskStore, timers: ManualTimers, notifier: RecordingNotifier, clock: FakeClock
) -> ReminderScheduler:
    return ReminderScheduler(store, timers=timers, notifier=notifier, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, scheduler: ReminderScheduler) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: the SQLite TaskStore is real because its behavior is part of what
    we want to test.
    """
    return AppState(
        settings=settings,
        llm=FakeLLMClient(),
        task_store=store,
        scheduler=scheduler,
    )
