# src/deskmate/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (store, scheduler, notifier, LLM).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LLMClient, Notifier
from ..core.state import AppState
from ..llm.client import OpenAICompatibleLLMClient
from ..llm.offline import OfflineLLMClient
from ..notifications import NullNotifier, SystemNotifier
from ..tasks.task_scheduler import ReminderScheduler
from ..tasks.task_store import TaskStore
from ..tasks.timers import ThreadingTimers

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def _build_llm(settings) -> LLMClient:
    try:
        return OpenAICompatibleLLMClient(settings)
    except RuntimeError as e:
        logger.info("LLM endpoint unavailable (%s); using offline client.", e)
        return OfflineLLMClient()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    The scheduler is constructed but not initialized; main() calls
    scheduler.initialize() once the notification sink exists.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    notifier: Notifier
    if settings.notify_enabled:
        notifier = SystemNotifier(app_name=settings.app_name, timeout_seconds=settings.notify_timeout_seconds)
    else:
        notifier = NullNotifier()

    task_store = TaskStore(settings.tasks_db_path)
    scheduler = ReminderScheduler(
        task_store,
        timers=ThreadingTimers(),
        notifier=notifier,
        notify_title=settings.notify_title,
        notify_timeout_seconds=settings.notify_timeout_seconds,
    )

    return AppState(
        settings=settings,
        llm=_build_llm(settings),
        task_store=task_store,
        scheduler=scheduler,
    )
