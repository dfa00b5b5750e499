# src/deskmate/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_scheduler import ReminderScheduler
from ..tasks.task_store import TaskStore
from .ports import LLMClient


@dataclass
class AppState:
    """
    Everything the connectors and commands need, wired once in cli.bootstrap.

    settings is typed as Any so tests can pass a SimpleNamespace.
    """

    settings: Any
    llm: LLMClient
    task_store: TaskStore
    scheduler: ReminderScheduler
