# src/deskmate/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ReminderState(StrEnum):
    """
    Per-task reminder lifecycle.

    created -> scheduled | skipped
    scheduled -> fired | cancelled

    skipped, fired and cancelled are terminal. Only used for logging; the
    scheduler's single piece of state is the id -> timer map.
    """

    CREATED = "created"
    SCHEDULED = "scheduled"
    SKIPPED = "skipped"
    FIRED = "fired"
    CANCELLED = "cancelled"


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    description: str
    time: str  # "HH:MM", 24-hour, always "today"
    created_at: float = 0.0
