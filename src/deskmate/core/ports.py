# src/deskmate/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler and router depend on Protocols instead of concrete implementations.
This keeps storage/timers/notifiers/LLM providers swappable and makes testing easier.
"""

from typing import Any, Callable, Hashable, Iterable, Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.

ReminderCallback = Callable[[str], None]
# In-app sink for fired reminders (console print, UI message, ...).

TimerHandle = Hashable
# Opaque handle returned by Timers.call_later; only ever passed back to Timers.cancel.


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI-compatible)."""
    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]: ...


class Timers(Protocol):
    """
    Cancellable one-shot timer capability.

    call_later() arms a timer that invokes callback() once after delay_seconds.
    cancel() must be safe to call on a handle that already fired or was cancelled.
    """

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle: ...
    def cancel(self, handle: TimerHandle) -> None: ...


class Notifier(Protocol):
    """OS-level notification (toast). Implementations may raise; callers swallow."""

    def notify(self, *, title: str, message: str, timeout: int) -> None: ...


class ReminderRepo(Protocol):
    def add_task(self, description: str, time_hhmm: str) -> int: ...
    def list_tasks(self) -> list[Any]: ...
    def delete_task(self, task_id: int) -> bool: ...
    def clear_tasks(self) -> int: ...
