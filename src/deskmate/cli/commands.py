# src/deskmate/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks import task_api

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Anything else is sent to the assistant, e.g. \"remind me to call mom at 3pm\".")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    models = ", ".join(list(getattr(settings, "llm_models", []) or [])) or "-"
    llm_kind = type(state.llm).__name__
    notify = "ON" if getattr(settings, "notify_enabled", False) else "OFF"
    return (
        "Status:\n"
        f"  LLM client: {llm_kind}\n"
        f"  Models (priority -> fallback): {models}\n"
        f"  OS notifications: {notify}\n"
        f"  Stored tasks: {state.task_store.count_tasks()}\n"
        f"  Armed reminders: {state.scheduler.pending_count}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    return task_api.list_reminders(state)


def cmd_remind(state: AppState, args: list[str]) -> str:
    """
    /remind 15:30 call mom
    /remind 3pm call mom
    /remind 2:30 pm call mom
    """
    if len(args) >= 2 and args[1].lower() in ("am", "pm"):
        args = [f"{args[0]} {args[1]}", *args[2:]]
    if len(args) < 2:
        return "Usage: /remind <time> <description>, e.g. /remind 3pm call mom"
    return task_api.add_reminder(state, " ".join(args[1:]), args[0])


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <task id>"
    return task_api.delete_reminder(state, args[0])


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args or args[0].lower() != "yes":
        return "This removes every task and cancels all reminders. Confirm with: /clear yes"
    if emit:
        emit("Clearing all tasks...")
    return task_api.clear_reminders(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show LLM/notification settings and reminder counts.")
registry.register("tasks", cmd_tasks, help_text="List stored reminders.", aliases=["list"])
registry.register("remind", cmd_remind, help_text="Add a reminder: /remind <time> <description>.")
registry.register("delete", cmd_delete, help_text="Delete a reminder: /delete <id>.", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Delete all reminders: /clear yes.")
