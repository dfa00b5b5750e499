# src/deskmate/core/router.py

"""
Command router: free text -> LLM -> JSON action -> reminder helpers.

The model only classifies. Execution of reminder actions goes through
tasks.task_api; the OS-shell actions the prompt still mentions are answered
with a short "not supported" reply.
"""

from __future__ import annotations

import json
import logging
import random
from typing import Any

from ..llm.client import friendly_llm_error_message
from ..tasks import task_api
from .ports import ChatMessage
from .state import AppState

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a desktop AI agent. Parse user commands and respond with JSON only, containing:
- action: "add_reminder", "show_tasks", "clear_tasks", "delete_task", "open_app", "search_web", "visit_website", "system_info", "quick_action", "chat"
- task: description for reminders
- time: time for reminders (convert to HH:MM 24-hour format, e.g., "3pm" -> "15:00")
- task_id: ID for deleting specific tasks
- app: application name for opening apps
- query: search query for web searches
- website: website shortcut or URL for direct visits
- info_type: "cpu", "memory", "disk", "processes", "network", "system", "battery", "temp"
- action_type: "focus_mode", "break_time", "coding_setup", "study_mode", "gaming_mode", "meeting_mode", "cleanup", "shutdown_apps", "work_setup", "social_mode"
- message: for casual conversation responses

Use "chat" for greetings, casual questions, compliments, or general conversation.

Examples:
"hello" -> {"action": "chat", "message": "Hello! How can I help you today?"}
"show my tasks" -> {"action": "show_tasks"}
"delete task 3" -> {"action": "delete_task", "task_id": 3}
"remind me to call mom at 3pm" -> {"action": "add_reminder", "task": "call mom", "time": "15:00"}"""

REMINDER_ACTIONS = frozenset({"add_reminder", "show_tasks", "clear_tasks", "delete_task"})
UNSUPPORTED_ACTIONS = frozenset(
    {"open_app", "search_web", "visit_website", "system_info", "quick_action"}
)
VALID_ACTIONS = REMINDER_ACTIONS | UNSUPPORTED_ACTIONS | {"chat"}

FALLBACK_MESSAGE = (
    "I'm sorry, I didn't understand that command. Could you please rephrase it or try one of these: "
    "'remind me to...', 'show my tasks', 'delete task 2', 'clear all tasks', or just say hello!"
)

FRIENDLY_REPLIES = (
    "Hi there! I can keep reminders for you. Try 'remind me to stretch at 4pm'.",
    "Hello! What can I do for you today?",
    "Hey! Ask me to remind you of something, or say 'show my tasks'.",
)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """
    Return the first JSON object found in text.

    Models sometimes wrap the JSON in prose or ``` fences; scan for the first
    '{' that decodes into a dict.
    """
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


class CommandRouter:
    def __init__(self, state: AppState, *, history_limit: int = 10) -> None:
        self._state = state
        self._history_limit = max(0, int(history_limit))
        self._history: list[ChatMessage] = []

    @property
    def history(self) -> list[ChatMessage]:
        return list(self._history)

    def _remember(self, role: str, content: str) -> None:
        self._history.append({"role": role, "content": content})
        cap = self._history_limit * 2
        if len(self._history) > cap:
            del self._history[: len(self._history) - cap]

    def parse(self, text: str) -> dict[str, Any]:
        text = (text or "").strip()
        if not text:
            return {"action": "chat", "message": "Hello! How can I help you today?"}

        messages: list[ChatMessage] = [*self._history[-6:], {"role": "user", "content": text}]

        try:
            raw = "".join(self._state.llm.stream_chat(messages, SYSTEM_PROMPT))
        except RuntimeError as e:
            logger.exception("LLM call failed while parsing command.")
            return {"action": "chat", "message": friendly_llm_error_message(e)}

        logger.debug("LLM raw action: %s", raw)
        self._remember("user", text)
        self._remember("assistant", raw)

        data = extract_json_object(raw)
        if data is None or data.get("action") not in VALID_ACTIONS:
            logger.warning("Invalid command structure from LLM: %r", raw[:200])
            return {"action": "chat", "message": FALLBACK_MESSAGE}
        return data

    def dispatch(self, data: dict[str, Any]) -> str:
        action = data.get("action")

        if action == "add_reminder":
            return task_api.add_reminder(self._state, data.get("task"), data.get("time"))

        if action == "show_tasks":
            return task_api.list_reminders(self._state)

        if action == "clear_tasks":
            return task_api.clear_reminders(self._state)

        if action == "delete_task":
            task_id = data.get("task_id")
            if task_id is None or str(task_id).strip() == "":
                return "Please specify which task to delete."
            return task_api.delete_reminder(self._state, task_id)

        if action in UNSUPPORTED_ACTIONS:
            return f"The '{action}' action is not supported in this build; I only handle reminders."

        message = str(data.get("message") or "").strip()
        return message or random.choice(FRIENDLY_REPLIES)

    def handle(self, text: str) -> str:
        return self.dispatch(self.parse(text))
