# src/deskmate/llm/offline.py

from __future__ import annotations

import json
import re
from collections.abc import Iterable

from ..core.ports import ChatMessage

_REMIND_RE = re.compile(
    r"remind\s+me\s+(?:to\s+)?(?P<task>.+?)\s+(?P<time>(?:today\s+)?at\s+.+|in\s+\d+\s+(?:minutes?|hours?))$"
)
_DELETE_RE = re.compile(r"(?:delete|remove|cancel)\s+(?:task|reminder)\s*#?\s*(?P<id>\d+)")
_GREETING_RE = re.compile(r"^(hello|hi|hey|thanks|thank you|how are you|good morning|good evening)\b")


class OfflineLLMClient:
    """
    Offline deterministic stand-in used when no LLM endpoint is configured.

    Recognizes the handful of reminder phrasings the router cares about and
    emits the same JSON action schema the hosted model is asked for.
    Everything else becomes a chat action explaining offline mode.
    """

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        user_text = ""
        for m in reversed(messages):
            if m["role"] == "user":
                user_text = m["content"]
                break

        yield json.dumps(self._plan(user_text), ensure_ascii=False)

    @staticmethod
    def _plan(text: str) -> dict[str, object]:
        t = " ".join((text or "").lower().split())

        m = _REMIND_RE.search(t)
        if m:
            return {"action": "add_reminder", "task": m.group("task").strip(), "time": m.group("time").strip()}

        m = _DELETE_RE.search(t)
        if m:
            return {"action": "delete_task", "task_id": int(m.group("id"))}

        if re.search(r"\b(clear|delete|remove)\s+(all\s+)?(my\s+)?(tasks|reminders)\b", t):
            return {"action": "clear_tasks"}

        if re.search(r"\b(show|list|what are)\b.*\b(tasks|reminders)\b", t):
            return {"action": "show_tasks"}

        if _GREETING_RE.search(t):
            return {"action": "chat", "message": "Hello! How can I help you today?"}

        return {
            "action": "chat",
            "message": (
                "Offline mode: no LLM endpoint is configured, so only simple phrasings work "
                "(\"remind me to ... at 3pm\", \"show my tasks\", \"delete task 2\", \"clear all tasks\"). "
                "Set DESKMATE_LLM_API_KEY to enable full language understanding."
            ),
        }
