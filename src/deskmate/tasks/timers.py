# src/deskmate/tasks/timers.py

"""
Concrete one-shot timer backends for the reminder scheduler.

- ThreadingTimers: one daemon threading.Timer per reminder. Safe to arm and
  cancel from any thread; used by the console app, whose REPL blocks on input().
- AsyncioTimers: loop.call_later on a given event loop. Arm and cancel from the
  loop's own thread only (single-threaded cooperative model).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class ThreadingTimers:
    def __init__(self, *, name_prefix: str = "reminder") -> None:
        self._name_prefix = name_prefix

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
        delay = max(0.0, float(delay_seconds))

        def _run() -> None:
            try:
                callback()
            except Exception:
                # Nothing above a timer thread can handle it; keep the thread from dying noisily.
                logger.exception("Timer callback failed.")

        timer = threading.Timer(delay, _run)
        timer.daemon = True
        timer.name = f"{self._name_prefix}-{timer.name}"
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class AsyncioTimers:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(0.0, float(delay_seconds)), callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
