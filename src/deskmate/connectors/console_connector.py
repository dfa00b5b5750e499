# src/deskmate/connectors/console_connector.py

from __future__ import annotations

import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.router import CommandRouter
from ..core.state import AppState

logger = logging.getLogger(__name__)

_print_lock = threading.Lock()


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def print_ts(text: str) -> None:
    """Timestamped console output; safe to call from reminder timer threads."""
    with _print_lock:
        print(f"[{_ts_local()}] {text}", flush=True)


def run_console_loop(state: AppState, router: CommandRouter | None = None) -> None:
    logger.info("Console connector started.")
    print_ts("[CONSOLE] Type a request or /help for commands. Use /exit to quit.\n")

    router = router or CommandRouter(state)
    app_name = str(getattr(state.settings, "app_name", "deskmate"))

    while True:
        try:
            user_input = input(">>> You: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, emit=print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            try:
                reply = router.handle(user_input)
            except Exception:
                logger.exception("Router crashed.")
                reply = "Internal error while handling your request."

        print_ts(f"<<< {app_name}: {reply}")

    logger.info("Console connector finished.")
