# src/deskmate/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable

LOG_FILE_NAME = "deskmate.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty at INFO/DEBUG; only warnings reach any handler.
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "plyer")


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console shares stderr with the REPL prompt and reminder alerts, so
    only deskmate records pass freely; anything else needs ERROR.
    """

    def __init__(self, app_prefix: str = "deskmate") -> None:
        super().__init__()
        self._app_prefix = app_prefix

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self._app_prefix or name.startswith(self._app_prefix + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/deskmate",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> Path:
    """
    Filtered console on stderr plus a full log file under `log_dir`.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(formatter)
    root.addHandler(to_file)

    # warnings.warn(...) shows up as 'py.warnings' and is filtered like third-party code.
    logging.captureWarnings(True)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
