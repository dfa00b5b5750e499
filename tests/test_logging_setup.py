# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from deskmate.logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    "name, level, passes",
    [
        ("deskmate", logging.DEBUG, True),
        ("deskmate.tasks.task_scheduler", logging.INFO, True),
        ("deskmatex", logging.INFO, False),
        ("httpx", logging.WARNING, False),
        ("py.warnings", logging.WARNING, False),
        ("openai", logging.ERROR, True),
    ],
)
def test_console_filter(name: str, level: int, passes: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is passes


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file_and_quiets_libraries(tmp_path, restore_root_logger) -> None:
    log_dir = tmp_path / "logs"

    log_file = setup_logging(log_dir=log_dir, quiet=("noisy.lib",))
    first = list(restore_root_logger.handlers)
    setup_logging(log_dir=log_dir, quiet=("noisy.lib",))
    for handler in first:
        handler.close()
    logging.getLogger("deskmate.test").debug("written to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert log_file == log_dir / LOG_FILE_NAME
    assert len(restore_root_logger.handlers) == 2
    assert logging.getLogger("noisy.lib").level == logging.WARNING
    assert "written to file" in log_file.read_text(encoding="utf-8")
