# File: tests/test_logger.py
"""Тесты настройки логирования."""
import logging
import sys

import pytest

from deadlink_finder.logger import LOGGER_NAME, init_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging(level="WARNING")


def test_console_goes_to_stderr_and_file_is_created(tmp_path):
    log_file = tmp_path / "logs" / "scan.log"
    lg = init_logging(level="INFO", log_file=log_file)

    assert lg.name == LOGGER_NAME
    assert not lg.propagate
    assert len(lg.handlers) == 2
    assert lg.handlers[0].stream is sys.stderr

    lg.info("Scan started")
    for handler in lg.handlers:
        handler.flush()
    assert "Scan started" in log_file.read_text(encoding="utf-8")


def test_reinit_replaces_handlers():
    init_logging(level="INFO")
    lg = init_logging(level="ERROR")
    assert len(lg.handlers) == 1
    assert lg.level == logging.ERROR


def test_aiohttp_logs_only_at_debug():
    init_logging(level="INFO")
    assert logging.getLogger("aiohttp").level == logging.WARNING

    init_logging(level="DEBUG")
    assert logging.getLogger("aiohttp").level == logging.DEBUG
