# === FILE: deadlink_finder/logger.py ===
"""Логирование DeadLinkFinder.

Находки CLI печатает в stdout, поэтому журнал пишется в stderr (и, по
желанию, в ротируемый файл) и не смешивается с отчётом.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "DeadLinkFinder"
# aiohttp шумит на каждом соединении; его журнал включается только при DEBUG
THIRD_PARTY_LOGGERS: Final[tuple[str, ...]] = ("aiohttp",)

_LevelT = Union[int, str]


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    path = Path(file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Перенастраивает логгер проекта; старые обработчики закрываются."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(log_format))
    lg.addHandler(console)
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))
    lg.propagate = False

    third_party_level = logging.DEBUG if lg.level <= logging.DEBUG else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
    return lg


logger: logging.Logger = init_logging(level="WARNING")

__all__ = ["logger", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT", "THIRD_PARTY_LOGGERS"]
