"""Logging configuration using loguru.

Core modules log through :mod:`logging`; :class:`_LoguruBridge` forwards the
``doc_intake`` logger hierarchy into the loguru sinks configured here.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from loguru import Logger

from .config import get_settings


class _LoguruBridge(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(context=record.name).opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _configure_logger() -> None:
    settings = get_settings()
    level = settings.log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    logfile = settings.logs_dir / "doc_intake.log"
    logger.add(logfile, level=level, rotation="1 week", retention="4 weeks")

    core_logger = logging.getLogger("doc_intake")
    core_logger.handlers = [_LoguruBridge()]
    core_logger.setLevel(level)
    core_logger.propagate = False


@lru_cache(1)
def get_logger(name: str = "doc_intake") -> "Logger":
    _configure_logger()
    return logger.bind(context=name)
