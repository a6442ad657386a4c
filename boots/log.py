"""Logging configuration using loguru.

boots disables its own loguru namespace on import so a host application sees
no output unless it opts in.  ``setup_logging`` is that opt-in: it installs a
single stderr sink, routes stdlib logging through loguru and enables the
``boots`` namespace.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from loguru import logger


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


# Database drivers are the usual script dependencies; keep their chatter down.
NOISY_LOGGERS = ("sqlalchemy.engine", "asyncpg", "psycopg", "urllib3")


def setup_logging(level: str = "INFO", *, quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """Configure loguru as the sole logging sink and enable boots output.

    Call this once at process startup, before running a session.  Loggers
    named in *quiet* are capped at WARNING.
    """
    level = level.upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> - "
            "<level>{message}</level>"
        ),
    )
    logger.enable("boots")

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
