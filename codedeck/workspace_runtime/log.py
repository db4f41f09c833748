"""Logging configuration using loguru.

Every record carries a ``workspace_id`` extra: workspace and sync code log
through ``workspace_logger(id)``, everything else shows ``-``.  Records from
stdlib loggers (uvicorn, httpx) are forwarded into loguru so the service has
a single sink.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

NO_WORKSPACE = "-"

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>ws={extra[workspace_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Request lines from these would drown out per-file sync logging.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def workspace_logger(workspace_id: str) -> Logger:
    """Logger whose records are tagged with *workspace_id*."""
    return logger.bind(workspace_id=workspace_id)


class _StdlibForwarder(logging.Handler):
    """Re-emit stdlib records through loguru at the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, json_logs: bool = False) -> None:
    """Make loguru the only sink, writing to stderr.

    With *json_logs* each record is one JSON object per line (loguru's
    ``serialize``), with ``workspace_id`` under ``record.extra``.
    """
    level = level.upper()

    logger.remove()
    logger.configure(extra={"workspace_id": NO_WORKSPACE})
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_TEXT_FORMAT)

    logging.basicConfig(handlers=[_StdlibForwarder()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging configured (level={}, json={})", level, json_logs)
