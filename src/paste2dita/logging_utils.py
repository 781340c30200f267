"""Logging setup for paste2dita entry points.

Handlers are installed on the ``paste2dita`` package logger rather than the
root logger, so embedding services keep their own logging configuration.
Every record is tagged with the pipeline stage that emitted it, which the
trace format prints next to the level.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "paste2dita"
NO_STAGE = "-"

# module logger name -> pipeline stage name
STAGE_LOGGERS: dict[str, str] = {
    "paste2dita.transforms.sanitize": "sanitize",
    "paste2dita.transforms.lists": "lists",
    "paste2dita.transforms.tables": "tables",
    "paste2dita.transforms.structure": "structure",
    "paste2dita.renderers.formatter": "format",
    "paste2dita.transforms.pipeline": "pipeline",
    "paste2dita.transforms.hooks": "hooks",
}

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(stage)s] %(name)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARKER = "_paste2dita_handler"


class StageFilter(logging.Filter):
    """Attach a ``stage`` attribute naming the pipeline stage of a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.stage = stage_for_logger(record.name)
        return True


def stage_for_logger(name: str) -> str:
    """Return the pipeline stage for a module logger name.

    >>> stage_for_logger("paste2dita.transforms.tables")
    'tables'
    >>> stage_for_logger("paste2dita.cli")
    '-'
    """
    return STAGE_LOGGERS.get(name, NO_STAGE)


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(StageFilter())
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the package logger used by the CLI.

    Calling this again replaces the handlers installed by the previous
    call; handlers added by other code are left alone.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Also append log output to this file.
    trace_mode : bool, default False
        Use the trace format with timestamps, stage tags and logger names.

    Returns
    -------
    logging.Logger
        The configured ``paste2dita`` logger.

    """
    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_MARKER, False)]:
        logger.removeHandler(handler)
        handler.close()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(DEFAULT_FORMAT)

    logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, formatter))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not open log file {log_file}: {e}")
        else:
            logger.addHandler(_make_handler(file_handler, level, formatter))
            logger.debug(f"Logging to file: {log_file}")

    return logger


__all__ = ["PACKAGE_LOGGER", "STAGE_LOGGERS", "StageFilter", "configure_logging", "stage_for_logger"]
