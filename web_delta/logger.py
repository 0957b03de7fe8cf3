# === FILE: web_delta/logger.py ===
"""Logging for **Web Delta**.

One named logger, ``WebDelta``, shared by the crawler, the renderers and the
comparison engine::

    from web_delta.logger import logger
    logger.info("Crawling site: %s", url)

The console shows the level chosen with ``--log-level`` (per-page progress at
INFO, skipped pages at WARNING). A ``--log-file`` always records DEBUG, so the
per-page link counts and renderer restarts of a long crawl stay available
after the run without flooding the terminal.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "WebDelta"

_LevelT = Union[int, str]


def _stdout_handler(level: _LevelT, fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``WebDelta`` logger and return it.

    Parameters
    ----------
    level
        Console level, numeric or textual (``"DEBUG"``, ``"WARNING"``...).
    log_file
        Rotating logfile that receives every record down to DEBUG.
        *None* → console only.
    log_format
        Format string for :class:`logging.Formatter`.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.handlers.clear()
    lg.addHandler(_stdout_handler(level, log_format))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))
        lg.setLevel(logging.DEBUG)
    else:
        lg.setLevel(level)
    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
