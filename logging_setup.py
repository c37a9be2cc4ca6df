#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``traffic.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before the simulation is
built.  The terminal display repaints the whole screen, so the driver
turns the console handler off while it owns the terminal.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import ENGINE_DEBUG_LOG_FILE, LOG_FILE


def setup_logging(level: int = logging.INFO, console: bool = True) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    console : bool
        Attach a stderr handler as well as the log file.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    root.handlers.clear()
    if console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        root.addHandler(ch)

    fh = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=2)
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # ── Dedicated debug file for the movement engine ──────────────────
    engine_logger = logging.getLogger("engine")
    engine_logger.setLevel(logging.DEBUG)
    for handler in list(engine_logger.handlers):
        engine_logger.removeHandler(handler)
        handler.close()
    dfh = RotatingFileHandler(
        ENGINE_DEBUG_LOG_FILE, maxBytes=5_000_000, backupCount=2
    )
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    engine_logger.addHandler(dfh)
