"""Logging setup and custom levels for speakout.

Levels (ascending):
    TRACE =  5  full argument vectors, payload text
    DEBUG = 10  tool selection, probing results, fallbacks
    INFO  = 20  startup/shutdown of the CLI (default)

Usage:
    from speakout.log import setup_logging
    logger = setup_logging(debug=True)   # once, at startup
    outputter = ClipboardOutputter('xsel', policy, logger=logger)
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "speakout"
DEFAULT_LOG_FILE = "~/.speakout.log"
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


# Patch Logger class once at import time
logging.Logger.trace = _trace  # type: ignore[attr-defined]


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Configure the ``speakout`` logger and return it.

    Meant to be called once at startup; the returned handle is passed down
    to factories and outputters. Calling it again returns the already
    configured logger without adding handlers.

    Args:
        debug: Enable debug level logging on the console
        log_file: Path to log file (default: ~/.speakout.log)
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    log_path = Path(os.path.expanduser(log_file or DEFAULT_LOG_FILE))
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console: only warnings in production, everything in debug
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger
