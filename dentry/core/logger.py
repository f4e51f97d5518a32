"""Logging setup for dentry: module loggers, CLI handlers, excepthook."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from dentry.core.config import CACHE_DIR

LOG_FILE = CACHE_DIR / "dentry.log"
LOG_MAX_BYTES = 512 * 1024  # 512 KB
LOG_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.WARNING) -> None:
    """Log everything to the rotating file and `level` and above to stderr.

    Only the command line calls this; library code just uses get_logger().
    """
    root = logging.getLogger("dentry")
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers
    if not root.handlers:
        try:
            from logging.handlers import RotatingFileHandler

            CACHE_DIR.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = RotatingFileHandler(
                LOG_FILE,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            handler = logging.StreamHandler(sys.stderr)

        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(console)

    sys.excepthook = _excepthook


def _excepthook(exc_type: type, exc_value: BaseException, exc_tb) -> None:
    """Log uncaught exceptions to file and stderr."""
    lines = traceback.format_exception(exc_type, exc_value, exc_tb)
    msg = "".join(lines)
    logger = logging.getLogger("dentry")
    logger.critical("Uncaught exception:\n%s", msg)
    sys.__excepthook__(exc_type, exc_value, exc_tb)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(f"dentry.{name}")


def get_log_path() -> Path:
    """Return the path to the log file."""
    return LOG_FILE
