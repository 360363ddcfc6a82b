# src/sales_tracker/logging_setup.py

"""Logging for the tracker: stderr for the console session, a log file under the data dir."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tracker.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"

# Request lines from these would drown the console on every fetch.
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(*, log_dir: str | Path, console_level: int = logging.INFO) -> Path:
    """
    Replace any existing root handlers. The console gets console_level and up,
    the file gets everything. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")

    logging.basicConfig(
        level=logging.DEBUG,
        format=_FORMAT,
        datefmt=_DATEFMT,
        handlers=[console, file_handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file
