# src/sales_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the tracker, runs the initial load, then hands the
loaded tracker to the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_tracker
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    tracker = create_tracker(settings=settings)

    try:
        asyncio.run(tracker.load())
    except KeyboardInterrupt:
        logger.info("Interrupted during load.")
        return

    if tracker.error:
        # Keep going with an empty collection so user tasks can still be added.
        logger.error("Initial load failed: %s", tracker.error)

    try:
        run_console_loop(tracker, app_name=settings.app_name)
    finally:
        tracker.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
