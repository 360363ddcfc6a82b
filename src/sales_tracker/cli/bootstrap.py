# src/sales_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP source and the SQLite user-task store into a TaskTracker.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.tracker import TaskTracker
from ..tasks.task_source import HttpTaskSource
from ..tasks.task_store import UserTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.user_tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_tracker(*, settings=None) -> TaskTracker:
    """
    Create a TaskTracker from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    source = HttpTaskSource(settings.tasks_url, timeout=settings.fetch_timeout_seconds)
    store = UserTaskStore(settings.user_tasks_db_path, key=settings.user_tasks_key)
    logger.debug("Tracker wired: source=%s store=%s", settings.tasks_url, settings.user_tasks_db_path)

    return TaskTracker(
        source,
        store,
        seed_count=settings.seed_count,
        seed=settings.seed_random_seed,
    )
