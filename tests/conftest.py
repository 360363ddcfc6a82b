# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from sales_tracker.core.tracker import TaskTracker

from .fakes import FakeClock, FakeTaskSource, MemoryTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="sales-tracker-test",
        log_level="DEBUG",
        tasks_url="http://tasks.test/tasks.json",
        fetch_timeout_seconds=1.0,
        seed_count=5,
        seed_random_seed=7,
        data_dir=tmp_path / "data",
        user_tasks_db_path=tmp_path / "data" / "user_tasks.sqlite3",
        user_tasks_key="user_tasks",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo() -> MemoryTaskRepo:
    return MemoryTaskRepo()


@pytest.fixture()
def tracker(repo: MemoryTaskRepo, clock: FakeClock) -> TaskTracker:
    """
    Tracker that has not been loaded. Mutations are synchronous, so tests can
    build a collection with add_task() without an event loop.
    """
    return TaskTracker(FakeTaskSource(), repo, seed_count=5, seed=1, clock=clock)
