# src/sales_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import Task


@dataclass(slots=True)
class TrackerState:
    """
    Mutable state owned by a single TaskTracker.

    tasks is an immutable tuple; every commit swaps in a new tuple and bumps version,
    which is what derived values are memoized against.
    """

    tasks: tuple[Task, ...] = ()
    loading: bool = True
    error: str | None = None
    last_deleted: Task | None = None
    version: int = 0

    def commit(self, tasks: tuple[Task, ...]) -> None:
        self.tasks = tasks
        self.version += 1
