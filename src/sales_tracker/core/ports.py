# src/sales_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The tracker depends on Protocols instead of concrete implementations.
This keeps the data source and the store swappable and makes testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import Task


class TaskSource(Protocol):
    """Where the base tasks come from. Raises LoadError on failure."""

    async def fetch_raw(self) -> Any: ...


class UserTaskRepo(Protocol):
    """Durable store for user-created tasks. Raises StoreError when unavailable."""

    def load_user_tasks(self) -> list[Task]: ...
    def append_user_task(self, task: Task) -> None: ...
