# src/sales_tracker/core/tracker.py

"""
Task tracker: the lifecycle orchestrator.

Owns the TrackerState and is the only writer of it:
- runs the one-shot initial load (fetch -> normalize -> seed if empty -> merge user tasks),
- exposes add/update/delete/undo as synchronous operations,
- serves derived views (ranked tasks, metrics) memoized on the state version.

Cancellation: close() sets a flag and cancels the pending load. The flag is checked
before every state write, so a load that was torn down never touches the state or
records an error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..tasks import mutations
from ..tasks.derive import compute_metrics, sort_tasks, with_derived
from ..tasks.normalize import normalize_tasks
from ..tasks.seed import generate_sales_tasks
from ..tasks.task_models import DerivedTask, Metrics, Priority, Task, TaskStatus, utc_now
from ..tasks.task_source import LoadError
from ..tasks.task_store import StoreError
from .ports import TaskSource, UserTaskRepo
from .state import TrackerState

logger = logging.getLogger(__name__)

DEFAULT_SEED_COUNT = 50


class TaskTracker:
    def __init__(
        self,
        source: TaskSource,
        store: UserTaskRepo,
        *,
        seed_count: int = DEFAULT_SEED_COUNT,
        seed: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._store = store
        self._seed_count = int(seed_count)
        self._seed = seed
        self._clock = clock

        self._state = TrackerState()
        self._load_task: asyncio.Task[None] | None = None
        self._closed = False

        self._derived_cache: tuple[int, list[DerivedTask]] | None = None
        self._metrics_cache: tuple[int, Metrics] | None = None

    # ---- lifecycle ----

    def start(self) -> asyncio.Task[None]:
        """Schedule the initial load. Calling it again returns the same task."""
        if self._load_task is None:
            if self._closed:
                raise RuntimeError("TaskTracker is closed")
            self._load_task = asyncio.get_running_loop().create_task(self._load(), name="task-tracker-load")
        return self._load_task

    async def load(self) -> None:
        """Start (if needed) and wait for the initial load. Returns quietly if it was cancelled."""
        task = self.start()
        # wait() does not propagate our own cancellation into the load task.
        await asyncio.wait({task})
        if not task.cancelled():
            task.result()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._load_task is not None and not self._load_task.done():
            logger.debug("Cancelling pending initial load")
            self._load_task.cancel()

    async def __aenter__(self) -> TaskTracker:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()
        if self._load_task is not None:
            await asyncio.wait({self._load_task})

    async def _load(self) -> None:
        try:
            raw = await self._source.fetch_raw()
            if self._closed:
                return

            base = normalize_tasks(raw, now=self._clock())
            if not base:
                logger.info("Task source is empty; generating %d sample tasks", self._seed_count)
                base = generate_sales_tasks(self._seed_count, seed=self._seed, now=self._clock())

            user_tasks = self._store.load_user_tasks()
        except LoadError as e:
            logger.warning("Initial task load failed: %s", e)
            self._finish_load(error=str(e) or "Failed to load tasks")
            return
        except StoreError as e:
            logger.warning("Could not read user tasks: %s", e)
            self._finish_load(error=str(e) or "Failed to read user tasks")
            return
        except Exception as e:
            logger.exception("Initial task load crashed")
            self._finish_load(error=str(e) or type(e).__name__)
            return

        self._finish_load(tasks=(*base, *user_tasks))
        logger.info("Loaded %d base tasks and %d user tasks", len(base), len(user_tasks))

    def _finish_load(self, *, tasks: tuple[Task, ...] | None = None, error: str | None = None) -> None:
        if self._closed:
            return
        if tasks is not None:
            self._state.commit(tasks)
        self._state.error = error
        self._state.loading = False

    # ---- read accessors ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def last_deleted(self) -> Task | None:
        return self._state.last_deleted

    @property
    def version(self) -> int:
        return self._state.version

    @property
    def derived_sorted(self) -> list[DerivedTask]:
        version = self._state.version
        if self._derived_cache is None or self._derived_cache[0] != version:
            ranked = sort_tasks(with_derived(t) for t in self._state.tasks)
            self._derived_cache = (version, ranked)
        return list(self._derived_cache[1])

    @property
    def metrics(self) -> Metrics:
        version = self._state.version
        if self._metrics_cache is None or self._metrics_cache[0] != version:
            self._metrics_cache = (version, compute_metrics(self._state.tasks))
        return self._metrics_cache[1]

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._state.tasks if t.id == task_id), None)

    # ---- mutations ----

    def add_task(
        self,
        *,
        title: str,
        revenue: float,
        time_taken: float,
        status: str = TaskStatus.OPEN,
        priority: str = Priority.MEDIUM,
        notes: str | None = None,
        task_id: str | None = None,
    ) -> Task:
        """
        Create a task, persist it, then add it to the collection.

        The store is written first: if that raises StoreError, the collection is left untouched.
        """
        task = mutations.create_task(
            {
                "id": task_id,
                "title": title,
                "revenue": revenue,
                "time_taken": time_taken,
                "status": status,
                "priority": priority,
                "notes": notes,
            },
            now=self._clock(),
        )
        self._store.append_user_task(task)
        self._state.commit(mutations.add_task(self._state.tasks, task))
        logger.info("Task added id=%s status=%s", task.id, task.status)
        return task

    def update_task(self, task_id: str, **patch: Any) -> Task | None:
        """Merge patch into the task. Returns the updated task, or None if the id is unknown."""
        current = self._state.tasks
        updated = mutations.update_task(current, task_id, patch, now=self._clock())
        if updated is current:
            logger.debug("update_task: unknown id=%s", task_id)
            return None
        self._state.commit(updated)
        return self.get_task(task_id)

    def delete_task(self, task_id: str) -> Task | None:
        remaining, removed = mutations.delete_task(self._state.tasks, task_id)
        if removed is None:
            logger.debug("delete_task: unknown id=%s", task_id)
            return None
        self._state.commit(remaining)
        self._state.last_deleted = removed
        logger.info("Task deleted id=%s", task_id)
        return removed

    def undo_delete(self) -> Task | None:
        restored = self._state.last_deleted
        if restored is None:
            return None
        self._state.commit(mutations.undo_delete(self._state.tasks, restored))
        self._state.last_deleted = None
        logger.info("Task restored id=%s", restored.id)
        return restored

    def clear_last_deleted(self) -> None:
        self._state.last_deleted = None
