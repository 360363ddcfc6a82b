# tasks/mutations.py

"""
Collection mutations.

Every function takes the current (immutable) task tuple and returns a new tuple.
When nothing matches, the very same tuple object is returned, so callers can
detect a no-op with an identity check and skip the commit.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .task_models import MISSING, Task, TaskStatus, format_ts, to_number, to_revenue

logger = logging.getLogger(__name__)

TaskTuple = tuple[Task, ...]

# Applied by update_task only; normalization and creation keep whatever they were given.
TIME_TAKEN_FLOOR = 1.0

_NUMERIC_FIELDS = {"revenue": to_revenue, "time_taken": to_number}
_IMMUTABLE_FIELDS = ("id", "created_at")


def create_task(data: Mapping[str, Any], *, now: datetime) -> Task:
    """
    Build a new user task.

    data keys: title, revenue, time_taken, priority, status, notes and optionally id.
    revenue falls back to 0 like normalized records; time_taken is coerced but
    not corrected (a bad value stays nan).
    """
    ts = format_ts(now)
    status = data.get("status") or TaskStatus.OPEN
    return Task(
        id=str(data.get("id") or uuid.uuid4()),
        title=data.get("title") or "",
        revenue=to_revenue(data.get("revenue", MISSING)),
        time_taken=to_number(data.get("time_taken", MISSING)),
        priority=data.get("priority") or "",
        status=status,
        notes=data.get("notes"),
        created_at=ts,
        completed_at=ts if status == TaskStatus.DONE else None,
    )


def add_task(tasks: TaskTuple, task: Task) -> TaskTuple:
    return (*tasks, task)


def _apply_patch(task: Task, patch: Mapping[str, Any], *, now: datetime) -> Task:
    frozen = [name for name in _IMMUTABLE_FIELDS if name in patch]
    if frozen:
        raise TypeError(f"Cannot patch immutable field(s): {', '.join(frozen)}")

    changes = dict(patch)
    for name, coerce in _NUMERIC_FIELDS.items():
        if name in changes:
            changes[name] = coerce(changes[name])

    # dataclasses.replace raises TypeError for unknown fields.
    merged = dataclasses.replace(task, **changes)

    if (
        not task.is_done
        and merged.is_done
        and "completed_at" not in patch
        and not merged.completed_at
    ):
        merged = dataclasses.replace(merged, completed_at=format_ts(now))

    hours = merged.time_taken
    if math.isnan(hours) or hours <= 0:
        logger.debug("Task %s time_taken=%s clamped to %s", task.id, hours, TIME_TAKEN_FLOOR)
        merged = dataclasses.replace(merged, time_taken=TIME_TAKEN_FLOOR)

    return merged


def update_task(
    tasks: TaskTuple,
    task_id: str,
    patch: Mapping[str, Any],
    *,
    now: datetime,
) -> TaskTuple:
    for idx, task in enumerate(tasks):
        if task.id == task_id:
            updated = _apply_patch(task, patch, now=now)
            return (*tasks[:idx], updated, *tasks[idx + 1:])
    return tasks


def delete_task(tasks: TaskTuple, task_id: str) -> tuple[TaskTuple, Task | None]:
    """Remove the first task with task_id. Returns (new_tasks, removed_or_None)."""
    for idx, task in enumerate(tasks):
        if task.id == task_id:
            return (*tasks[:idx], *tasks[idx + 1:]), task
    return tasks, None


def undo_delete(tasks: TaskTuple, last_deleted: Task | None) -> TaskTuple:
    # Appended at the end; the original position is not restored.
    if last_deleted is None:
        return tasks
    return (*tasks, last_deleted)
