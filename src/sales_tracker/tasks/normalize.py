# tasks/normalize.py

"""
Normalization of raw task records coming from the data source.

Rules:
- anything that is not a list yields no tasks
- missing createdAt is synthesized as now - (index + 1) days, so later records look older
- Done records without completedAt are completed 24h after creation
- revenue falls back to 0 (also for negative amounts), timeTaken is left as nan when it cannot be coerced
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from .task_models import MISSING, Task, TaskStatus, format_ts, parse_ts, to_number, to_revenue, utc_now

logger = logging.getLogger(__name__)

_DAY = timedelta(days=1)


def _created_at(raw: Mapping[str, Any], idx: int, now: datetime) -> datetime:
    value = raw.get("createdAt")
    if value:
        parsed = parse_ts(value)
        if parsed is not None:
            return parsed
        logger.debug("Unparseable createdAt=%r at index %s; synthesizing", value, idx)
    return now - (idx + 1) * _DAY


def normalize_task(raw: Any, idx: int, *, now: datetime) -> Task:
    if not isinstance(raw, Mapping):
        raw = {}

    created = _created_at(raw, idx, now)
    status = raw.get("status")

    completed_at = raw.get("completedAt") or None
    if completed_at is None and status == TaskStatus.DONE:
        completed_at = format_ts(created + _DAY)

    return Task(
        id=raw.get("id"),
        title=raw.get("title"),
        revenue=to_revenue(raw.get("revenue", MISSING)),
        # No default here: an invalid value stays nan and shows up in the totals.
        time_taken=to_number(raw.get("timeTaken", MISSING)),
        priority=raw.get("priority"),
        status=status,
        notes=raw.get("notes"),
        created_at=format_ts(created),
        completed_at=completed_at,
    )


def normalize_tasks(raw: Any, *, now: datetime | None = None) -> list[Task]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Task source returned %s instead of a list; ignoring", type(raw).__name__)
        return []

    if now is None:
        now = utc_now()

    tasks = [normalize_task(item, idx, now=now) for idx, item in enumerate(raw)]
    logger.debug("Normalized %d raw task records", len(tasks))
    return tasks
