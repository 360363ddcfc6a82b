# tasks/seed.py

"""Synthetic sales tasks used when the data source returns nothing."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta

from .task_models import Priority, Task, TaskStatus, format_ts, utc_now

_ACTIONS = ["Follow up with", "Demo for", "Renewal call with", "Proposal for", "Discovery call with", "Upsell"]
_ACCOUNTS = ["Acme Corp", "Globex", "Initech", "Umbrella", "Hooli", "Stark Industries", "Wayne Enterprises", "Soylent"]
_NOTES = [None, "Waiting on procurement", "Decision maker identified", "Send pricing sheet", "Needs legal review"]


def generate_sales_tasks(
    count: int,
    *,
    seed: int | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """
    Generate `count` plausible sales tasks.

    Pass a seed to get the same set across runs (ids are derived from the RNG too).
    """
    rng = random.Random(seed)
    if now is None:
        now = utc_now()

    tasks: list[Task] = []
    for i in range(max(0, int(count))):
        status = rng.choices(
            [TaskStatus.OPEN, TaskStatus.IN_PROGRESS, TaskStatus.DONE],
            weights=[0.35, 0.25, 0.4],
        )[0]
        priority = rng.choice([Priority.HIGH, Priority.MEDIUM, Priority.LOW])

        # Bigger deals take longer.
        revenue = float(rng.randrange(500, 20_000, 50))
        time_taken = round(max(0.5, revenue / rng.uniform(150.0, 900.0)), 1)

        created = now - timedelta(days=rng.randint(1, 60), hours=rng.randint(0, 23))
        completed = None
        if status == TaskStatus.DONE:
            completed = format_ts(created + timedelta(hours=rng.randint(4, 24 * 14)))

        tasks.append(
            Task(
                id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
                title=f"{rng.choice(_ACTIONS)} {rng.choice(_ACCOUNTS)} #{i + 1}",
                revenue=revenue,
                time_taken=time_taken,
                priority=priority.value,
                status=status.value,
                notes=rng.choice(_NOTES),
                created_at=format_ts(created),
                completed_at=completed,
            )
        )
    return tasks
