# tasks/derive.py

"""
Derived per-task values and fleet-wide metrics.

Everything here is a pure function of the task list. Callers memoize; nothing is cached here.

ROI is revenue per hour of time invested. A task whose time is zero, negative or not a
number has no ROI (None); in the average it counts as 0 rather than turning the mean into nan.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .task_models import INITIAL_METRICS, DerivedTask, Metrics, PerformanceGrade, Task

EXCELLENT_ROI_THRESHOLD = 500.0
GOOD_ROI_THRESHOLD = 200.0


def compute_roi(task: Task) -> float | None:
    revenue = task.revenue
    hours = task.time_taken
    if not math.isfinite(revenue) or not math.isfinite(hours) or hours <= 0:
        return None
    return revenue / hours


def compute_average_roi(tasks: Sequence[Task]) -> float:
    if not tasks:
        return 0.0
    total = 0.0
    for t in tasks:
        roi = compute_roi(t)
        total += roi if roi is not None else 0.0
    return total / len(tasks)


def compute_total_revenue(tasks: Iterable[Task]) -> float:
    return sum((t.revenue for t in tasks), 0.0)


def compute_total_time_taken(tasks: Iterable[Task]) -> float:
    # nan from unnormalized time_taken is allowed to propagate here.
    return sum((t.time_taken for t in tasks), 0.0)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Share of all hours that went into Done tasks, in percent."""
    total = compute_total_time_taken(tasks)
    if total == 0:
        return 0.0
    done = sum((t.time_taken for t in tasks if t.is_done), 0.0)
    return done / total * 100.0


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    total = compute_total_time_taken(tasks)
    if total == 0:
        return 0.0
    return compute_total_revenue(tasks) / total


def compute_performance_grade(average_roi: float) -> PerformanceGrade:
    if average_roi > EXCELLENT_ROI_THRESHOLD:
        return PerformanceGrade.EXCELLENT
    if average_roi >= GOOD_ROI_THRESHOLD:
        return PerformanceGrade.GOOD
    # nan falls through to the lowest bucket.
    return PerformanceGrade.NEEDS_IMPROVEMENT


def with_derived(task: Task) -> DerivedTask:
    return DerivedTask(
        task=task,
        roi=compute_roi(task),
        done_hours=task.time_taken if task.is_done else 0.0,
    )


def _roi_sort_key(d: DerivedTask) -> tuple[int, float]:
    if d.roi is None:
        return (1, 0.0)
    return (0, -d.roi)


def sort_tasks(derived: Iterable[DerivedTask]) -> list[DerivedTask]:
    """
    Rank by ROI (highest first), tasks without ROI last.

    sorted() is stable, so equal keys keep their insertion order and re-sorting
    an already sorted list is a no-op.
    """
    return sorted(derived, key=_roi_sort_key)


def compute_metrics(tasks: Sequence[Task]) -> Metrics:
    if not tasks:
        return INITIAL_METRICS
    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi),
    )
