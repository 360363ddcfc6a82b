# tests/test_derive.py

from __future__ import annotations

import math

import pytest

from sales_tracker.tasks.derive import (
    compute_average_roi,
    compute_metrics,
    compute_performance_grade,
    compute_revenue_per_hour,
    compute_roi,
    compute_time_efficiency,
    compute_total_revenue,
    compute_total_time_taken,
    sort_tasks,
    with_derived,
)
from sales_tracker.tasks.task_models import INITIAL_METRICS, PerformanceGrade, Task


def _task(task_id: str, revenue: float, hours: float, status: str = "Open") -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        revenue=revenue,
        time_taken=hours,
        priority="Medium",
        status=status,
        created_at="2026-01-01T00:00:00.000Z",
    )


def test_total_revenue_ignores_status() -> None:
    tasks = [_task("a", 100, 1, "Open"), _task("b", 250, 2, "Done"), _task("c", 50, 3, "In Progress")]
    assert compute_total_revenue(tasks) == 400


def test_empty_collection_metrics_are_baseline() -> None:
    m = compute_metrics([])
    assert m == INITIAL_METRICS
    assert m.total_revenue == 0
    assert m.total_time_taken == 0
    assert m.time_efficiency_pct == 0
    assert m.revenue_per_hour == 0
    assert m.average_roi == 0
    assert m.performance_grade == PerformanceGrade.NEEDS_IMPROVEMENT


def test_revenue_per_hour_with_no_time_is_zero() -> None:
    tasks = [_task("a", 100, 0), _task("b", 300, 0)]
    assert compute_revenue_per_hour(tasks) == 0
    assert compute_time_efficiency(tasks) == 0


def test_revenue_per_hour() -> None:
    tasks = [_task("a", 100, 1), _task("b", 300, 3)]
    assert compute_revenue_per_hour(tasks) == pytest.approx(100.0)


def test_time_efficiency_is_share_of_done_hours() -> None:
    tasks = [_task("a", 0, 3, "Done"), _task("b", 0, 1, "Open")]
    assert compute_time_efficiency(tasks) == pytest.approx(75.0)


def test_roi_is_revenue_per_hour() -> None:
    assert compute_roi(_task("a", 1000, 4)) == pytest.approx(250.0)
    assert compute_roi(_task("a", 1000, 0)) is None
    assert compute_roi(_task("a", 1000, -2)) is None
    assert compute_roi(_task("a", 1000, math.nan)) is None


def test_average_roi_zero_weights_invalid_time() -> None:
    tasks = [_task("a", 1000, 2), _task("b", 500, 0), _task("c", 500, math.nan)]
    # (500 + 0 + 0) / 3
    assert compute_average_roi(tasks) == pytest.approx(500 / 3)
    assert not math.isnan(compute_metrics(tasks).average_roi)


def test_nan_time_propagates_into_total_time() -> None:
    tasks = [_task("a", 100, 2), _task("b", 100, math.nan)]
    assert math.isnan(compute_total_time_taken(tasks))
    assert compute_total_revenue(tasks) == 200


@pytest.mark.parametrize(
    ("avg", "grade"),
    [
        (1000.0, PerformanceGrade.EXCELLENT),
        (500.01, PerformanceGrade.EXCELLENT),
        (500.0, PerformanceGrade.GOOD),
        (200.0, PerformanceGrade.GOOD),
        (199.99, PerformanceGrade.NEEDS_IMPROVEMENT),
        (0.0, PerformanceGrade.NEEDS_IMPROVEMENT),
        (math.nan, PerformanceGrade.NEEDS_IMPROVEMENT),
    ],
)
def test_performance_grade_thresholds(avg: float, grade: PerformanceGrade) -> None:
    assert compute_performance_grade(avg) == grade


def test_with_derived_attaches_roi_and_done_hours() -> None:
    d = with_derived(_task("a", 600, 3, "Done"))
    assert d.roi == pytest.approx(200.0)
    assert d.done_hours == 3
    assert d.id == "a"
    assert with_derived(_task("b", 600, 3, "Open")).done_hours == 0


def test_sort_by_roi_desc_missing_roi_last_and_stable() -> None:
    tasks = [
        _task("no-roi", 100, 0),
        _task("low", 100, 10),
        _task("tie-1", 100, 1),
        _task("high", 1000, 1),
        _task("tie-2", 200, 2),
    ]
    ranked = sort_tasks(with_derived(t) for t in tasks)
    assert [d.id for d in ranked] == ["high", "tie-1", "tie-2", "low", "no-roi"]


def test_sort_is_idempotent() -> None:
    tasks = [_task(str(i), rev, hrs) for i, (rev, hrs) in enumerate([(5, 1), (9, 3), (3, 1), (7, 0), (6, 2)])]
    once = sort_tasks(with_derived(t) for t in tasks)
    twice = sort_tasks(once)
    assert [d.id for d in twice] == [d.id for d in once]
    assert twice is not once


def test_metrics_for_mixed_collection() -> None:
    tasks = [_task("a", 2000, 2, "Done"), _task("b", 600, 2, "Open")]
    m = compute_metrics(tasks)
    assert m.total_revenue == 2600
    assert m.total_time_taken == 4
    assert m.time_efficiency_pct == pytest.approx(50.0)
    assert m.revenue_per_hour == pytest.approx(650.0)
    assert m.average_roi == pytest.approx(650.0)
    assert m.performance_grade == PerformanceGrade.EXCELLENT
