# tests/test_mutations.py

from __future__ import annotations

import math
import uuid
from datetime import timedelta

import pytest

from sales_tracker.tasks import mutations
from sales_tracker.tasks.task_models import Task, format_ts

from .fakes import NOW


def _task(task_id: str, **kwargs) -> Task:
    fields = dict(
        id=task_id,
        title=f"Task {task_id}",
        revenue=100.0,
        time_taken=2.0,
        priority="Medium",
        status="Open",
        created_at="2026-01-01T00:00:00.000Z",
    )
    fields.update(kwargs)
    return Task(**fields)


def test_create_task_generates_id_and_timestamps() -> None:
    task = mutations.create_task({"title": "X", "revenue": 100, "time_taken": 5, "status": "Open"}, now=NOW)
    uuid.UUID(task.id)
    assert task.created_at == format_ts(NOW)
    assert task.completed_at is None
    assert task.time_taken == 5.0


def test_create_task_done_is_completed_at_creation() -> None:
    task = mutations.create_task({"title": "X", "revenue": 1, "time_taken": 1, "status": "Done"}, now=NOW)
    assert task.completed_at == task.created_at == format_ts(NOW)


def test_create_task_does_not_correct_time_taken() -> None:
    assert mutations.create_task({"title": "X", "time_taken": -4}, now=NOW).time_taken == -4.0
    assert math.isnan(mutations.create_task({"title": "X", "time_taken": "lots"}, now=NOW).time_taken)


@pytest.mark.parametrize("bad", ["12x", "abc", -20, None])
def test_create_task_revenue_falls_back_to_zero(bad) -> None:
    task = mutations.create_task({"title": "X", "revenue": bad, "time_taken": 1}, now=NOW)
    assert task.revenue == 0.0


@pytest.mark.parametrize("bad", ["abc", -5, "-1"])
def test_update_revenue_falls_back_to_zero(bad) -> None:
    (out,) = mutations.update_task((_task("a"),), "a", {"revenue": bad}, now=NOW)
    assert out.revenue == 0.0


def test_create_task_keeps_given_id() -> None:
    assert mutations.create_task({"id": "mine", "title": "X", "time_taken": 1}, now=NOW).id == "mine"


def test_update_unknown_id_returns_same_tuple() -> None:
    tasks = (_task("a"),)
    assert mutations.update_task(tasks, "zzz", {"title": "new"}, now=NOW) is tasks


def test_update_keeps_position_and_merges() -> None:
    tasks = (_task("a"), _task("b"), _task("c"))
    out = mutations.update_task(tasks, "b", {"title": "renamed", "revenue": "900"}, now=NOW)
    assert [t.id for t in out] == ["a", "b", "c"]
    assert out[1].title == "renamed"
    assert out[1].revenue == 900.0
    assert out[0] is tasks[0]


def test_update_to_done_sets_completed_at() -> None:
    later = NOW + timedelta(hours=3)
    out = mutations.update_task((_task("a"),), "a", {"status": "Done"}, now=later)
    assert out[0].completed_at == format_ts(later)


def test_update_to_done_respects_explicit_completed_at() -> None:
    out = mutations.update_task((_task("a"),), "a", {"status": "Done", "completed_at": None}, now=NOW)
    assert out[0].completed_at is None

    out = mutations.update_task(
        (_task("a"),), "a", {"status": "Done", "completed_at": "2025-12-31T00:00:00.000Z"}, now=NOW
    )
    assert out[0].completed_at == "2025-12-31T00:00:00.000Z"


def test_update_already_done_keeps_completed_at() -> None:
    done = _task("a", status="Done", completed_at="2025-01-01T00:00:00.000Z")
    out = mutations.update_task((done,), "a", {"status": "Done", "title": "t"}, now=NOW)
    assert out[0].completed_at == "2025-01-01T00:00:00.000Z"


@pytest.mark.parametrize("bad", [-3, 0, "-1", "nope"])
def test_update_clamps_non_positive_time_taken(bad) -> None:
    out = mutations.update_task((_task("a"),), "a", {"time_taken": bad}, now=NOW)
    assert out[0].time_taken == mutations.TIME_TAKEN_FLOOR == 1.0


def test_update_clamps_existing_bad_time_taken() -> None:
    out = mutations.update_task((_task("a", time_taken=math.nan),), "a", {"title": "x"}, now=NOW)
    assert out[0].time_taken == 1.0


def test_update_rejects_unknown_and_immutable_fields() -> None:
    tasks = (_task("a"),)
    with pytest.raises(TypeError):
        mutations.update_task(tasks, "a", {"colour": "red"}, now=NOW)
    with pytest.raises(TypeError):
        mutations.update_task(tasks, "a", {"created_at": "2020-01-01T00:00:00.000Z"}, now=NOW)


def test_delete_and_undo() -> None:
    tasks = (_task("a"), _task("b"), _task("c"))
    remaining, removed = mutations.delete_task(tasks, "a")
    assert removed == tasks[0]
    assert [t.id for t in remaining] == ["b", "c"]

    restored = mutations.undo_delete(remaining, removed)
    assert [t.id for t in restored] == ["b", "c", "a"]


def test_delete_unknown_is_noop() -> None:
    tasks = (_task("a"),)
    remaining, removed = mutations.delete_task(tasks, "zzz")
    assert remaining is tasks
    assert removed is None
    assert mutations.undo_delete(tasks, None) is tasks
