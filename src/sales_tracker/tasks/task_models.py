# tasks/task_models.py

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - values match the wire format of the data source ("In Progress" has a space)
    - records coming from the source are not validated, so Task.status is a plain str
    """

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PerformanceGrade(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


MISSING: Any = object()


def to_number(value: Any = MISSING) -> float:
    """
    Coerce an untyped JSON value to float the way a JS Number() call would.

    - missing -> nan, None -> 0.0
    - bools -> 1.0 / 0.0
    - blank strings -> 0.0, numeric strings parsed, anything else -> nan
    """
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # Integers past the float range read as +/-Infinity, like Number().
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return 0.0
        try:
            return float(s)
        except ValueError:
            return math.nan
    return math.nan


def to_revenue(value: Any = MISSING) -> float:
    """to_number() for revenue: nan and negative amounts become 0."""
    amount = to_number(value)
    if math.isnan(amount) or amount < 0:
        return 0.0
    return amount


def format_ts(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_ts(raw: Any) -> datetime | None:
    """Parse an ISO string or epoch-milliseconds number; None if unparseable."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw) / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str) and raw.strip():
        try:
            dt = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    revenue: float
    time_taken: float
    priority: str
    status: str
    created_at: str
    notes: str | None = None
    completed_at: str | None = None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def to_record(self) -> dict[str, Any]:
        """JSON record (camelCase keys) used by the store and the data source."""
        rec: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "revenue": self.revenue,
            "timeTaken": self.time_taken,
            "priority": self.priority,
            "status": self.status,
            "notes": self.notes,
            "createdAt": self.created_at,
        }
        if self.completed_at is not None:
            rec["completedAt"] = self.completed_at
        return rec

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> Task:
        """
        Rebuild a task previously written by to_record().

        Stored records were produced by this code, so no timestamps are synthesized here;
        numbers still go through to_number() in case the file was edited by hand.
        """
        return cls(
            id=str(rec.get("id") or ""),
            title=str(rec.get("title") or ""),
            revenue=to_revenue(rec.get("revenue", MISSING)),
            time_taken=to_number(rec.get("timeTaken", MISSING)),
            priority=str(rec.get("priority") or ""),
            status=str(rec.get("status") or ""),
            notes=rec.get("notes"),
            created_at=str(rec.get("createdAt") or ""),
            completed_at=rec.get("completedAt") or None,
        )


@dataclass(frozen=True, slots=True)
class DerivedTask:
    """Display-only projection of a Task. Never persisted."""

    task: Task
    roi: float | None
    done_hours: float

    @property
    def id(self) -> str:
        return self.task.id


@dataclass(frozen=True, slots=True)
class Metrics:
    total_revenue: float
    total_time_taken: float
    time_efficiency_pct: float
    revenue_per_hour: float
    average_roi: float
    performance_grade: PerformanceGrade


INITIAL_METRICS = Metrics(
    total_revenue=0.0,
    total_time_taken=0.0,
    time_efficiency_pct=0.0,
    revenue_per_hour=0.0,
    average_roi=0.0,
    performance_grade=PerformanceGrade.NEEDS_IMPROVEMENT,
)
