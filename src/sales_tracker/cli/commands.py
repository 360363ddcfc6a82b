# src/sales_tracker/cli/commands.py

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from ..core.tracker import TaskTracker
from ..tasks.task_models import DerivedTask, TaskStatus
from ..tasks.task_store import StoreError

CommandHandler = Callable[[TaskTracker, list[str]], str]

logger = logging.getLogger(__name__)

_STATUS_ALIASES = {
    "open": TaskStatus.OPEN,
    "progress": TaskStatus.IN_PROGRESS,
    "in_progress": TaskStatus.IN_PROGRESS,
    "in-progress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}

_FIELD_ALIASES = {
    "hours": "time_taken",
    "time": "time_taken",
    "timetaken": "time_taken",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, tracker: TaskTracker, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(tracker, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_num(value: float | None, digits: int = 2) -> str:
    if value is None or math.isnan(value):
        return "n/a"
    return f"{value:,.{digits}f}"


def _fmt_row(rank: int, d: DerivedTask) -> str:
    t = d.task
    return (
        f"{rank:>3}. [{t.status}] {t.title} | ${_fmt_num(t.revenue)} / {_fmt_num(t.time_taken, 1)}h"
        f" | ROI {_fmt_num(d.roi)} | {t.priority} | {str(t.id or '')[:8]}"
    )


def _resolve_id(tracker: TaskTracker, raw: str) -> str | None:
    """Accept a full id or a unique prefix of one."""
    if tracker.get_task(raw) is not None:
        return raw
    matches = [t.id for t in tracker.tasks if isinstance(t.id, str) and t.id.startswith(raw)]
    return matches[0] if len(matches) == 1 else None


def cmd_help(tracker: TaskTracker, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(tracker: TaskTracker, args: list[str]) -> str:
    limit = 10
    if args:
        try:
            limit = max(1, int(args[0]))
        except ValueError:
            return "Usage: /list [count]"
    ranked = tracker.derived_sorted
    if not ranked:
        return "No tasks."
    rows = [_fmt_row(i + 1, d) for i, d in enumerate(ranked[:limit])]
    rows.append(f"({min(limit, len(ranked))} of {len(ranked)} tasks, ranked by ROI)")
    return "\n".join(rows)


def cmd_metrics(tracker: TaskTracker, args: list[str]) -> str:
    m = tracker.metrics
    return (
        "Metrics:\n"
        f"  Total revenue: ${_fmt_num(m.total_revenue)}\n"
        f"  Total time: {_fmt_num(m.total_time_taken, 1)}h\n"
        f"  Time efficiency: {_fmt_num(m.time_efficiency_pct, 1)}%\n"
        f"  Revenue per hour: ${_fmt_num(m.revenue_per_hour)}\n"
        f"  Average ROI: {_fmt_num(m.average_roi)}\n"
        f"  Grade: {m.performance_grade}"
    )


def cmd_add(tracker: TaskTracker, args: list[str]) -> str:
    usage = "Usage: /add <revenue> <hours> <open|progress|done> <title...>"
    if len(args) < 4:
        return usage
    try:
        revenue = float(args[0])
        hours = float(args[1])
    except ValueError:
        return usage
    status = _STATUS_ALIASES.get(args[2].lower())
    if status is None:
        return usage

    try:
        task = tracker.add_task(title=" ".join(args[3:]), revenue=revenue, time_taken=hours, status=status)
    except StoreError as e:
        logger.error("add_task failed: %s", e)
        return f"Could not save the task: {e}"
    return f"Added {task.title!r} ({task.id[:8]})."


def cmd_update(tracker: TaskTracker, args: list[str]) -> str:
    usage = "Usage: /update <id> field=value [field=value ...]"
    if len(args) < 2:
        return usage
    task_id = _resolve_id(tracker, args[0])
    if task_id is None:
        return f"No task matches {args[0]!r}."

    patch: dict[str, object] = {}
    for pair in args[1:]:
        field, sep, value = pair.partition("=")
        if not sep:
            return usage
        field = _FIELD_ALIASES.get(field.lower(), field.lower())
        if field == "status":
            patch[field] = _STATUS_ALIASES.get(value.lower(), value)
        else:
            patch[field] = value

    try:
        task = tracker.update_task(task_id, **patch)
    except TypeError:
        return f"Cannot update {', '.join(patch)}: unknown or read-only field."
    if task is None:
        return f"No task matches {args[0]!r}."
    return f"Updated {task.title!r}."


def cmd_done(tracker: TaskTracker, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    task_id = _resolve_id(tracker, args[0])
    if task_id is None:
        return f"No task matches {args[0]!r}."
    task = tracker.update_task(task_id, status=TaskStatus.DONE)
    return f"Completed {task.title!r}." if task else f"No task matches {args[0]!r}."


def cmd_delete(tracker: TaskTracker, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    task_id = _resolve_id(tracker, args[0])
    if task_id is None:
        return f"No task matches {args[0]!r}."
    removed = tracker.delete_task(task_id)
    if removed is None:
        return f"No task matches {args[0]!r}."
    return f"Deleted {removed.title!r}. Use /undo to restore it."


def cmd_undo(tracker: TaskTracker, args: list[str]) -> str:
    restored = tracker.undo_delete()
    if restored is None:
        return "Nothing to undo."
    return f"Restored {restored.title!r}."


def cmd_dismiss(tracker: TaskTracker, args: list[str]) -> str:
    tracker.clear_last_deleted()
    return "Undo buffer cleared."


registry.register("help", cmd_help, "show this help", aliases=["?"])
registry.register("list", cmd_list, "list tasks ranked by ROI: /list [count]", aliases=["ls"])
registry.register("metrics", cmd_metrics, "show aggregate metrics", aliases=["stats"])
registry.register("add", cmd_add, "add a task: /add <revenue> <hours> <open|progress|done> <title...>")
registry.register("update", cmd_update, "update fields: /update <id> field=value ...")
registry.register("done", cmd_done, "mark a task Done: /done <id>")
registry.register("delete", cmd_delete, "delete a task: /delete <id>", aliases=["rm"])
registry.register("undo", cmd_undo, "restore the last deleted task")
registry.register("dismiss", cmd_dismiss, "forget the last deleted task")
