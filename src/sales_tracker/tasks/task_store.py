# tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)

USER_TASKS_KEY = "user_tasks"


class StoreError(RuntimeError):
    """The durable store could not be read or written."""


class UserTaskStore:
    """
    SQLite key-value store holding user-created tasks.

    One table, kv(key, value). The user tasks live under a single key as a JSON array
    of camelCase task records. Appending rewrites the whole array (read-modify-write);
    two processes appending at the same time can lose one of the writes.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "user_tasks.sqlite3", *, key: str = USER_TASKS_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Cannot open user task store at {self._db_path}: {e}") from e
        logger.info("UserTaskStore ready db=%s key=%s", self._db_path, self._key)

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- key-value API ----

    def get_value(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read key {key!r}: {e}") from e
        return None if row is None else str(row[0])

    def put_value(self, key: str, value: str) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write key {key!r}: {e}") from e

    # ---- user tasks ----

    def _load_records(self) -> list[dict[str, Any]]:
        raw = self.get_value(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored %s is not valid JSON; treating as empty", self._key)
            return []
        if not isinstance(data, list):
            logger.warning("Stored %s is %s, not a list; treating as empty", self._key, type(data).__name__)
            return []
        return [rec for rec in data if isinstance(rec, Mapping)]

    def load_user_tasks(self) -> list[Task]:
        """Missing or corrupt data reads as an empty list; only an unavailable store raises."""
        tasks = [Task.from_record(rec) for rec in self._load_records()]
        logger.debug("Loaded %d user tasks", len(tasks))
        return tasks

    def append_user_task(self, task: Task) -> None:
        records = self._load_records()
        records.append(task.to_record())
        self.put_value(self._key, json.dumps(records, ensure_ascii=False))
        logger.debug("User task appended id=%s total=%d", task.id, len(records))
