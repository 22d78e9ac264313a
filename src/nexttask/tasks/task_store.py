# src/nexttask/tasks/task_store.py

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable

from ..config import DEFAULT_LIST_LIMIT
from .db import Database, chunked, placeholders
from .task_models import RESOLVED_STATUSES, Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task rows: (id, description, status).

    Ids come from AUTOINCREMENT, so they grow monotonically and are never reused
    after a purge. Every listing is ordered by id and capped at `list_limit`.

    Methods that take `conn=` join the caller's transaction instead of opening
    their own connection.
    """

    def __init__(self, db: Database, *, list_limit: int = DEFAULT_LIST_LIMIT) -> None:
        self._db = db
        self._limit = max(1, int(list_limit))
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", db.path, total)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"]),
            status=TaskStatus.from_db(row["status"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._db.connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def add_task(self, description: str) -> int:
        """
        Insert an incomplete task and return its id.

        An empty description is rejected by the table's CHECK constraint
        (sqlite3.IntegrityError), not here.
        """
        with self._db.connection() as conn:
            cur = conn.execute(
                "INSERT INTO tasks(description, status) VALUES (?, ?)",
                (description, TaskStatus.INCOMPLETE.value),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
        logger.debug("Task added id=%s", task_id)
        return task_id

    def set_status(self, task_id: int, new_status: TaskStatus) -> bool:
        """
        Move an incomplete task to COMPLETED or DROPPED.

        There is no existence check: an unknown id (or a task that is already
        resolved) changes zero rows and returns False.
        """
        if new_status not in RESOLVED_STATUSES:
            raise ValueError(f"cannot set status to {new_status!s}; only completed/dropped")

        with self._db.connection() as conn:
            cur = conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ? AND status = ?",
                (new_status.value, int(task_id), TaskStatus.INCOMPLETE.value),
            )
            changed = cur.rowcount == 1
        logger.debug("Task status id=%s -> %s changed=%s", task_id, new_status.value, changed)
        return changed

    def all_ids(self) -> set[int]:
        """Every task id, uncapped: the classifier needs the whole graph."""
        with self._db.connection() as conn:
            rows = conn.execute("SELECT id FROM tasks").fetchall()
        return {int(r["id"]) for r in rows}

    def get_task(self, task_id: int) -> Task | None:
        tasks = self.list_by_ids([task_id])
        return tasks[0] if tasks else None

    def list_all(self) -> list[Task]:
        with self._db.connection() as conn:
            rows = conn.execute(
                "SELECT id, description, status FROM tasks ORDER BY id ASC LIMIT ?",
                (self._limit,),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def list_by_status(self, statuses: Iterable[TaskStatus]) -> list[Task]:
        values = sorted({TaskStatus(s).value for s in statuses})
        if not values:
            return []

        with self._db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT id, description, status
                FROM tasks
                WHERE status IN ({placeholders(len(values))})
                ORDER BY id ASC
                    LIMIT ?
                """,
                (*values, self._limit),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def list_by_ids(self, ids: Iterable[int]) -> list[Task]:
        """Materialize an id set into full rows, ascending by id."""
        batches = list(chunked(ids))
        if not batches:
            return []

        out: list[Task] = []
        with self._db.connection() as conn:
            for batch in batches:
                rows = conn.execute(
                    f"""
                    SELECT id, description, status
                    FROM tasks
                    WHERE id IN ({placeholders(len(batch))})
                    ORDER BY id ASC
                    """,
                    batch,
                ).fetchall()
                out.extend(self._row_to_task(r) for r in rows)
                if len(out) >= self._limit:
                    break
        # Batches are produced in ascending id order, so `out` is already sorted.
        return out[: self._limit]

    def delete_by_status(
        self,
        statuses: Iterable[TaskStatus],
        *,
        conn: sqlite3.Connection | None = None,
    ) -> int:
        values = sorted({TaskStatus(s).value for s in statuses})
        if not values:
            return 0

        with self._db.connection(conn) as c:
            cur = c.execute(
                f"DELETE FROM tasks WHERE status IN ({placeholders(len(values))})",
                values,
            )
            removed = int(cur.rowcount)
        logger.debug("Tasks deleted statuses=%s removed=%d", values, removed)
        return removed

    def ids_with_status(
        self,
        statuses: Iterable[TaskStatus],
        *,
        conn: sqlite3.Connection | None = None,
    ) -> set[int]:
        values = sorted({TaskStatus(s).value for s in statuses})
        if not values:
            return set()

        with self._db.connection(conn) as c:
            rows = c.execute(
                f"SELECT id FROM tasks WHERE status IN ({placeholders(len(values))})",
                values,
            ).fetchall()
        return {int(r["id"]) for r in rows}
