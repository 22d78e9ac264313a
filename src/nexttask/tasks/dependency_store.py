# src/nexttask/tasks/dependency_store.py

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable

from ..config import DEFAULT_LIST_LIMIT
from .db import Database, chunked, placeholders
from .task_models import DependencyEdge, Task, TaskStatus

logger = logging.getLogger(__name__)


class DependencyStore:
    """
    SQLite dependency edges: (task_id, dependency_id) means
    "task_id depends on dependency_id".

    - UNIQUE(task_id, dependency_id): re-adding an edge is a no-op
    - both columns reference tasks(id): edges to unknown ids fail
    - cycles and self-loops are allowed
    """

    def __init__(self, db: Database, *, list_limit: int = DEFAULT_LIST_LIMIT) -> None:
        self._db = db
        self._limit = max(1, int(list_limit))

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"]),
            status=TaskStatus.from_db(row["status"]),
        )

    def count_edges(self) -> int:
        with self._db.connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM dependencies").fetchone()
            return int(n)

    def add_edge(self, task_id: int, dependency_id: int) -> bool:
        """
        Record that `task_id` depends on `dependency_id`.

        Returns True if a new edge was written, False if it already existed.
        Raises sqlite3.IntegrityError if either endpoint is not a task.
        """
        with self._db.connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO dependencies(task_id, dependency_id)
                VALUES (?, ?)
                ON CONFLICT(task_id, dependency_id) DO NOTHING
                """,
                (int(task_id), int(dependency_id)),
            )
            created = cur.rowcount == 1
        logger.debug("Edge %s -> %s created=%s", task_id, dependency_id, created)
        return created

    def list_edges(self) -> list[DependencyEdge]:
        with self._db.connection() as conn:
            rows = conn.execute(
                """
                SELECT task_id, dependency_id
                FROM dependencies
                ORDER BY task_id ASC, dependency_id ASC
                """
            ).fetchall()
        return [DependencyEdge(int(r["task_id"]), int(r["dependency_id"])) for r in rows]

    def direct_dependencies(self, task_id: int) -> list[Task]:
        """Tasks that `task_id` depends on, ascending by id."""
        with self._db.connection() as conn:
            rows = conn.execute(
                """
                SELECT t.id, t.description, t.status
                FROM dependencies d
                JOIN tasks t ON t.id = d.dependency_id
                WHERE d.task_id = ?
                ORDER BY t.id ASC
                    LIMIT ?
                """,
                (int(task_id), self._limit),
            ).fetchall()
        return [self._row_to_task(r) for r in rows]

    def task_ids_with_status(self, status: TaskStatus) -> set[int]:
        with self._db.connection() as conn:
            rows = conn.execute(
                "SELECT id FROM tasks WHERE status = ?",
                (TaskStatus(status).value,),
            ).fetchall()
        return {int(r["id"]) for r in rows}

    def delete_edges_touching(
        self,
        ids: Iterable[int],
        *,
        conn: sqlite3.Connection | None = None,
    ) -> int:
        """Delete every edge whose task or dependency endpoint is in `ids`."""
        removed = 0
        with self._db.connection(conn) as c:
            for batch in chunked(ids):
                ph = placeholders(len(batch))
                cur = c.execute(
                    f"DELETE FROM dependencies WHERE task_id IN ({ph}) OR dependency_id IN ({ph})",
                    [*batch, *batch],
                )
                removed += int(cur.rowcount)
        logger.debug("Edges deleted removed=%d", removed)
        return removed
