# src/nexttask/tasks/db.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# Stay well below SQLITE_MAX_VARIABLE_NUMBER on old builds (999).
MAX_BOUND_PARAMS = 500


def chunked(ids: Iterable[int], size: int = MAX_BOUND_PARAMS) -> Iterator[list[int]]:
    """Yield sorted, de-duplicated ids in slices small enough for one IN (...) clause."""
    batch: list[int] = []
    for i in sorted({int(x) for x in ids}):
        batch.append(i)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def placeholders(n: int) -> str:
    return ",".join("?" for _ in range(n))


class Database:
    """
    The SQLite file shared by TaskStore and DependencyStore.

    - the schema is (re-)ensured idempotently on construction
    - every store call gets a short-lived connection unless the caller passes one in
    - `transaction()` hands out one connection so several store calls commit or
      roll back together (used by purge)
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("Database ready db=%s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        # Edges rely on FK enforcement; this one must not be best-effort.
        conn.execute("PRAGMA foreign_keys=ON")
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL CHECK (length(trim(description)) > 0),
                    status TEXT NOT NULL DEFAULT 'incomplete'
                        CHECK (status IN ('incomplete', 'completed', 'dropped'))
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS dependencies (
                    task_id INTEGER NOT NULL REFERENCES tasks(id),
                    dependency_id INTEGER NOT NULL REFERENCES tasks(id),
                    UNIQUE (task_id, dependency_id)
                )
                """
            )

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)")
            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_dependencies_dependency "
                "ON dependencies(dependency_id)"
            )

            conn.commit()
        finally:
            conn.close()

    @contextlib.contextmanager
    def connection(self, conn: sqlite3.Connection | None = None) -> Iterator[sqlite3.Connection]:
        """
        Yield `conn` unchanged if given (the caller owns commit/rollback), otherwise
        a fresh connection that is committed on success and closed either way.
        """
        if conn is not None:
            yield conn
            return

        own = self._get_conn()
        try:
            yield own
            own.commit()
        finally:
            own.close()

    @contextlib.contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """One write transaction: commit on success, roll back on any exception."""
        conn = self._get_conn()
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()
