# src/nexttask/tasks/purge.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from .db import Database
from .dependency_store import DependencyStore
from .task_models import RESOLVED_STATUSES
from .task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PurgeResult:
    task_ids: frozenset[int]
    tasks_removed: int
    edges_removed: int

    def summary(self) -> str:
        return f"purged {self.tasks_removed} task(s) and {self.edges_removed} dependency edge(s)"


def purge_resolved(db: Database, tasks: TaskStore, deps: DependencyStore) -> PurgeResult:
    """
    Remove every completed/dropped task together with all edges touching it.

    The table has no ON DELETE CASCADE, so edges go first, then the tasks. Both
    deletes share one transaction: if either fails, nothing is removed.
    """
    with db.transaction() as conn:
        resolved = tasks.ids_with_status(RESOLVED_STATUSES, conn=conn)
        if not resolved:
            logger.info("Purge: nothing to remove")
            return PurgeResult(task_ids=frozenset(), tasks_removed=0, edges_removed=0)

        edges_removed = deps.delete_edges_touching(resolved, conn=conn)
        tasks_removed = tasks.delete_by_status(RESOLVED_STATUSES, conn=conn)

    result = PurgeResult(
        task_ids=frozenset(resolved),
        tasks_removed=tasks_removed,
        edges_removed=edges_removed,
    )
    logger.info(
        "Purge: removed tasks=%d edges=%d ids=%s",
        result.tasks_removed,
        result.edges_removed,
        sorted(result.task_ids),
    )
    return result
