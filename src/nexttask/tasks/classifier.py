# src/nexttask/tasks/classifier.py

"""
GTD views derived from graph structure plus status.

Nothing here is stored: every view is recomputed from a fresh snapshot of the
task and edge tables. A task stops being a project the moment its last
incomplete dependency is resolved, even though the edges are still there.

Id-set algebra:
- projects   = {t | edge (t, d) exists and d is incomplete}
- subtasks   = {d | edge (t, d) exists and d is incomplete}
- next       = all - projects
- inbox      = all - (projects | subtasks)

Snapshot ids are never capped; only the rows materialized for a view are.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Set
from dataclasses import dataclass

from ..core.ports import DependencyRepo, TaskRepo
from .task_models import RESOLVED_STATUSES, DependencyEdge, Task, TaskStatus

logger = logging.getLogger(__name__)


def project_ids(incomplete: Set[int], edges: Iterable[DependencyEdge]) -> set[int]:
    return {e.task for e in edges if e.dependency in incomplete}


def subtask_ids(incomplete: Set[int], edges: Iterable[DependencyEdge]) -> set[int]:
    return {e.dependency for e in edges if e.dependency in incomplete}


def next_action_ids(
    all_ids: Set[int], incomplete: Set[int], edges: Iterable[DependencyEdge]
) -> set[int]:
    return set(all_ids) - project_ids(incomplete, edges)


def inbox_ids(
    all_ids: Set[int], incomplete: Set[int], edges: Iterable[DependencyEdge]
) -> set[int]:
    edges = list(edges)
    return set(all_ids) - (project_ids(incomplete, edges) | subtask_ids(incomplete, edges))


@dataclass(frozen=True, slots=True)
class GraphSnapshot:
    all_ids: set[int]
    incomplete_ids: set[int]
    edges: list[DependencyEdge]


class Classifier:
    """Read-side views over TaskStore + DependencyStore, each ordered by id."""

    def __init__(self, tasks: TaskRepo, deps: DependencyRepo) -> None:
        self._tasks = tasks
        self._deps = deps

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            all_ids=self._tasks.all_ids(),
            incomplete_ids=self._deps.task_ids_with_status(TaskStatus.INCOMPLETE),
            edges=self._deps.list_edges(),
        )

    def _materialize(self, ids: set[int], view: str) -> list[Task]:
        logger.debug("view=%s ids=%d", view, len(ids))
        return self._tasks.list_by_ids(ids)

    def all_tasks(self) -> list[Task]:
        return self._tasks.list_all()

    def incomplete(self) -> list[Task]:
        return self._tasks.list_by_status({TaskStatus.INCOMPLETE})

    def completed(self) -> list[Task]:
        """Completed or dropped."""
        return self._tasks.list_by_status(RESOLVED_STATUSES)

    def projects(self) -> list[Task]:
        snap = self.snapshot()
        return self._materialize(project_ids(snap.incomplete_ids, snap.edges), "projects")

    def next_actions(self) -> list[Task]:
        snap = self.snapshot()
        ids = next_action_ids(snap.all_ids, snap.incomplete_ids, snap.edges)
        return self._materialize(ids, "next")

    def inbox(self) -> list[Task]:
        snap = self.snapshot()
        ids = inbox_ids(snap.all_ids, snap.incomplete_ids, snap.edges)
        return self._materialize(ids, "inbox")

    def dependencies_of(self, task_id: int) -> list[Task]:
        return self._deps.direct_dependencies(task_id)
