# src/nexttask/core/ports.py

"""
Ports (interfaces) used by the read side.

Classifier and tree renderer depend on Protocols instead of the SQLite stores.
This keeps storage swappable and lets tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import DependencyEdge, Task, TaskStatus


class TaskRepo(Protocol):
    def all_ids(self) -> set[int]: ...
    def list_all(self) -> list[Task]: ...
    def list_by_status(self, statuses: Iterable[TaskStatus]) -> list[Task]: ...
    def list_by_ids(self, ids: Iterable[int]) -> list[Task]: ...


class DependencyRepo(Protocol):
    def list_edges(self) -> list[DependencyEdge]: ...
    def direct_dependencies(self, task_id: int) -> list[Task]: ...
    def task_ids_with_status(self, status: TaskStatus) -> set[int]: ...
