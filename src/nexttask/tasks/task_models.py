# src/nexttask/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    INCOMPLETE is the only initial state. COMPLETED and DROPPED are terminal:
    nothing leads out of them and there is no transition between them.
    """

    INCOMPLETE = "incomplete"
    COMPLETED = "completed"
    DROPPED = "dropped"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            raise ValueError("task row has no status")
        return cls(raw)

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    TaskStatus.INCOMPLETE: "-",
    TaskStatus.COMPLETED: "+",
    TaskStatus.DROPPED: "o",
}

RESOLVED_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.DROPPED})


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """`task` depends on `dependency`."""

    task: int
    dependency: int
