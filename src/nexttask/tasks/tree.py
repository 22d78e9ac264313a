# src/nexttask/tasks/tree.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ..config import DEFAULT_MAX_TREE_DEPTH
from ..core.ports import DependencyRepo, TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)

INDENT_WIDTH = 4
MAX_DEPTH_SENTINEL = "max recursion depth exceeded"


class TraversalError(RuntimeError):
    """A node lookup during tree rendering did not return exactly one task."""


@dataclass(frozen=True, slots=True)
class TreeLine:
    depth: int
    task: Task | None  # None marks the depth-exhausted sentinel

    def render(self) -> str:
        indent = " " * (INDENT_WIDTH * self.depth)
        if self.task is None:
            return f"{indent}{MAX_DEPTH_SENTINEL}"
        return f"{indent}{self.task.status.glyph} {self.task.id} {self.task.description}"


def _lookup_one(tasks: TaskRepo, task_id: int) -> Task:
    found = tasks.list_by_ids({task_id})
    if len(found) != 1:
        raise TraversalError(f"expected exactly one task with id {task_id}, found {len(found)}")
    return found[0]


def walk_tree(
    tasks: TaskRepo,
    deps: DependencyRepo,
    root_id: int,
    *,
    max_depth: int = DEFAULT_MAX_TREE_DEPTH,
) -> Iterator[TreeLine]:
    """
    Pre-order walk over "depends on" edges starting at `root_id`.

    There is no visited set. A cycle is cut off only by the depth budget: once a
    branch reaches `max_depth` a sentinel line is yielded instead of the node.
    """
    # Explicit stack: depth is bounded by max_depth, not by the recursion limit.
    stack: list[tuple[int, int]] = [(root_id, 0)]
    while stack:
        task_id, depth = stack.pop()
        if max_depth - depth <= 0:
            logger.debug("tree root=%s depth budget exhausted at id=%s", root_id, task_id)
            yield TreeLine(depth, None)
            continue

        task = _lookup_one(tasks, task_id)
        yield TreeLine(depth, task)

        children = deps.direct_dependencies(task.id)
        for child in reversed(children):
            stack.append((child.id, depth + 1))


def render_tree(
    tasks: TaskRepo,
    deps: DependencyRepo,
    root_id: int,
    *,
    max_depth: int = DEFAULT_MAX_TREE_DEPTH,
) -> list[str]:
    """Fully render the tree before returning, so a TraversalError leaves no partial output."""
    return [line.render() for line in walk_tree(tasks, deps, root_id, max_depth=max_depth)]
