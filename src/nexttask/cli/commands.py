# src/nexttask/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from tabulate import tabulate

from ..core.state import AppState
from ..tasks.purge import purge_resolved
from ..tasks.task_models import Task, TaskStatus
from ..tasks.tree import render_tree

logger = logging.getLogger(__name__)

MAX_TASK_ID = 0xFFFFFFFF
_DIGITS = re.compile(r"[0-9]+")

CommandHandler = Callable[[AppState, tuple[Any, ...]], str]

# Parameter kinds understood by the parser.
ID = "id"
TEXT = "text"


class InvalidCommand(ValueError):
    """argv does not match any command shape (or carries a bad id)."""


def parse_task_id(token: str) -> int:
    """Decimal digits only, 1..2**32-1."""
    if not _DIGITS.fullmatch(token):
        raise InvalidCommand(f"not a task id: {token!r}")
    value = int(token)
    if value == 0 or value > MAX_TASK_ID:
        raise InvalidCommand(f"task id out of range: {token}")
    return value


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    name: str
    handler: CommandHandler
    args: tuple[Any, ...]

    def run(self, state: AppState) -> str:
        return self.handler(state, self.args)


class CommandRegistry:
    """argv command registry: one command per invocation, validated before dispatch."""

    def __init__(self, default: str | None = None) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._params: dict[str, tuple[str, ...]] = {}
        self._help: dict[str, str] = {}
        self._default = default

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        params: Sequence[str] = (),
    ) -> None:
        if TEXT in params and tuple(params)[-1] != TEXT:
            raise ValueError("a text parameter must come last")
        key = name.lower()
        self._handlers[key] = handler
        self._params[key] = tuple(params)
        self._help[key] = help_text

    def parse(self, argv: Sequence[str]) -> ParsedCommand:
        """
        Turn argv into a ParsedCommand.

        Raises InvalidCommand for an unknown name, wrong arity or a bad id.
        Nothing here touches storage.
        """
        parts = list(argv)
        if not parts:
            if self._default is None:
                raise InvalidCommand("no command given")
            parts = [self._default]

        name = parts[0].lower()
        raw = parts[1:]

        handler = self._handlers.get(name)
        if handler is None:
            raise InvalidCommand(f"unknown command: {name}")

        params = self._params[name]
        values: list[Any] = []
        if params and params[-1] == TEXT:
            fixed = params[:-1]
            if len(raw) < len(fixed):
                raise InvalidCommand(f"{name}: expected at least {len(fixed)} argument(s)")
            values.extend(parse_task_id(tok) for tok in raw[: len(fixed)])
            values.append(" ".join(raw[len(fixed):]))
        else:
            if len(raw) != len(params):
                raise InvalidCommand(f"{name}: expected {len(params)} argument(s), got {len(raw)}")
            values.extend(parse_task_id(tok) for tok in raw)

        return ParsedCommand(name=name, handler=handler, args=tuple(values))

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            usage = " ".join([name, *(f"<{p}>" for p in self._params[name])])
            lines.append(f"  {usage:<22} {help_text}")
        return "\n".join(lines)


registry = CommandRegistry(default="next")


def format_tasks(tasks: Sequence[Task], table_format: str = "simple") -> str:
    rows = [(t.id, t.description, t.status.value) for t in tasks]
    return tabulate(rows, headers=["id", "description", "status"], tablefmt=table_format)


def _table(state: AppState, tasks: Sequence[Task]) -> str:
    return format_tasks(tasks, str(getattr(state.settings, "table_format", "simple")))


# ---- views ----


def cmd_all(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.all_tasks())


def cmd_inbox(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.inbox())


def cmd_completed(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.completed())


def cmd_incomplete(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.incomplete())


def cmd_projects(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.projects())


def cmd_next(state: AppState, args: tuple[Any, ...]) -> str:
    return _table(state, state.classifier.next_actions())


def cmd_deps(state: AppState, args: tuple[Any, ...]) -> str:
    (task_id,) = args
    return _table(state, state.classifier.dependencies_of(task_id))


def cmd_tree(state: AppState, args: tuple[Any, ...]) -> str:
    (task_id,) = args
    max_depth = int(getattr(state.settings, "max_tree_depth", 100))
    lines = render_tree(state.task_store, state.dependency_store, task_id, max_depth=max_depth)
    return "\n".join(lines)


# ---- mutations ----


def cmd_add(state: AppState, args: tuple[Any, ...]) -> str:
    (description,) = args
    task_id = state.task_store.add_task(description)
    logger.info("Added task id=%s", task_id)
    return str(task_id)


def _resolve(state: AppState, task_id: int, status: TaskStatus) -> str:
    if not state.task_store.set_status(task_id, status):
        logger.warning("No incomplete task with id %s; nothing changed.", task_id)
    return ""


def cmd_drop(state: AppState, args: tuple[Any, ...]) -> str:
    (task_id,) = args
    return _resolve(state, task_id, TaskStatus.DROPPED)


def cmd_complete(state: AppState, args: tuple[Any, ...]) -> str:
    (task_id,) = args
    return _resolve(state, task_id, TaskStatus.COMPLETED)


def cmd_depends(state: AppState, args: tuple[Any, ...]) -> str:
    task_id, dependency_id = args
    if not state.dependency_store.add_edge(task_id, dependency_id):
        logger.info("Task %s already depends on %s.", task_id, dependency_id)
    return ""


def cmd_purge(state: AppState, args: tuple[Any, ...]) -> str:
    result = purge_resolved(state.db, state.task_store, state.dependency_store)
    return result.summary()


def cmd_help(state: AppState, args: tuple[Any, ...]) -> str:
    return registry.build_help()


registry.register("all", cmd_all, "list all tasks")
registry.register("inbox", cmd_inbox, "tasks neither blocking nor blocked")
registry.register("completed", cmd_completed, "completed or dropped tasks")
registry.register("incomplete", cmd_incomplete, "incomplete tasks")
registry.register("projects", cmd_projects, "tasks with an incomplete dependency")
registry.register("next", cmd_next, "tasks not blocked by anything (default)")
registry.register("deps", cmd_deps, "direct dependencies of a task", params=(ID,))
registry.register("tree", cmd_tree, "dependency tree rooted at a task", params=(ID,))
registry.register("add", cmd_add, "create a task", params=(TEXT,))
registry.register("drop", cmd_drop, "mark a task dropped", params=(ID,))
registry.register("complete", cmd_complete, "mark a task completed", params=(ID,))
registry.register("depends", cmd_depends, "first task depends on second", params=(ID, ID))
registry.register("purge", cmd_purge, "delete completed/dropped tasks and their edges")
registry.register("help", cmd_help, "show this help")
