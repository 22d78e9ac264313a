# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from nexttask.cli.bootstrap import create_initial_state
from nexttask.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        log_level="WARNING",
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "tasks.sqlite3",
        list_limit=10_000,
        max_tree_depth=100,
        table_format="plain",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with the real SQLite stores.

    Store behaviour (constraints, ordering, transactions) is part of what we test.
    """
    return create_initial_state(settings=settings)


@pytest.fixture()
def add_tasks(state: AppState):
    """Create tasks "task 1".."task n" and return their ids."""

    def _add(n: int) -> list[int]:
        return [state.task_store.add_task(f"task {i}") for i in range(1, n + 1)]

    return _add


@pytest.fixture()
def restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in saved_handlers:
            h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)
