# src/nexttask/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- opens the SQLite database (which re-ensures the schema),
- wires stores and the classifier into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.classifier import Classifier
from ..tasks.db import Database
from ..tasks.dependency_store import DependencyStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    db = Database(settings.db_path)
    task_store = TaskStore(db, list_limit=settings.list_limit)
    dependency_store = DependencyStore(db, list_limit=settings.list_limit)

    return AppState(
        settings=settings,
        db=db,
        task_store=task_store,
        dependency_store=dependency_store,
        classifier=Classifier(task_store, dependency_store),
    )
