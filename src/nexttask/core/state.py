# src/nexttask/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.classifier import Classifier
from ..tasks.db import Database
from ..tasks.dependency_store import DependencyStore
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    db: Database
    task_store: TaskStore
    dependency_store: DependencyStore
    classifier: Classifier
