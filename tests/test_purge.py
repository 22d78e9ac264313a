# tests/test_purge.py

from __future__ import annotations

import sqlite3

import pytest

from nexttask.tasks.purge import purge_resolved
from nexttask.tasks.task_models import DependencyEdge, TaskStatus


def _purge(state):
    return purge_resolved(state.db, state.task_store, state.dependency_store)


def test_purge_removes_resolved_tasks_and_incident_edges(state, add_tasks) -> None:
    add_tasks(12)
    deps = state.dependency_store
    deps.add_edge(1, 8)
    deps.add_edge(9, 2)
    deps.add_edge(10, 10)
    deps.add_edge(8, 9)
    deps.add_edge(3, 4)
    deps.add_edge(11, 12)
    state.task_store.set_status(8, TaskStatus.COMPLETED)
    state.task_store.set_status(9, TaskStatus.COMPLETED)
    state.task_store.set_status(10, TaskStatus.DROPPED)

    result = _purge(state)

    assert result.task_ids == {8, 9, 10}
    assert result.tasks_removed == 3
    assert result.edges_removed == 4
    remaining = {t.id for t in state.task_store.list_all()}
    assert remaining == {1, 2, 3, 4, 5, 6, 7, 11, 12}
    assert deps.list_edges() == [DependencyEdge(3, 4), DependencyEdge(11, 12)]


def test_no_dangling_edges_or_resolved_tasks_after_purge(state, add_tasks) -> None:
    add_tasks(6)
    deps = state.dependency_store
    for a, b in [(1, 2), (2, 3), (3, 1), (4, 5), (6, 2)]:
        deps.add_edge(a, b)
    state.task_store.set_status(2, TaskStatus.DROPPED)
    state.task_store.set_status(5, TaskStatus.COMPLETED)

    _purge(state)

    tasks = state.task_store.list_all()
    alive = {t.id for t in tasks}
    assert all(t.status is TaskStatus.INCOMPLETE for t in tasks)
    for edge in deps.list_edges():
        assert edge.task in alive and edge.dependency in alive


def test_purge_with_nothing_resolved_is_a_noop(state, add_tasks) -> None:
    add_tasks(2)
    state.dependency_store.add_edge(1, 2)

    result = _purge(state)

    assert result.tasks_removed == 0 and result.edges_removed == 0
    assert state.task_store.count_tasks() == 2
    assert state.dependency_store.count_edges() == 1


def test_failed_purge_rolls_back_edge_deletes(state, add_tasks, monkeypatch) -> None:
    add_tasks(2)
    state.dependency_store.add_edge(1, 2)
    state.task_store.set_status(2, TaskStatus.COMPLETED)

    def boom(statuses, *, conn=None):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(state.task_store, "delete_by_status", boom)

    with pytest.raises(sqlite3.OperationalError):
        _purge(state)

    assert state.dependency_store.list_edges() == [DependencyEdge(1, 2)]
    assert state.task_store.count_tasks() == 2
