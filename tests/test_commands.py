# tests/test_commands.py

from __future__ import annotations

import pytest

import nexttask.cli.main as cli_main
from nexttask.cli.commands import CommandRegistry, InvalidCommand, parse_task_id, registry
from nexttask.cli.main import EXIT_FAILED, EXIT_INVALID, EXIT_OK, execute, main
from nexttask.tasks.task_models import TaskStatus


def _run(settings, capsys, *argv: str) -> tuple[int, str, str]:
    code = execute(list(argv), settings=settings)
    out, err = capsys.readouterr()
    return code, out, err


def _table_ids(out: str) -> list[int]:
    # "plain" tablefmt: header line, then one row per task starting with the id.
    return [int(line.split()[0]) for line in out.strip().splitlines()[1:]]


@pytest.mark.parametrize("token,expected", [("1", 1), ("007", 7), ("4294967295", 4294967295)])
def test_parse_task_id_accepts(token: str, expected: int) -> None:
    assert parse_task_id(token) == expected


@pytest.mark.parametrize("token", ["0", "4294967296", "-1", "+3", "1.5", "abc", "", "١٢"])
def test_parse_task_id_rejects(token: str) -> None:
    with pytest.raises(InvalidCommand):
        parse_task_id(token)


def test_registry_shapes() -> None:
    assert registry.parse([]).name == "next"
    assert registry.parse(["add", "buy", "milk"]).args == ("buy milk",)
    assert registry.parse(["depends", "3", "2"]).args == (3, 2)
    assert registry.parse(["TREE", "1"]).name == "tree"

    for argv in (["nope"], ["all", "x"], ["deps"], ["depends", "1"], ["drop", "0"]):
        with pytest.raises(InvalidCommand):
            registry.parse(argv)


def test_registry_without_default_rejects_empty_argv() -> None:
    reg = CommandRegistry()
    reg.register("a", lambda state, args: "a", "a")
    with pytest.raises(InvalidCommand):
        reg.parse([])


def test_invalid_command_touches_no_storage(settings, capsys) -> None:
    code, out, err = _run(settings, capsys, "drop", "0")

    assert code == EXIT_INVALID
    assert out == ""
    assert "invalid command: drop 0" in err
    assert not settings.db_path.exists()


def test_walkthrough(settings, capsys) -> None:
    for i in range(1, 6):
        code, out, _ = _run(settings, capsys, "add", "task", str(i))
        assert code == EXIT_OK
        assert out.strip() == str(i)

    assert _run(settings, capsys, "depends", "3", "2")[0] == EXIT_OK
    assert _run(settings, capsys, "depends", "4", "5")[0] == EXIT_OK

    code, out, _ = _run(settings, capsys)
    assert code == EXIT_OK
    assert _table_ids(out) == [1, 2, 5]

    _, out, _ = _run(settings, capsys, "projects")
    assert _table_ids(out) == [3, 4]

    _, out, _ = _run(settings, capsys, "deps", "3")
    assert _table_ids(out) == [2]

    _run(settings, capsys, "complete", "2")
    _run(settings, capsys, "drop", "5")

    _, out, _ = _run(settings, capsys, "next")
    assert _table_ids(out) == [1, 2, 3, 4, 5]

    _, out, _ = _run(settings, capsys, "completed")
    assert _table_ids(out) == [2, 5]
    assert "dropped" in out

    _, out, _ = _run(settings, capsys, "tree", "3")
    assert out.splitlines() == ["- 3 task 3", "    + 2 task 2"]

    code, out, _ = _run(settings, capsys, "purge")
    assert code == EXIT_OK
    assert out.strip() == "purged 2 task(s) and 2 dependency edge(s)"

    _, out, _ = _run(settings, capsys, "all")
    assert _table_ids(out) == [1, 3, 4]


def test_depends_on_missing_task_fails(settings, capsys, state) -> None:
    state.task_store.add_task("only one")

    code, out, err = _run(settings, capsys, "depends", "1", "2")

    assert code == EXIT_FAILED
    assert "FOREIGN KEY" in err
    assert state.dependency_store.count_edges() == 0


def test_add_without_text_fails_in_storage(settings, capsys, state) -> None:
    code, _, err = _run(settings, capsys, "add")
    assert code == EXIT_FAILED
    assert err.startswith("error:")
    assert state.task_store.count_tasks() == 0


def test_tree_of_missing_task_fails(settings, capsys) -> None:
    code, out, err = _run(settings, capsys, "tree", "9")
    assert code == EXIT_FAILED
    assert out == ""
    assert "exactly one task" in err


def test_complete_twice_keeps_status(settings, capsys, state) -> None:
    tid = state.task_store.add_task("x")
    assert _run(settings, capsys, "complete", str(tid))[0] == EXIT_OK
    assert _run(settings, capsys, "drop", str(tid))[0] == EXIT_OK
    assert state.task_store.get_task(tid).status is TaskStatus.COMPLETED


def test_help_lists_commands(settings, capsys) -> None:
    code, out, _ = _run(settings, capsys, "help")
    assert code == EXIT_OK
    assert "depends <id> <id>" in out
    assert "purge" in out


def test_main_sets_up_logging_and_runs(settings, capsys, monkeypatch, restore_root_logging) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert main(["add", "buy", "milk"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "1"
    assert (settings.data_dir / "nexttask.log").exists()

    assert main(["bogus"]) == EXIT_INVALID
    assert "invalid command: bogus" in capsys.readouterr().err
