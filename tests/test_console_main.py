# tests/test_console_main.py

from __future__ import annotations

import json
import logging
from datetime import date

import pytest

from taskbook.cli import main as main_module
from taskbook.cli.bootstrap import create_initial_state
from taskbook.connectors.console_connector import run_console_loop
from taskbook.tasks.task_store import TaskStore


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    # main() reconfigures the root logger; drop (and close) whatever it installed.
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_console_loop_dispatches_until_exit(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["", "hello", "/add 1 2024-01-01 First", "/exit", "/add 1 2024-01-01 Never"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Commands start with '/'" in out
    assert "Task added: 1. First" in out
    assert state.task_store.count_tasks() == 1


def test_console_loop_survives_handler_crash(state, monkeypatch, capsys) -> None:
    def boom(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(state.task_store, "list_tasks", boom)
    _feed(monkeypatch, ["/list", "/add 1 2024-01-01 Still works"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Internal error while handling a command." in out
    assert "Task added: 1. Still works" in out


def test_bootstrap_loads_existing_tasks(settings) -> None:
    settings.data_dir.mkdir(parents=True)
    settings.tasks_path.write_text(
        json.dumps(
            [{"id": 5, "text": "old", "completed": False, "priority": 1, "due_date": "2024-03-01"}]
        ),
        "utf-8",
    )

    state = create_initial_state(settings=settings)

    assert state.task_store.count_tasks() == 1
    assert state.task_store.get_task(5).text == "old"


def test_main_saves_on_exit_and_returns_zero(settings, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["/add 2 01.06.2024 Buy milk", "/quit"])

    assert main_module.main(settings=settings) == 0

    records = json.loads(settings.tasks_path.read_text("utf-8"))
    assert records == [
        {"id": 1, "text": "Buy milk", "completed": False, "priority": 2, "due_date": "2024-06-01"}
    ]
    assert "Saving tasks and exiting." in capsys.readouterr().out


def test_main_writes_log_file_when_enabled(settings, monkeypatch) -> None:
    settings.log_file_enabled = True
    _feed(monkeypatch, [])

    assert main_module.main(settings=settings) == 0
    assert (settings.data_dir / "taskbook.log").exists()


def test_bootstrap_with_unusable_data_dir_starts_empty(settings, tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", "utf-8")
    settings.data_dir = blocker / "data"
    settings.tasks_path = settings.data_dir / "tasks.json"

    state = create_initial_state(settings=settings)

    assert state.task_store.count_tasks() == 0
    # mutations still work in memory; the save failure is reported, not raised
    assert state.task_store.add_task("kept", 1, date(2024, 1, 1)).id == 1
    assert state.task_store.save() is False


def test_main_with_unusable_data_dir_still_exits_cleanly(
    settings, tmp_path, monkeypatch, capsys
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", "utf-8")
    settings.data_dir = blocker / "data"
    settings.tasks_path = settings.data_dir / "tasks.json"
    settings.log_file_enabled = True
    _feed(monkeypatch, ["/add 1 2024-01-01 In memory only", "/exit"])

    assert main_module.main(settings=settings) == 0
    assert "Could not save tasks" in capsys.readouterr().out


def test_ctrl_c_during_command_ends_loop_and_main_returns_zero(
    settings, monkeypatch, capsys
) -> None:
    def interrupted(self, show_completed=False):
        raise KeyboardInterrupt

    monkeypatch.setattr(TaskStore, "list_tasks", interrupted)
    _feed(monkeypatch, ["/add 1 2024-01-01 Saved anyway", "/list", "/add 1 2024-01-02 Never"])

    assert main_module.main(settings=settings) == 0

    records = json.loads(settings.tasks_path.read_text("utf-8"))
    assert [r["text"] for r in records] == ["Saved anyway"]
