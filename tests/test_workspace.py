from pathlib import Path

import pytest

from tasklist.config import ConfigLoader
from tasklist.state.errors import TaskNotFoundError
from tasklist.state.workspace import Workspace
from tasklist.utils.logger import ActivityLogger


def test_mutations_are_logged(workspace: Workspace) -> None:
    task = workspace.add("Write | report", 3)
    workspace.edit(task.id, priority=9)
    workspace.mark(task.id, True)
    workspace.mark(task.id, True)
    workspace.delete(task.id)
    workspace.undo_delete()

    events = workspace.logger.read_events()

    assert [e["event"] for e in events] == ["add", "edit", "complete", "delete", "restore"]
    assert events[0]["description"] == "Write   report"
    assert events[1]["warnings"]
    assert all("timestamp" in e for e in events)
    assert workspace.logger.read_events(limit=2)[-1]["event"] == "restore"


def test_failed_mutation_logs_nothing(workspace: Workspace) -> None:
    with pytest.raises(TaskNotFoundError):
        workspace.delete(1)
    assert workspace.logger.read_events() == []
    assert workspace.dirty is False


def test_save_load_and_report(workspace: Workspace, tmp_path: Path) -> None:
    workspace.add("one", 2)
    workspace.add("two", 5)
    workspace.mark(2, True)
    assert workspace.dirty is True

    assert workspace.save() == 2
    assert workspace.dirty is False
    assert workspace.write_report() == 2

    fresh = Workspace(tasks_file=workspace.tasks_file)
    report = fresh.load()
    assert report.loaded == 2
    assert list(fresh.store.list_all()) == list(workspace.store.list_all())
    assert (tmp_path / "output.txt").read_text(encoding="utf-8").startswith("[ ] 1 - one (P:2)")

    events = [e["event"] for e in workspace.logger.read_events()]
    assert events[-2:] == ["save", "report"]


def test_autosave_writes_after_each_change(tmp_path: Path) -> None:
    ws = Workspace(tasks_file=tmp_path / "auto.txt", autosave=True)
    ws.add("persisted")
    assert (tmp_path / "auto.txt").read_text(encoding="utf-8") == "1|persisted|1|0\n"
    assert ws.dirty is False


def test_from_config(config: ConfigLoader, tmp_path: Path) -> None:
    ws = Workspace.from_config(config)

    assert ws.tasks_file == Path("tasks.txt")
    assert ws.report_file == Path("output.txt")
    assert ws.autosave is True
    assert ws.logger.log_dir == config.global_dir / "logs"

    override = Workspace.from_config(config, tmp_path / "other.txt")
    assert override.tasks_file == tmp_path / "other.txt"


def test_disabled_logger_writes_nothing(tmp_path: Path) -> None:
    logger = ActivityLogger(tmp_path / "logs", enabled=False)
    ws = Workspace(tasks_file=tmp_path / "tasks.txt", logger=logger)
    ws.add("quiet")
    assert not (tmp_path / "logs").exists()
    assert logger.read_events() == []


def test_read_events_skips_corrupt_lines(tmp_path: Path) -> None:
    logger = ActivityLogger(tmp_path / "logs")
    logger.path.write_text('{"event": "add"}\nnot json\n[1, 2]\n', encoding="utf-8")
    assert logger.read_events() == [{"event": "add"}]
