import asyncio
from typing import List, Optional, Tuple

from rich.table import Table

from tasklist.interactive.commands import CommandHandler
from tasklist.state.workspace import Workspace


class DummyOutputPanel:
    """Collects what the handler writes instead of rendering it."""

    def __init__(self) -> None:
        self.lines: List[Tuple[str, str]] = []
        self.tables: List[Table] = []

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        self.lines.append(("line", text))

    def write_table(self, table: Table) -> None:
        self.tables.append(table)

    def write_section(self, title: str, content: str) -> None:
        self.lines.append(("section", f"{title}\n{content}"))

    def write_error(self, error: str) -> None:
        self.lines.append(("error", error))

    def write_success(self, message: str) -> None:
        self.lines.append(("success", message))

    def write_warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def text(self, kind: Optional[str] = None) -> str:
        return "\n".join(text for k, text in self.lines if kind is None or k == kind)


class DummyApp:
    """Minimal app stand-in exposing what CommandHandler touches."""

    def __init__(self) -> None:
        self.output_panel = DummyOutputPanel()
        self.refreshed: List[Optional[int]] = []
        self.exited = False

    def refresh_tasks(self, current_id: Optional[int] = None) -> None:
        self.refreshed.append(current_id)

    def exit(self) -> None:
        self.exited = True


def _handler(workspace: Workspace) -> Tuple[CommandHandler, DummyApp]:
    app = DummyApp()
    return CommandHandler(workspace, app), app


def _run(handler: CommandHandler, *commands: str) -> None:
    async def go() -> None:
        for command in commands:
            await handler.handle(command)

    asyncio.run(go())


def test_add_variants(workspace: Workspace) -> None:
    handler, app = _handler(workspace)

    _run(handler, "/add 4 Write report", "/add Buy milk", "Call mom", "/add 9 Too high")

    tasks = list(workspace.store.list_all())
    assert [(t.description, t.priority) for t in tasks] == [
        ("Write report", 4),
        ("Buy milk", 1),
        ("Call mom", 1),
        ("Too high", 1),
    ]
    assert "Priority must be between 1 and 5" in app.output_panel.text("warning")
    assert app.refreshed == [1, 2, 3, 4]


def test_delete_and_undo(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/add first", "/add second", "/delete 1", "/undo", "/undo")

    assert [t.id for t in workspace.store.list_all()] == [1, 2]
    assert "Task 1 restored." in app.output_panel.text("success")
    assert "No deleted task to undo" in app.output_panel.text("error")


def test_edit_and_mark(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(
        handler,
        "/add 2 Draft",
        "/edit 1 0 Final text",
        "/edit 1 8",
        "/done 1",
        "/done 1",
        "/redo 1",
    )

    task = workspace.store.search(1)
    assert task.description == "Final text"
    assert task.priority == 2
    assert task.completed is False
    warnings = app.output_panel.text("warning")
    assert "Invalid priority 8" in warnings
    assert "already marked complete" in warnings


def test_edit_text_without_priority(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/add 3 Draft", "/edit 1 Buy milk", "/edit 1 4")

    task = workspace.store.search(1)
    assert task.description == "Buy milk"
    assert task.priority == 4
    assert app.output_panel.text("warning") == ""


def test_non_ascii_digits_are_rejected(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/add ² squared", "/delete ²", "/done ٣x", "/log ²")

    assert [t.description for t in workspace.store.list_all()] == ["² squared"]
    lines = app.output_panel.text("line")
    assert "Usage: /delete <id>" in lines
    assert "Usage: /done <id>" in lines
    assert app.output_panel.text("error") == ""


def test_usage_and_unknown_commands(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/delete", "/search abc", "/bogus", "/edit 5 3", "/add")

    lines = app.output_panel.text("line")
    assert "Usage: /delete <id>" in lines
    assert "Usage: /search <id>" in lines
    errors = app.output_panel.text("error")
    assert "Unknown command: /bogus" in errors
    assert "Task 5 not found" in errors
    assert "Description cannot be empty" in errors


def test_views_and_stats(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/add a", "/add b", "/done 2", "/tasks", "/pending", "/completed", "/stats", "/search 2")

    assert [t.title for t in app.output_panel.tables] == ["All tasks", "Pending tasks", "Completed tasks"]
    assert [t.row_count for t in app.output_panel.tables] == [2, 1, 1]
    text = app.output_panel.text()
    assert "Completion rate: 50.0%" in text
    assert "Status: completed" in text


def test_save_report_log_and_exit(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/add a", "/save", "/report", "/log 2", "/exit")

    assert workspace.tasks_file.read_text(encoding="utf-8") == "1|a|1|0\n"
    assert workspace.report_file.read_text(encoding="utf-8") == "[ ] 1 - a (P:1)\n"
    log_lines = [text for kind, text in app.output_panel.lines if kind == "line"]
    assert any(line.endswith("save") for line in log_lines)
    assert any(line.endswith("report") for line in log_lines)
    assert app.exited is True


def test_help_lists_commands(workspace: Workspace) -> None:
    handler, app = _handler(workspace)
    _run(handler, "/help")
    help_text = app.output_panel.text("section")
    for command in handler.commands:
        assert command in help_text
