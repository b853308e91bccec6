"""Textual application for interactive mode."""

from __future__ import annotations

from typing import Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from .commands import CommandHandler
from .widgets import NewTaskModal, OutputPanel, TaskListWidget, TopBar
from ..state.errors import TaskStoreError
from ..state.workspace import Workspace


class TasklistApp(App):
    """Tasklist interactive mode TUI."""

    CSS = """
    Screen {
        layout: grid;
        grid-size: 2 2;
        grid-rows: 1fr auto;
        grid-columns: 2fr 3fr;
        overflow: hidden;
    }

    #task-list-widget {
        border: tall $primary;
        padding: 0;
        overflow-y: auto;
    }

    #output-panel {
        border: tall $primary;
        padding: 0;
        overflow-y: auto;
    }

    Footer {
        column-span: 2;
        background: $primary;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_task", "New Task"),
        Binding("ctrl+z", "undo_delete", "Undo Delete"),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+c", "quit_and_save", "Quit"),
    ]

    def __init__(self, workspace: Workspace, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.workspace = workspace
        self.command_handler = CommandHandler(workspace, self)

    def compose(self) -> ComposeResult:
        yield TopBar(title=f"Tasklist - {self.workspace.tasks_file}", id="top-bar")

        self.task_list = TaskListWidget(id="task-list-widget")
        self.output_panel = OutputPanel(id="output-panel")

        yield self.task_list
        yield self.output_panel
        yield Footer()

    def on_mount(self) -> None:
        self.output_panel.write_line(f"Tasklist Interactive Mode - {escape(str(self.workspace.tasks_file))}")
        try:
            report = self.workspace.load()
        except (OSError, UnicodeDecodeError) as exc:
            # Keep the unreadable file intact unless the user saves explicitly
            self.workspace.autosave = False
            self.output_panel.write_error(f"Unable to read {self.workspace.tasks_file}: {exc}")
            self.output_panel.write_warning("Autosave is off; /save or /exit will overwrite the file.")
        else:
            if report.skipped:
                self.output_panel.write_warning(f"Skipped {report.skipped} malformed line(s).")
        self.refresh_tasks()
        self.output_panel.write_line("Type /help for commands")

    def refresh_tasks(self, current_id: Optional[int] = None) -> None:
        """Redraw the task list and status line from the store."""
        store = self.workspace.store
        self.task_list.update_tasks(list(store.list_all()), current_id=current_id)
        stats = store.statistics()
        undo = f" | undo: {store.undo_depth}" if store.undo_depth else ""
        self.query_one(TopBar).update_title(
            f"Tasklist - {stats.completed}/{stats.total} done ({stats.completion_rate:.0f}%){undo}"
        )

    async def on_top_bar_command_submitted(self, event: TopBar.CommandSubmitted) -> None:
        """Handle command submission from TopBar."""
        await self.command_handler.handle(event.command)

    def on_task_list_widget_new_task_requested(self, event: TaskListWidget.NewTaskRequested) -> None:
        """Handle new task button press from TaskListWidget."""
        self.action_new_task()

    def on_task_list_widget_task_selected(self, event: TaskListWidget.TaskSelected) -> None:
        """Show details of the selected task."""
        self.command_handler.show_details(event.task)

    def action_new_task(self) -> None:
        """Show new task modal."""
        self.push_screen(NewTaskModal(), self._on_new_task)

    def _on_new_task(self, result) -> None:
        if not result:
            return
        description, priority = result
        try:
            task = self.workspace.add(description, priority)
        except TaskStoreError as exc:
            self.output_panel.write_error(str(exc))
            return
        self.output_panel.write_success(f"Task created: [{task.id}] {task.description}")
        self.refresh_tasks(current_id=task.id)

    async def action_undo_delete(self) -> None:
        await self.command_handler.handle("/undo")

    async def action_save(self) -> None:
        await self.command_handler.handle("/save")

    async def action_quit_and_save(self) -> None:
        await self.command_handler.handle("/exit")


def run_tui(workspace: Workspace) -> None:
    """Helper to launch the Textual TUI."""
    TasklistApp(workspace).run()
