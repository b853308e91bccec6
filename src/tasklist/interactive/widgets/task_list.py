"""Task list widget for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Button, Label, ListItem, ListView

from ...state.tasks import TaskSnapshot

PRIORITY_COLORS = {
    1: "#888888",
    2: "cyan",
    3: "yellow",
    4: "dark_orange",
    5: "red",
}


class TaskListWidget(Widget):
    """Widget displaying the task list in display order."""

    DEFAULT_CSS = """
    TaskListWidget Vertical {
        height: 100%;
    }

    TaskListWidget Button {
        width: 100%;
        margin: 0 0 1 0;
    }

    TaskListWidget ListView {
        height: 1fr;
    }
    """

    tasks: List[TaskSnapshot] = reactive([], layout=True)
    current_task_id: Optional[int] = reactive(None, layout=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Tasks"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Button("+ New Task", variant="success", id="new-task-button")
            yield ListView(id="task-list-view")

    def watch_tasks(self, tasks: List[TaskSnapshot]) -> None:
        list_view = self.query_one("#task-list-view", ListView)
        list_view.clear()

        for task in tasks:
            list_view.append(ListItem(Label(self.render_row(task, task.id == self.current_task_id))))

    @staticmethod
    def render_row(task: TaskSnapshot, current: bool = False) -> Text:
        text = Text()
        if task.completed:
            text.append("● ", style="green")
        else:
            text.append("○ ", style="#888888")
        text.append(f"[{task.id}] ", style="dim")
        text.append(task.description, style="strike dim" if task.completed else "")
        text.append(f" P{task.priority}", style=PRIORITY_COLORS.get(task.priority, "white"))
        if current:
            text.stylize("bold underline")
        return text

    def update_tasks(self, tasks: List[TaskSnapshot], current_id: Optional[int] = None) -> None:
        self.current_task_id = current_id
        self.tasks = tasks

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press for new task."""
        if event.button.id == "new-task-button":
            self.post_message(self.NewTaskRequested())
            event.stop()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle task selection from list."""
        if event.list_view.index is not None and event.list_view.index < len(self.tasks):
            selected_task = self.tasks[event.list_view.index]
            self.post_message(self.TaskSelected(selected_task))

    class NewTaskRequested(Message):
        """Message sent when new task button is pressed."""

    class TaskSelected(Message):
        """Message sent when a task is selected from the list."""

        def __init__(self, task: TaskSnapshot) -> None:
            super().__init__()
            self.task = task
