"""Status line and command prompt shown above the task panes."""

from __future__ import annotations

from typing import List

from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static


class TopBar(Widget):
    """Store summary on top, slash-command prompt below it (up/down recall)."""

    DEFAULT_CSS = """
    TopBar {
        height: auto;
        dock: top;
    }

    TopBar #title-status {
        height: 1;
        padding: 0 1;
        background: $primary;
        color: $text;
        text-style: bold;
    }

    TopBar #command-input {
        height: 1;
        border: none;
        padding: 0 1;
    }
    """

    def __init__(self, title: str = "Tasklist", *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.title_text = title
        self.command_history: List[str] = []
        self.history_index = 0

    def compose(self) -> ComposeResult:
        yield Static(self.title_text, id="title-status", markup=False)
        yield Input(placeholder="Add a task or type /help", id="command-input")

    def on_mount(self) -> None:
        self.query_one("#command-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "command-input":
            return
        command = event.value.strip()
        event.input.value = ""
        if not command:
            return
        self.command_history.append(command)
        self.history_index = len(self.command_history)
        self.post_message(self.CommandSubmitted(command))

    async def on_key(self, event) -> None:
        if event.key in ("up", "down"):
            self._recall(-1 if event.key == "up" else 1)
            event.prevent_default()

    def _recall(self, step: int) -> None:
        """Move through submitted commands; one past the newest is an empty prompt."""
        if not self.command_history:
            return
        newest = len(self.command_history)
        self.history_index = max(0, min(newest, self.history_index + step))
        prompt = self.query_one("#command-input", Input)
        prompt.value = self.command_history[self.history_index] if self.history_index < newest else ""
        prompt.cursor_position = len(prompt.value)

    def update_title(self, title: str) -> None:
        self.title_text = title
        self.query_one("#title-status", Static).update(title)

    class CommandSubmitted(Message):
        """A non-empty line entered at the prompt."""

        def __init__(self, command: str) -> None:
            super().__init__()
            self.command = command
