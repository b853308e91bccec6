"""Modal for creating a new task."""

from __future__ import annotations

from typing import Optional, Tuple

from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class NewTaskModal(ModalScreen[Optional[Tuple[str, int]]]):
    """Modal dialog returning (description, priority) or None."""

    DEFAULT_CSS = """
    NewTaskModal {
        align: center middle;
    }

    NewTaskModal > Vertical {
        width: 70;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    NewTaskModal Label {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    NewTaskModal Input {
        width: 100%;
        margin-bottom: 1;
    }

    NewTaskModal Grid {
        width: 100%;
        height: auto;
        grid-size: 2;
        grid-gutter: 1;
    }

    NewTaskModal Button {
        width: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        with Vertical():
            yield Label("Create New Task")
            yield Input(placeholder="Description", id="task-description-input")
            yield Input(placeholder="Priority 1-5 (default 1)", id="task-priority-input")
            with Grid():
                yield Button("Cancel", variant="default", id="cancel-button")
                yield Button("Create", variant="primary", id="create-button")

    def on_mount(self) -> None:
        """Focus the description when mounted."""
        self.query_one("#task-description-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "create-button":
            self._submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def _submit(self) -> None:
        description_input = self.query_one("#task-description-input", Input)
        description = description_input.value.strip()
        if not description:
            # Don't dismiss if empty
            description_input.focus()
            return
        raw_priority = self.query_one("#task-priority-input", Input).value.strip()
        try:
            priority = int(raw_priority) if raw_priority else 1
        except ValueError:
            priority = 1
        self.dismiss((description, priority))
