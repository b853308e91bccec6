"""Scrollback pane for command results."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import RichLog


class OutputPanel(Widget):
    """
    Scrollback of everything the command handler reports.

    ``write_line`` and ``write_section`` take Rich markup. The status writers
    (success, warning, error) take plain text, so task descriptions and file
    paths are shown literally.
    """

    DEFAULT_CSS = """
    OutputPanel RichLog {
        background: $surface;
        scrollbar-size-vertical: 1;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Output"

    def compose(self) -> ComposeResult:
        yield RichLog(id="output-log", markup=True, wrap=True, auto_scroll=True)

    @property
    def log_view(self) -> RichLog:
        return self.query_one("#output-log", RichLog)

    def write_line(self, text: str, style: str | None = None) -> None:
        self.log_view.write(f"[{style}]{text}[/]" if style else text)

    def write_table(self, table: Table) -> None:
        self.log_view.write(table)

    def write_section(self, title: str, content: str) -> None:
        self.log_view.write(Panel(content, title=title, border_style="blue"))

    def write_error(self, error: str) -> None:
        self.write_line(escape(f"✗ {error}"), style="bold red")

    def write_success(self, message: str) -> None:
        self.write_line(escape(f"✓ {message}"), style="bold green")

    def write_warning(self, message: str) -> None:
        self.write_line(escape(f"⚠ {message}"), style="bold yellow")
