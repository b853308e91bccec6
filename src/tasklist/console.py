"""Plain console menu mode for Tasklist."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Tuple

import click

from .config import Config
from .state.errors import TaskStoreError
from .state.tasks import DEFAULT_PRIORITY, KEEP_PRIORITY, TaskSnapshot, TaskStatistics
from .state.workspace import Workspace

STATUS_SYMBOLS = {True: "✓", False: "○"}

SAMPLE_TASKS = (
    ("Complete data structures assignment", 5),
    ("Study for midterm exam", 4),
    ("Buy groceries", 2),
)


class ConsoleSession:
    """Sequential numbered-menu experience over one workspace."""

    def __init__(self, workspace: Workspace, config: Optional[Config] = None) -> None:
        self.workspace = workspace
        self.store = workspace.store
        self.use_color = config.get_bool("console.color", True) if config else True
        self.seed_examples = config.get_bool("console.seed_examples", False) if config else False

        self.menu: Tuple[Tuple[str, Callable[[], bool]], ...] = (
            ("Add task", self._add_flow),
            ("Edit task", self._edit_flow),
            ("Delete task", self._delete_flow),
            ("Undo delete (restore last deleted)", self._undo_flow),
            ("Mark task complete", lambda: self._mark_flow(True)),
            ("Mark task incomplete", lambda: self._mark_flow(False)),
            ("Search task by ID", self._search_flow),
            ("Show all tasks", lambda: self._show(self.store.list_all(), "TO-DO LIST")),
            ("Show pending tasks", lambda: self._show(self.store.list_pending(), "PENDING TASKS")),
            ("Show completed tasks", lambda: self._show(self.store.list_completed(), "COMPLETED TASKS")),
            ("Show statistics", self._stats_flow),
            ("Save", self._save_flow),
            ("Save & exit (also writes report)", self._exit_flow),
        )

    def run(self) -> None:
        """Start the console session."""
        self._print_header()
        try:
            report = self.workspace.load()
        except (OSError, UnicodeDecodeError) as exc:
            raise click.ClickException(f"Unable to read {self.workspace.tasks_file}: {exc}") from exc
        if report.loaded or report.skipped:
            click.echo(self._muted(f"Loaded {report.loaded} task(s) from {self.workspace.tasks_file}."))
        if report.skipped:
            click.echo(self._color(f"Skipped {report.skipped} malformed line(s).", "warning"))
        if self.seed_examples and not len(self.store):
            for description, priority in SAMPLE_TASKS:
                self.workspace.add(description, priority)
            click.echo(self._muted("Sample tasks have been added for demonstration."))

        try:
            self._menu_loop()
        except (KeyboardInterrupt, EOFError, click.Abort):
            click.echo("\nExiting Tasklist.")
            if self.workspace.dirty:
                self._save_flow()

    def _menu_loop(self) -> None:
        while True:
            self._print_menu()
            raw = click.prompt(self._color(f"Choose (1-{len(self.menu)})", "accent"), default="", show_default=False)
            raw = raw.strip()
            if not raw.isdecimal() or not 1 <= int(raw) <= len(self.menu):
                click.echo(self._color(f"Invalid choice. Enter 1..{len(self.menu)}.", "warning"))
                continue
            _, action = self.menu[int(raw) - 1]
            try:
                keep_running = action()
            except TaskStoreError as exc:
                click.echo(self._color(f"✗ {exc}", "warning"))
                continue
            if not keep_running:
                return

    # ------------------------------------------------------------------ #
    # Menu actions. Each returns False to leave the loop.
    # ------------------------------------------------------------------ #
    def _add_flow(self) -> bool:
        description = click.prompt("Enter description", default="", show_default=False).strip()
        priority = self._prompt_int("Enter priority (1-5, default 1)", DEFAULT_PRIORITY)
        task = self.workspace.add(description, priority)
        if task.priority != priority:
            click.echo(self._color("Priority must be between 1 and 5. Set to 1.", "warning"))
        click.echo(self._color(f"✓ Task added with ID: {task.id}", "primary"))
        return True

    def _edit_flow(self) -> bool:
        task_id = self._prompt_id("Enter task ID to edit")
        if task_id is None:
            return True
        task = self.store.search(task_id)
        click.echo(f"Current description: {task.description}")
        description = click.prompt(
            "Enter new description (leave empty to keep)", default="", show_default=False
        ).strip()
        click.echo(f"Current priority: {task.priority}")
        raw = click.prompt("Enter new priority (1-5, 0 to keep)", default="0", show_default=False).strip()
        priority: Optional[int] = KEEP_PRIORITY
        try:
            priority = int(raw)
        except ValueError:
            click.echo(self._color("Invalid input. Priority unchanged.", "warning"))
        result = self.workspace.edit(task_id, description or None, priority)
        for warning in result.warnings:
            click.echo(self._color(warning, "warning"))
        click.echo(self._color(f"✓ Task {task_id} updated.", "primary"))
        return True

    def _delete_flow(self) -> bool:
        task_id = self._prompt_id("Enter task ID to delete")
        if task_id is None:
            return True
        self.workspace.delete(task_id)
        click.echo(self._color("✓ Task deleted (you can undo it).", "primary"))
        return True

    def _undo_flow(self) -> bool:
        task = self.workspace.undo_delete()
        click.echo(self._color(f"↩ Task {task.id} restored.", "primary"))
        return True

    def _mark_flow(self, done: bool) -> bool:
        label = "complete" if done else "incomplete"
        task_id = self._prompt_id(f"Enter task ID to mark {label}")
        if task_id is None:
            return True
        if self.workspace.mark(task_id, done):
            click.echo(self._color(f"✓ Task {task_id} marked {label}.", "primary"))
        else:
            click.echo(self._color(f"⚠ Task {task_id} is already marked {label}.", "warning"))
        return True

    def _search_flow(self) -> bool:
        task_id = self._prompt_id("Enter task ID to search")
        if task_id is None:
            return True
        task = self.store.search(task_id)
        click.echo(self._format_details(task))
        return True

    def _stats_flow(self) -> bool:
        stats = self.store.statistics()
        if not stats.total:
            click.echo("No tasks to show statistics for.")
            return True
        click.echo(self._format_stats(stats))
        return True

    def _save_flow(self) -> bool:
        count = self.workspace.save()
        click.echo(self._color(f"✓ {count} task(s) saved to '{self.workspace.tasks_file}'.", "primary"))
        return True

    def _exit_flow(self) -> bool:
        self._save_flow()
        count = self.workspace.write_report()
        click.echo(self._color(f"✓ Output written to '{self.workspace.report_file}' ({count} line(s)).", "primary"))
        click.echo("Goodbye!")
        return False

    # ------------------------------------------------------------------ #
    # Prompt helpers
    # ------------------------------------------------------------------ #
    def _prompt_id(self, label: str) -> Optional[int]:
        raw = click.prompt(label, default="", show_default=False).strip()
        if not raw.isdecimal():
            click.echo(self._color("Invalid id.", "warning"))
            return None
        return int(raw)

    @staticmethod
    def _prompt_int(label: str, default: int) -> int:
        raw = click.prompt(label, default="", show_default=False).strip()
        try:
            return int(raw) if raw else default
        except ValueError:
            return default

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def _show(self, tasks: Iterable[TaskSnapshot], title: str) -> bool:
        rows = list(tasks)
        border = self._muted("=" * 70)
        click.echo(f"\n{border}\n{self._bold(self._color(title.center(70), 'primary'))}\n{border}")
        if not rows:
            click.echo("No tasks found.")
        for task in rows:
            click.echo(self._task_line(task))
        click.echo(f"{border}\n{self._muted(f'{len(rows)} task(s)')}")
        return True

    def _task_line(self, task: TaskSnapshot) -> str:
        symbol = STATUS_SYMBOLS[task.completed]
        style = "primary" if task.completed else "output"
        return f"{self._color(symbol, style)} [ID:{task.id:>3}] {task.description:<40} (P:{task.priority})"

    @staticmethod
    def _format_details(task: TaskSnapshot) -> str:
        status = "✓ Completed" if task.completed else "○ Pending"
        return "\n".join(
            [
                "--- Task Found ---",
                f"ID: {task.id}",
                f"Description: {task.description}",
                f"Priority: {task.priority}",
                f"Status: {status}",
                "------------------",
            ]
        )

    @staticmethod
    def _format_stats(stats: TaskStatistics) -> str:
        return "\n".join(
            [
                f"Total Tasks:       {stats.total}",
                f"Completed Tasks:   {stats.completed}",
                f"Pending Tasks:     {stats.pending}",
                f"Completion Rate:   {stats.completion_rate:.1f}%",
            ]
        )

    def _print_menu(self) -> None:
        lines = [self._bold(self._color("\n========== TO-DO LIST MENU ==========", "primary"))]
        for number, (label, _) in enumerate(self.menu, start=1):
            lines.append(f"{self._color(f'{number:>2}.', 'accent')} {label}")
        click.echo("\n".join(lines))

    def _print_header(self) -> None:
        border = self._muted("=" * 60)
        title = self._bold(self._color("Tasklist console mode", "primary"))
        source = self._color(f"file: {self.workspace.tasks_file}", "accent")
        click.echo(f"{border}\n{title}  [{source}]\n{border}")

    # Styling helpers
    def _color(self, text: str, style: str) -> str:
        if not self.use_color:
            return text
        palette: Dict[str, str] = {
            "primary": "bright_green",
            "accent": "bright_cyan",
            "output": "bright_white",
            "muted": "bright_black",
            "warning": "bright_yellow",
        }
        return click.style(text, fg=palette.get(style, "white"))

    def _muted(self, text: str) -> str:
        return self._color(text, "muted")

    def _bold(self, text: str) -> str:
        if not self.use_color:
            return text
        return click.style(text, bold=True)


def run_console(workspace: Workspace, config: Optional[Config] = None) -> None:
    """Helper to run the console session."""
    ConsoleSession(workspace, config).run()
