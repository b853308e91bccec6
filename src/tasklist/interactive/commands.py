"""Command handlers for interactive mode."""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, Iterable, Optional

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..state.errors import TaskStoreError
from ..state.tasks import DEFAULT_PRIORITY, KEEP_PRIORITY, TaskSnapshot
from ..state.workspace import Workspace


class CommandHandler:
    """Handles interactive mode commands."""

    def __init__(self, workspace: Workspace, app) -> None:
        self.workspace = workspace
        self.store = workspace.store
        self.app = app

        self.commands: Dict[str, Callable[[str], Awaitable[None]]] = {
            "/help": self.cmd_help,
            "/add": self.cmd_add,
            "/edit": self.cmd_edit,
            "/delete": self.cmd_delete,
            "/undo": self.cmd_undo,
            "/done": self.cmd_done,
            "/redo": self.cmd_redo,
            "/search": self.cmd_search,
            "/tasks": self.cmd_tasks,
            "/pending": self.cmd_pending,
            "/completed": self.cmd_completed,
            "/stats": self.cmd_stats,
            "/save": self.cmd_save,
            "/report": self.cmd_report,
            "/log": self.cmd_log,
            "/exit": self.cmd_exit,
        }

    async def handle(self, command: str) -> None:
        if not command.startswith("/"):
            # Free-form input is a quick add with default priority
            await self.cmd_add(command)
            return

        parts = command.split(maxsplit=1)
        cmd = parts[0]
        args = parts[1] if len(parts) > 1 else ""

        handler = self.commands.get(cmd)
        if handler is None:
            self.app.output_panel.write_error(f"Unknown command: {cmd}")
            self.app.output_panel.write_line("Type /help for available commands")
            return
        try:
            await handler(args)
        except TaskStoreError as exc:
            self.app.output_panel.write_error(str(exc))

    async def cmd_help(self, args: str) -> None:
        help_text = """
[bold]Tasklist Interactive Commands[/bold]

Tasks:
  /add \\[priority] <text>        Add a task (plain text also adds)
  /edit <id> \\[priority] \\[text] Edit a task (0 keeps the priority)
  /delete <id>                  Delete a task
  /undo                         Restore the last deleted task
  /done <id>                    Mark task as completed
  /redo <id>                    Mark task as incomplete
  /search <id>                  Show task details

Views:
  /tasks                        List all tasks
  /pending                      List pending tasks
  /completed                    List completed tasks
  /stats                        Show statistics
  /log \\[n]                     Show recent activity

Files:
  /save                         Save to the tasks file
  /report                       Write the plain-text report

Other:
  /help                         Show this help
  /exit                         Save and exit
"""
        self.app.output_panel.write_section("Help", help_text)

    async def cmd_add(self, args: str) -> None:
        priority = DEFAULT_PRIORITY
        description = args.strip()
        head, _, rest = description.partition(" ")
        number = _to_int(head)
        if number is not None and rest.strip():
            priority, description = number, rest.strip()
        task = self.workspace.add(description, priority)
        if task.priority != priority:
            self.app.output_panel.write_warning("Priority must be between 1 and 5. Set to 1.")
        self.app.output_panel.write_success(f"Task added: [{task.id}] {task.description}")
        self.app.refresh_tasks(current_id=task.id)

    async def cmd_edit(self, args: str) -> None:
        """/edit <id> [priority] [text]; a non-numeric second word starts the text."""
        parts = args.split(maxsplit=1)
        task_id = self._parse_id(parts[0] if parts else "", "/edit <id> [priority|0] [text]")
        if task_id is None:
            return
        rest = parts[1].strip() if len(parts) > 1 else ""
        head, _, tail = rest.partition(" ")
        priority: Optional[int] = _to_int(head)
        if priority is None:
            priority, description = KEEP_PRIORITY, rest or None
        else:
            description = tail.strip() or None
        result = self.workspace.edit(task_id, description, priority)
        for warning in result.warnings:
            self.app.output_panel.write_warning(warning)
        self.app.output_panel.write_success(f"Task {task_id} updated.")
        self.app.refresh_tasks(current_id=task_id)

    async def cmd_delete(self, args: str) -> None:
        task_id = self._parse_id(args, "/delete <id>")
        if task_id is None:
            return
        task = self.workspace.delete(task_id)
        self.app.output_panel.write_success(f"Task {task.id} deleted (/undo to restore).")
        self.app.refresh_tasks()

    async def cmd_undo(self, args: str) -> None:
        task = self.workspace.undo_delete()
        self.app.output_panel.write_success(f"Task {task.id} restored.")
        self.app.refresh_tasks(current_id=task.id)

    async def cmd_done(self, args: str) -> None:
        await self._mark(args, True)

    async def cmd_redo(self, args: str) -> None:
        await self._mark(args, False)

    async def _mark(self, args: str, done: bool) -> None:
        label = "complete" if done else "incomplete"
        task_id = self._parse_id(args, "/done <id>" if done else "/redo <id>")
        if task_id is None:
            return
        if self.workspace.mark(task_id, done):
            self.app.output_panel.write_success(f"Task {task_id} marked {label}.")
        else:
            self.app.output_panel.write_warning(f"Task {task_id} is already marked {label}.")
        self.app.refresh_tasks(current_id=task_id)

    async def cmd_search(self, args: str) -> None:
        task_id = self._parse_id(args, "/search <id>")
        if task_id is None:
            return
        self.show_details(self.store.search(task_id))

    async def cmd_tasks(self, args: str) -> None:
        self._write_tasks("All tasks", self.store.list_all())

    async def cmd_pending(self, args: str) -> None:
        self._write_tasks("Pending tasks", self.store.list_pending())

    async def cmd_completed(self, args: str) -> None:
        self._write_tasks("Completed tasks", self.store.list_completed())

    async def cmd_stats(self, args: str) -> None:
        stats = self.store.statistics()
        self.app.output_panel.write_section(
            "Statistics",
            "\n".join(
                [
                    f"Total:           {stats.total}",
                    f"Completed:       {stats.completed}",
                    f"Pending:         {stats.pending}",
                    f"Completion rate: {stats.completion_rate:.1f}%",
                ]
            ),
        )

    async def cmd_save(self, args: str) -> None:
        count = self.workspace.save()
        self.app.output_panel.write_success(f"{count} task(s) saved to {self.workspace.tasks_file}")

    async def cmd_report(self, args: str) -> None:
        count = self.workspace.write_report()
        self.app.output_panel.write_success(f"Report with {count} line(s) written to {self.workspace.report_file}")

    async def cmd_log(self, args: str) -> None:
        limit = int(args) if args.strip().isdecimal() else 10
        events = self.workspace.logger.read_events(limit)
        if not events:
            self.app.output_panel.write_line("[dim]No activity recorded.[/dim]")
            return
        for entry in events:
            ts = escape(str(entry.get("timestamp", "")))
            event = escape(str(entry.get("event", "")))
            task_id = entry.get("task_id")
            suffix = f" #{task_id}" if task_id is not None else ""
            self.app.output_panel.write_line(f"[dim]{ts}[/dim] {event}{escape(suffix)}")

    async def cmd_exit(self, args: str) -> None:
        self.workspace.save()
        self.app.exit()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def show_details(self, task: TaskSnapshot) -> None:
        status = "completed" if task.completed else "pending"
        self.app.output_panel.write_line(f"[bold cyan]Task: {escape(task.description)}[/bold cyan]")
        self.app.output_panel.write_line(f"[dim]ID: {task.id} | Priority: {task.priority} | Status: {status}[/dim]")

    def _write_tasks(self, title: str, tasks: Iterable[TaskSnapshot]) -> None:
        table = Table(title=title, expand=True)
        table.add_column("", width=1)
        table.add_column("ID", justify="right")
        table.add_column("Description", ratio=1)
        table.add_column("P", justify="center")
        count = 0
        for task in tasks:
            table.add_row("●" if task.completed else "○", str(task.id), Text(task.description), str(task.priority))
            count += 1
        if not count:
            self.app.output_panel.write_line(f"[dim]{title}: none.[/dim]")
            return
        self.app.output_panel.write_table(table)

    def _parse_id(self, raw: str, usage: str) -> Optional[int]:
        raw = raw.strip()
        if not raw.isdecimal():
            self.app.output_panel.write_line(f"Usage: {escape(usage)}")
            return None
        return int(raw)


def _to_int(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None
