"""Tasklist CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config
from .state.errors import TaskStoreError
from .state.tasks import DEFAULT_PRIORITY, KEEP_PRIORITY, TaskSnapshot
from .state.workspace import Workspace


def _task_line(task: TaskSnapshot) -> str:
    symbol = "✓" if task.completed else "○"
    return f"{symbol} [ID:{task.id:>3}] {task.description} (P:{task.priority})"


def _open_workspace(ctx: click.Context) -> Workspace:
    """Build and load the workspace stored on the context."""
    obj = ctx.find_object(dict)
    workspace = Workspace.from_config(obj["config"], obj.get("tasks_file"))
    # One-shot commands write explicitly after a successful change
    workspace.autosave = False
    try:
        report = workspace.load()
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Unable to read {workspace.tasks_file}: {exc}") from exc
    if report.skipped:
        click.echo(f"Skipped {report.skipped} malformed line(s) in {workspace.tasks_file}.", err=True)
    return workspace


def _save(workspace: Workspace) -> None:
    try:
        workspace.save()
    except OSError as exc:
        raise click.ClickException(f"Unable to write {workspace.tasks_file}: {exc}") from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--file",
    "tasks_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tasks file to use (default: storage.tasks_file from config).",
)
@click.pass_context
def main(ctx: click.Context, tasks_file: Optional[Path]) -> None:
    """Tasklist - in-memory task list manager."""
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = Config()
    ctx.obj["tasks_file"] = tasks_file
    if ctx.invoked_subcommand is None:
        from .console import run_console

        config = ctx.obj["config"]
        run_console(Workspace.from_config(config, tasks_file), config)


@main.command()
@click.pass_context
def tui(ctx: click.Context) -> None:
    """Start Textual TUI."""
    try:
        from .interactive import run_tui
    except Exception as exc:  # pragma: no cover - defensive fallback
        click.echo(f"Unable to start interactive mode: {exc}")
        return

    obj = ctx.find_object(dict)
    run_tui(Workspace.from_config(obj["config"], obj.get("tasks_file")))


@main.command()
@click.argument("description")
@click.option("-p", "--priority", type=int, default=DEFAULT_PRIORITY, show_default=True, help="Priority 1-5.")
@click.pass_context
def add(ctx: click.Context, description: str, priority: int) -> None:
    """Add a task."""
    workspace = _open_workspace(ctx)
    try:
        task = workspace.add(description, priority)
    except TaskStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(workspace)
    if task.priority != priority:
        click.echo("Priority must be between 1 and 5. Set to 1.", err=True)
    click.echo(f"Task added with ID: {task.id}")


@main.command()
@click.argument("task_id", type=int)
@click.option("-d", "--description", default=None, help="New description.")
@click.option("-p", "--priority", type=int, default=KEEP_PRIORITY, help="New priority 1-5 (0 keeps).")
@click.pass_context
def edit(ctx: click.Context, task_id: int, description: Optional[str], priority: int) -> None:
    """Edit a task's description and/or priority."""
    workspace = _open_workspace(ctx)
    try:
        result = workspace.edit(task_id, description, priority)
    except TaskStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(workspace)
    for warning in result.warnings:
        click.echo(warning, err=True)
    click.echo(_task_line(result.task))


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task."""
    workspace = _open_workspace(ctx)
    try:
        task = workspace.delete(task_id)
    except TaskStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(workspace)
    click.echo(f"Task {task.id} deleted.")


def _mark(ctx: click.Context, task_id: int, done: bool) -> None:
    label = "complete" if done else "incomplete"
    workspace = _open_workspace(ctx)
    try:
        changed = workspace.mark(task_id, done)
    except TaskStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    if changed:
        _save(workspace)
        click.echo(f"Task {task_id} marked {label}.")
    else:
        click.echo(f"Task {task_id} is already marked {label}.")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def done(ctx: click.Context, task_id: int) -> None:
    """Mark a task complete."""
    _mark(ctx, task_id, True)


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def undone(ctx: click.Context, task_id: int) -> None:
    """Mark a task incomplete."""
    _mark(ctx, task_id, False)


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def show(ctx: click.Context, task_id: int) -> None:
    """Show one task by id."""
    workspace = _open_workspace(ctx)
    try:
        task = workspace.store.search(task_id)
    except TaskStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"ID: {task.id}")
    click.echo(f"Description: {task.description}")
    click.echo(f"Priority: {task.priority}")
    click.echo(f"Status: {'Completed' if task.completed else 'Pending'}")


@main.command(name="list")
@click.option("--pending", "view", flag_value="pending", help="Only pending tasks.")
@click.option("--completed", "view", flag_value="completed", help="Only completed tasks.")
@click.pass_context
def list_tasks(ctx: click.Context, view: Optional[str]) -> None:
    """List tasks in display order."""
    store = _open_workspace(ctx).store
    if view == "pending":
        tasks = list(store.list_pending())
    elif view == "completed":
        tasks = list(store.list_completed())
    else:
        tasks = list(store.list_all())
    if not tasks:
        click.echo("No tasks found.")
        return
    for task in tasks:
        click.echo(_task_line(task))


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show task statistics."""
    result = _open_workspace(ctx).store.statistics()
    click.echo(f"Total Tasks:       {result.total}")
    click.echo(f"Completed Tasks:   {result.completed}")
    click.echo(f"Pending Tasks:     {result.pending}")
    click.echo(f"Completion Rate:   {result.completion_rate:.1f}%")


@main.command()
@click.argument("path", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def report(ctx: click.Context, path: Optional[Path]) -> None:
    """Write the plain-text report (default: storage.report_file)."""
    workspace = _open_workspace(ctx)
    try:
        count = workspace.write_report(path)
    except OSError as exc:
        raise click.ClickException(f"Unable to write report: {exc}") from exc
    click.echo(f"Output written to '{path or workspace.report_file}' ({count} line(s)).")


if __name__ == "__main__":
    main()
