import asyncio
from typing import List

from textual.widgets import Input, RichLog

from tasklist.interactive import TasklistApp
from tasklist.interactive.widgets import TaskListWidget, TopBar
from tasklist.state.workspace import Workspace


def _log_text(app: TasklistApp) -> str:
    log = app.query_one("#output-log", RichLog)
    return "\n".join(line.text for line in log.lines)


def _rows(app: TasklistApp) -> List[str]:
    return [TaskListWidget.render_row(task).plain for task in app.task_list.tasks]


def test_add_delete_undo_updates_panes(workspace: Workspace) -> None:
    app = TasklistApp(workspace)

    async def go() -> None:
        async with app.run_test() as pilot:
            await app.command_handler.handle("/add 2 fix [/x] bracket")
            await app.command_handler.handle("[red]not a style[/red]")
            await pilot.pause()
            assert _rows(app) == ["○ [1] fix [/x] bracket P2", "○ [2] [red]not a style[/red] P1"]

            await app.command_handler.handle("/delete 1")
            await pilot.pause()
            assert _rows(app) == ["○ [2] [red]not a style[/red] P1"]
            assert app.query_one(TopBar).title_text == "Tasklist - 0/1 done (0%) | undo: 1"

            await app.command_handler.handle("/undo")
            await app.command_handler.handle("/done 1")
            await app.command_handler.handle("/search 1")
            await pilot.pause()
            assert [task.id for task in app.task_list.tasks] == [1, 2]
            assert app.query_one(TopBar).title_text == "Tasklist - 1/2 done (50%)"

            text = _log_text(app)
            assert "fix [/x] bracket" in text
            assert "[red]not a style[/red]" in text

    asyncio.run(go())


def test_new_task_modal_adds_task(workspace: Workspace) -> None:
    app = TasklistApp(workspace)

    async def go() -> None:
        async with app.run_test() as pilot:
            app.action_new_task()
            await pilot.pause()
            app.screen.query_one("#task-description-input", Input).value = "From modal"
            app.screen.query_one("#task-priority-input", Input).value = "3"
            await pilot.click("#create-button")
            await pilot.pause()

    asyncio.run(go())

    task = workspace.store.search(1)
    assert (task.description, task.priority) == ("From modal", 3)


def test_unreadable_file_keeps_app_running(workspace: Workspace) -> None:
    workspace.tasks_file.write_bytes(b"1|caf\xe9|1|0\n")
    workspace.autosave = True
    app = TasklistApp(workspace)

    async def go() -> None:
        async with app.run_test() as pilot:
            await app.command_handler.handle("/add still usable")
            await pilot.pause()
            assert "Unable to read" in _log_text(app)

    asyncio.run(go())

    assert workspace.autosave is False
    assert len(workspace.store) == 1
    assert workspace.tasks_file.read_bytes() == b"1|caf\xe9|1|0\n"
