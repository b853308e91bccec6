"""Workspace: a task store bound to its snapshot file, report file and activity log."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import Config
from ..utils.logger import ActivityLogger
from . import codec
from .codec import LoadReport
from .tasks import DEFAULT_PRIORITY, EditResult, TaskSnapshot, TaskStore


class Workspace:
    """
    Owns one TaskStore plus the files it is read from and written to.

    Mutations go through here so each one is recorded in the activity log;
    errors from the store propagate unchanged.
    """

    def __init__(
        self,
        tasks_file: Path,
        report_file: Optional[Path] = None,
        logger: Optional[ActivityLogger] = None,
        autosave: bool = False,
    ) -> None:
        self.tasks_file = tasks_file
        self.report_file = report_file or tasks_file.with_name("output.txt")
        self.logger = logger or ActivityLogger(None, enabled=False)
        self.autosave = autosave
        self.store = TaskStore()
        self.dirty = False

    @classmethod
    def from_config(cls, config: Config, tasks_file: Optional[Path] = None) -> "Workspace":
        """Build a workspace from configuration; ``tasks_file`` overrides the config."""
        log_dir = config.get_path("general.log_dir") or config.global_dir / "logs"
        logger = ActivityLogger(log_dir, enabled=config.get_bool("general.activity_log", True))
        return cls(
            tasks_file=tasks_file or config.get_path("storage.tasks_file", "tasks.txt"),
            report_file=config.get_path("storage.report_file", "output.txt"),
            logger=logger,
            autosave=config.get_bool("storage.autosave", True),
        )

    # ------------------------------------------------------------------ #
    # Files
    # ------------------------------------------------------------------ #
    def load(self) -> LoadReport:
        report = codec.load_store(self.store, self.tasks_file)
        self.logger.log_loaded(self.tasks_file, report.loaded, report.skipped)
        self.dirty = False
        return report

    def save(self) -> int:
        count = codec.save_store(self.store, self.tasks_file)
        self.logger.log_saved(self.tasks_file, count)
        self.dirty = False
        return count

    def write_report(self, path: Optional[Path] = None) -> int:
        target = path or self.report_file
        count = codec.write_report(self.store, target)
        self.logger.log_report(target, count)
        return count

    def _changed(self) -> None:
        self.dirty = True
        if self.autosave:
            self.save()

    # ------------------------------------------------------------------ #
    # Logged mutations
    # ------------------------------------------------------------------ #
    def add(self, description: str, priority: int = DEFAULT_PRIORITY) -> TaskSnapshot:
        task_id = self.store.add(codec.sanitize(description), priority)
        task = self.store.search(task_id)
        self.logger.log_added(task)
        self._changed()
        return task

    def edit(
        self,
        task_id: int,
        description: Optional[str] = None,
        priority: Optional[int] = None,
    ) -> EditResult:
        if description:
            description = codec.sanitize(description)
        result = self.store.edit(task_id, description, priority)
        self.logger.log_edited(result.task, result.warnings)
        self._changed()
        return result

    def delete(self, task_id: int) -> TaskSnapshot:
        task = self.store.delete(task_id)
        self.logger.log_deleted(task)
        self._changed()
        return task

    def undo_delete(self) -> TaskSnapshot:
        task = self.store.search(self.store.undo_delete())
        self.logger.log_restored(task)
        self._changed()
        return task

    def mark(self, task_id: int, done: bool) -> bool:
        """Set completion; returns False when the task already had that state."""
        changed = self.store.mark_complete(task_id, done)
        if changed:
            self.logger.log_marked(self.store.search(task_id))
            self._changed()
        return changed
