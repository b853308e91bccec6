"""Activity log for task store operations."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..state.tasks import TaskSnapshot


class ActivityLogger:
    """Append-only JSON-lines log of what happened to the task list."""

    filename = "activity.log"

    def __init__(self, log_dir: Optional[Path], enabled: bool = True) -> None:
        self.enabled = enabled and log_dir is not None
        self.log_dir = log_dir
        self.path = log_dir / self.filename if log_dir is not None else None
        if self.enabled:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def _write(self, event: str, **payload: Any) -> None:
        if not self.enabled:
            return
        entry = {"timestamp": datetime.utcnow().isoformat(), "event": event, **payload}
        with self.path.open("a", encoding="utf-8") as fp:
            fp.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def log_added(self, task: TaskSnapshot) -> None:
        self._write("add", task_id=task.id, description=task.description, priority=task.priority)

    def log_edited(self, task: TaskSnapshot, warnings: List[str]) -> None:
        self._write(
            "edit",
            task_id=task.id,
            description=task.description,
            priority=task.priority,
            warnings=warnings,
        )

    def log_deleted(self, task: TaskSnapshot) -> None:
        self._write("delete", task_id=task.id, description=task.description)

    def log_restored(self, task: TaskSnapshot) -> None:
        self._write("restore", task_id=task.id, description=task.description)

    def log_marked(self, task: TaskSnapshot) -> None:
        self._write("complete" if task.completed else "reopen", task_id=task.id)

    def log_saved(self, path: Path, count: int) -> None:
        self._write("save", path=str(path), count=count)

    def log_loaded(self, path: Path, loaded: int, skipped: int) -> None:
        self._write("load", path=str(path), loaded=loaded, skipped=skipped)

    def log_report(self, path: Path, count: int) -> None:
        self._write("report", path=str(path), count=count)

    def read_events(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return logged entries, oldest first; unreadable lines are skipped."""
        if self.path is None or not self.path.exists():
            return []
        events: List[Dict[str, Any]] = []
        with self.path.open("r", encoding="utf-8") as fp:
            for line in fp:
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(entry, dict):
                    events.append(entry)
        if limit is not None:
            return events[-limit:] if limit > 0 else []
        return events
