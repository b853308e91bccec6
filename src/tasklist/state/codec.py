"""Flat-file format for the task store.

Each line holds one task as ``id|description|priority|completed`` where the
completed flag is ``0`` or ``1``. Lines that cannot be parsed are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import InvalidInputError
from .persistence import Persistence
from .tasks import Task, TaskSnapshot, TaskStore

DELIMITER = "|"


@dataclass
class LoadReport:
    loaded: int = 0
    skipped: int = 0


def sanitize(description: str) -> str:
    """Make a description safe to store in a single field."""
    return description.replace(DELIMITER, " ")


def encode_task(task: TaskSnapshot) -> str:
    done = 1 if task.completed else 0
    return f"{task.id}{DELIMITER}{sanitize(task.description)}{DELIMITER}{task.priority}{DELIMITER}{done}"


def decode_task(line: str) -> Optional[Task]:
    """Parse one line; returns None for blank or malformed lines."""
    if not line.strip():
        return None
    parts = line.split(DELIMITER, 3)
    if len(parts) < 4:
        return None
    raw_id, description, raw_priority, raw_done = parts
    try:
        task_id = int(raw_id)
        priority = int(raw_priority)
        done = int(raw_done)
    except ValueError:
        return None
    if task_id < 1:
        return None
    return Task(task_id, description, priority, done != 0)


def encode_store(store: TaskStore) -> List[str]:
    return [encode_task(task) for task in store.list_all()]


def load_lines(store: TaskStore, lines: Iterable[str]) -> LoadReport:
    """Feed decoded lines into the store in order."""
    report = LoadReport()
    for line in lines:
        task = decode_task(line)
        if task is None:
            if line.strip():
                report.skipped += 1
            continue
        try:
            store.load([task])
        except InvalidInputError:
            # first occurrence of an id wins
            report.skipped += 1
            continue
        report.loaded += 1
    return report


def load_store(store: TaskStore, path: Path) -> LoadReport:
    """Load tasks from ``path`` into ``store``. A missing file loads nothing."""
    return load_lines(store, Persistence.load_lines(path))


def save_store(store: TaskStore, path: Path) -> int:
    """Write the store to ``path`` atomically; returns the number of tasks written."""
    lines = encode_store(store)
    Persistence.save_lines(path, lines)
    return len(lines)


def format_report_line(task: TaskSnapshot) -> str:
    mark = "[✓]" if task.completed else "[ ]"
    return f"{mark} {task.id} - {task.description} (P:{task.priority})"


def write_report(store: TaskStore, path: Path) -> int:
    """Write a human-readable listing of the store to ``path``."""
    lines = [format_report_line(task) for task in store.list_all()]
    Persistence.save_lines(path, lines)
    return len(lines)
