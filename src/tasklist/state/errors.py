"""Exceptions raised by the task store."""

from __future__ import annotations


class TaskStoreError(Exception):
    """Base exception for task store errors."""


class InvalidInputError(TaskStoreError):
    """Raised when an operation receives input it cannot accept."""


class TaskNotFoundError(TaskStoreError):
    """Raised when an operation references an id that is not live."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class EmptyHistoryError(TaskStoreError):
    """Raised when undo is requested with nothing to restore."""

    def __init__(self) -> None:
        super().__init__("No deleted task to undo")
