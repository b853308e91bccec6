"""Tasklist - in-memory task list manager with a flat-file snapshot."""

__version__ = "0.1.0"
__author__ = "Tasklist Contributors"

from .config import Config
from .state.errors import EmptyHistoryError, InvalidInputError, TaskNotFoundError, TaskStoreError
from .state.tasks import Task, TaskSnapshot, TaskStatistics, TaskStore

__all__ = [
    "Config",
    "EmptyHistoryError",
    "InvalidInputError",
    "Task",
    "TaskNotFoundError",
    "TaskSnapshot",
    "TaskStatistics",
    "TaskStore",
    "TaskStoreError",
]
