"""State management modules."""

from .errors import EmptyHistoryError, InvalidInputError, TaskNotFoundError, TaskStoreError
from .persistence import Persistence
from .tasks import EditResult, Task, TaskSnapshot, TaskStatistics, TaskStore

__all__ = [
    "EditResult",
    "EmptyHistoryError",
    "InvalidInputError",
    "Persistence",
    "Task",
    "TaskNotFoundError",
    "TaskSnapshot",
    "TaskStatistics",
    "TaskStore",
    "TaskStoreError",
]
