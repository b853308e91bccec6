"""Task records and the in-memory task store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import EmptyHistoryError, InvalidInputError, TaskNotFoundError

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = MIN_PRIORITY
# Passed to edit() to leave the priority as it is.
KEEP_PRIORITY = 0


def valid_priority(priority: int) -> bool:
    return MIN_PRIORITY <= priority <= MAX_PRIORITY


@dataclass(frozen=True)
class TaskSnapshot:
    """Read-only view of a task handed out to callers."""

    id: int
    description: str
    priority: int
    completed: bool


@dataclass
class TaskStatistics:
    total: int
    completed: int
    pending: int
    completion_rate: float


@dataclass
class EditResult:
    task: TaskSnapshot
    warnings: List[str] = field(default_factory=list)


class Task:
    """Represents a single to-do entry."""

    def __init__(
        self,
        id: int,
        description: str,
        priority: int = DEFAULT_PRIORITY,
        completed: bool = False,
    ) -> None:
        self.id = id
        self.description = description
        self.priority = priority
        self.completed = completed

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "priority": self.priority,
            "completed": self.completed,
        }

    @staticmethod
    def from_dict(data: Dict) -> "Task":
        """Create from dictionary."""
        return Task(
            id=int(data["id"]),
            description=data.get("description", ""),
            priority=int(data.get("priority", DEFAULT_PRIORITY)),
            completed=bool(data.get("completed", False)),
        )

    def copy(self) -> "Task":
        """Detached copy sharing no state with this task."""
        return Task(self.id, self.description, self.priority, self.completed)

    def snapshot(self) -> TaskSnapshot:
        return TaskSnapshot(self.id, self.description, self.priority, self.completed)

    def __repr__(self) -> str:
        return (
            f"Task(id={self.id}, description={self.description!r}, "
            f"priority={self.priority}, completed={self.completed})"
        )


class TaskStore:
    """
    Ordered collection of tasks with O(1) lookup by id and undo of deletes.

    The list owns display order; the index maps ids to the same Task objects.
    Deleted tasks are kept as detached copies on a LIFO history so the most
    recent deletion can be restored. Restored tasks go to the front.
    """

    def __init__(self) -> None:
        self._tasks: List[Task] = []
        self._index: Dict[int, Task] = {}
        self._history: List[Task] = []
        self._next_id = 1
        self._size = 0

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def add(self, description: str, priority: int = DEFAULT_PRIORITY) -> int:
        """Append a new task and return its id. Out-of-range priority becomes 1."""
        if not description or not description.strip():
            raise InvalidInputError("Description cannot be empty")
        if not valid_priority(priority):
            priority = DEFAULT_PRIORITY

        task = Task(self._next_id, description, priority)
        self._tasks.append(task)
        self._index[task.id] = task
        self._next_id += 1
        self._size += 1
        return task.id

    def edit(
        self,
        task_id: int,
        description: Optional[str] = None,
        priority: Optional[int] = None,
    ) -> EditResult:
        """
        Update description and/or priority of a live task.

        An empty or blank description or a priority of None/0 keeps the
        current value. A priority outside 1..5 is not applied; it is reported
        as a warning.
        """
        task = self._get(task_id)
        warnings: List[str] = []

        if description and description.strip():
            task.description = description

        if priority is not None and priority != KEEP_PRIORITY:
            if valid_priority(priority):
                task.priority = priority
            else:
                warnings.append(
                    f"Invalid priority {priority}; keeping {task.priority} "
                    f"(expected {MIN_PRIORITY}-{MAX_PRIORITY})"
                )

        return EditResult(task=task.snapshot(), warnings=warnings)

    def delete(self, task_id: int) -> TaskSnapshot:
        """Remove a task, keeping a copy so it can be restored."""
        task = self._get(task_id)
        self._tasks.remove(task)
        del self._index[task_id]
        self._history.append(task.copy())
        self._size -= 1
        return task.snapshot()

    def undo_delete(self) -> int:
        """Restore the most recently deleted task at the front; return its id."""
        if not self._history:
            raise EmptyHistoryError()
        restored = self._history[-1]
        if restored.id in self._index:
            raise InvalidInputError(f"Task {restored.id} is already live; cannot restore")

        self._history.pop()
        self._tasks.insert(0, restored)
        self._index[restored.id] = restored
        self._size += 1
        self._next_id = max(self._next_id, restored.id + 1)
        return restored.id

    def mark_complete(self, task_id: int, done: bool = True) -> bool:
        """Set the completion flag. Returns False if it already had that value."""
        task = self._get(task_id)
        changed = task.completed != done
        task.completed = done
        return changed

    def mark_incomplete(self, task_id: int) -> bool:
        return self.mark_complete(task_id, False)

    def load(self, tasks: Iterable[Task]) -> None:
        """
        Append tasks that already carry ids, in the given order.

        Raises InvalidInputError on the first task whose id is live; the tasks
        before it remain loaded.
        """
        for task in tasks:
            if task.id in self._index:
                raise InvalidInputError(f"Duplicate task id {task.id}")
            if task.id < 1:
                raise InvalidInputError(f"Invalid task id {task.id}")
            if not valid_priority(task.priority):
                task.priority = DEFAULT_PRIORITY
            self._tasks.append(task)
            self._index[task.id] = task
            self._size += 1
            self._next_id = max(self._next_id, task.id + 1)

    def clear(self) -> None:
        """Drop all live tasks and the undo history. Ids are not reissued."""
        self._tasks.clear()
        self._index.clear()
        self._history.clear()
        self._size = 0

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def search(self, task_id: int) -> TaskSnapshot:
        return self._get(task_id).snapshot()

    def list_all(self) -> Iterator[TaskSnapshot]:
        for task in self._tasks:
            yield task.snapshot()

    def list_pending(self) -> Iterator[TaskSnapshot]:
        for task in self._tasks:
            if not task.completed:
                yield task.snapshot()

    def list_completed(self) -> Iterator[TaskSnapshot]:
        for task in self._tasks:
            if task.completed:
                yield task.snapshot()

    def statistics(self) -> TaskStatistics:
        completed = sum(1 for task in self._tasks if task.completed)
        total = self._size
        rate = (completed * 100.0 / total) if total > 0 else 0.0
        return TaskStatistics(
            total=total,
            completed=completed,
            pending=total - completed,
            completion_rate=rate,
        )

    def peek_undo(self) -> Optional[TaskSnapshot]:
        """Task that undo_delete() would restore, if any."""
        if not self._history:
            return None
        return self._history[-1].snapshot()

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return self._size

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._index

    def _get(self, task_id: int) -> Task:
        task = self._index.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
