"""Repository contract for task persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from taskstation.domain.task import Task, TaskStatus


class TaskRepository(ABC):
    """Abstract interface for task storage.

    The application service depends only on this contract, which allows
    swapping the SQL-backed store for an in-memory one in tests.
    All listing methods return tasks ordered by creation time, newest first.
    """

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Task | None:
        """Get a task by its ID.

        Args:
            task_id: The task's identifier.

        Returns:
            The task if found, None otherwise.
        """

    @abstractmethod
    async def get_all(self) -> list[Task]:
        """Get every stored task."""

    @abstractmethod
    async def get_by_status(self, status: TaskStatus) -> list[Task]:
        """Get tasks whose persisted status equals ``status``."""

    @abstractmethod
    async def get_overdue(self, now: datetime | None = None) -> list[Task]:
        """Get tasks that are OVERDUE, or PENDING with a due date before ``now``.

        Args:
            now: Reference time, defaults to the current UTC time.
        """

    @abstractmethod
    async def insert(self, task: Task) -> None:
        """Store a new task and assign its identifier."""

    @abstractmethod
    async def update(self, task: Task) -> None:
        """Replace the stored task with the given state."""

    @abstractmethod
    async def mark_overdue(self, now: datetime | None = None) -> int:
        """Set status OVERDUE on every PENDING task past its due date.

        Args:
            now: Reference time, defaults to the current UTC time.

        Returns:
            Number of tasks updated.
        """
