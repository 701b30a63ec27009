"""Repository package for data access layer."""

from taskstation.repositories.base import TaskRepository
from taskstation.repositories.task import SqlAlchemyTaskRepository

__all__ = [
    "SqlAlchemyTaskRepository",
    "TaskRepository",
]
