"""Services package for business logic."""

from taskstation.services.task import TaskService
from taskstation.services.validators import CreateTaskValidator, UpdateTaskValidator

__all__ = [
    "CreateTaskValidator",
    "TaskService",
    "UpdateTaskValidator",
]
