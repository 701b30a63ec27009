"""SQLAlchemy models package."""

from taskstation.models.base import Base
from taskstation.models.task import TaskDocument

__all__ = [
    "Base",
    "TaskDocument",
]
