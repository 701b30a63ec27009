"""Pydantic schemas package."""

from taskstation.schemas.task import (
    FileDownload,
    FileUpload,
    TaskCreate,
    TaskRead,
    TaskStatusUpdate,
    TaskUpdate,
)

__all__ = [
    "FileDownload",
    "FileUpload",
    "TaskCreate",
    "TaskRead",
    "TaskStatusUpdate",
    "TaskUpdate",
]
