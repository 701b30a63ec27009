"""Domain model package."""

from taskstation.domain.task import (
    NO_FILE,
    ExternalFile,
    FileAttachment,
    InlineFile,
    NoFile,
    Task,
    TaskStatus,
)

__all__ = [
    "NO_FILE",
    "ExternalFile",
    "FileAttachment",
    "InlineFile",
    "NoFile",
    "Task",
    "TaskStatus",
]
