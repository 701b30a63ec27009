"""Task schemas for request/response validation."""

import base64
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import BinaryIO

from pydantic import Field

from taskstation.domain.task import ExternalFile, InlineFile, Task, TaskStatus
from taskstation.schemas.base import BaseSchema


@dataclass
class FileUpload:
    """A file received with a create or update request."""

    file_name: str
    content_type: str
    size: int
    stream: BinaryIO

    def read(self) -> bytes:
        """Read the whole payload from the beginning of the stream."""
        self.stream.seek(0)
        return self.stream.read()


@dataclass
class TaskCreate:
    """Input for creating a task. Checked by ``CreateTaskValidator``."""

    title: str
    sla_hours: int
    description: str | None = None
    file: FileUpload | None = None


@dataclass
class TaskUpdate:
    """Input for a full task update. Checked by ``UpdateTaskValidator``."""

    title: str
    sla_hours: int
    status: str
    file: FileUpload | None = None
    remove_file: bool = False


@dataclass
class FileDownload:
    """Inline file payload returned for downloads."""

    data: bytes
    file_name: str
    content_type: str


class TaskStatusUpdate(BaseSchema):
    """Schema for a status-only change."""

    status: str | None = Field(
        default=None,
        description="Target status, PENDING or DONE (case-insensitive)",
        examples=["DONE"],
    )


class TaskRead(BaseSchema):
    """Schema for reading task data."""

    id: str
    title: str
    description: str | None = None
    created_at: datetime
    sla_hours: int
    sla_expiration_date: datetime
    status: TaskStatus
    display_status: TaskStatus
    file_url: str | None = None
    file_name: str | None = None
    file_content_type: str | None = None
    file_data_base64: str | None = None

    @classmethod
    def from_entity(cls, task: Task, now: datetime | None = None) -> "TaskRead":
        """Map a task entity to its API representation.

        Inline files get a download URL on this API and their full content
        as base64; external files expose the stored URL and its last segment
        as the file name.
        """
        file_fields: dict[str, str | None] = {}
        attachment = task.attachment
        if isinstance(attachment, ExternalFile):
            file_fields = {
                "file_url": attachment.url,
                "file_name": PurePosixPath(attachment.url).name or None,
            }
        elif isinstance(attachment, InlineFile):
            file_fields = {
                "file_url": f"/api/tasks/{task.id}/file",
                "file_name": attachment.file_name,
                "file_content_type": attachment.content_type,
                "file_data_base64": base64.b64encode(attachment.data).decode("ascii"),
            }

        return cls(
            id=task.id or "",
            title=task.title,
            description=task.description,
            created_at=task.created_at,
            sla_hours=task.sla_hours,
            sla_expiration_date=task.due_date,
            status=task.status,
            display_status=task.display_status(now),
            **file_fields,
        )
