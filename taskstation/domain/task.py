"""Task domain entity with SLA tracking.

All invariants are enforced by the constructor and the behaviour methods;
the persisted fields are only reachable through read-only properties.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum

from taskstation.core.exceptions import ConflictError, ValidationError

MAX_TITLE_LENGTH = 200
MIN_SLA_HOURS = 1
MAX_SLA_HOURS = 8760  # 1 year


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class TaskStatus(StrEnum):
    """Persisted task status."""

    PENDING = "PENDING"
    DONE = "DONE"
    OVERDUE = "OVERDUE"


@dataclass(frozen=True)
class NoFile:
    """No file attached."""


@dataclass(frozen=True)
class InlineFile:
    """File bytes stored alongside the task record."""

    data: bytes
    file_name: str
    content_type: str


@dataclass(frozen=True)
class ExternalFile:
    """File kept in an object store; the task only holds its URL."""

    url: str


FileAttachment = NoFile | InlineFile | ExternalFile

NO_FILE = NoFile()


def _guard_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError.for_field("title", "Task title is required.")
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError.for_field(
            "title", f"Task title must not exceed {MAX_TITLE_LENGTH} characters."
        )
    return title


def _guard_sla(sla_hours: int) -> int:
    if sla_hours < MIN_SLA_HOURS:
        raise ValidationError.for_field("slaHours", "SLA hours must be greater than zero.")
    if sla_hours > MAX_SLA_HOURS:
        raise ValidationError.for_field(
            "slaHours", f"SLA hours must not exceed {MAX_SLA_HOURS} (1 year)."
        )
    return sla_hours


class Task:
    """A unit of work that must be completed within its SLA.

    The due date is always ``created_at + sla_hours``; changing the SLA
    recomputes it from the original creation time, never from "now".
    """

    def __init__(
        self,
        title: str,
        sla_hours: int,
        description: str | None = None,
        file_url: str | None = None,
    ) -> None:
        self._id: str | None = None
        self._title = _guard_title(title)
        self._sla_hours = _guard_sla(sla_hours)
        self._description = description.strip() if description else None
        self._created_at = utcnow()
        self._status = TaskStatus.PENDING
        self._attachment: FileAttachment = NO_FILE
        if file_url is not None:
            self.attach_url(file_url)

    @classmethod
    def restore(
        cls,
        *,
        task_id: str,
        title: str,
        description: str | None,
        created_at: datetime,
        sla_hours: int,
        status: TaskStatus,
        attachment: FileAttachment,
    ) -> "Task":
        """Rebuild a task from persisted state without re-running creation rules."""
        task = cls.__new__(cls)
        task._id = task_id
        task._title = title
        task._description = description
        task._created_at = created_at
        task._sla_hours = sla_hours
        task._status = status
        task._attachment = attachment
        return task

    def __repr__(self) -> str:
        return f"<Task {self._id} {self._title[:30]!r} {self._status}>"

    # -- reads ---------------------------------------------------------------

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def sla_hours(self) -> int:
        return self._sla_hours

    @property
    def due_date(self) -> datetime:
        return self._created_at + timedelta(hours=self._sla_hours)

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def attachment(self) -> FileAttachment:
        return self._attachment

    def display_status(self, now: datetime | None = None) -> TaskStatus:
        """Status as a reader perceives it: PENDING tasks past due show as OVERDUE."""
        if self._status == TaskStatus.DONE:
            return TaskStatus.DONE
        if (now or utcnow()) > self.due_date:
            return TaskStatus.OVERDUE
        return TaskStatus.PENDING

    def is_sla_expired(self) -> bool:
        return self._status != TaskStatus.DONE and utcnow() > self.due_date

    # -- mutations -----------------------------------------------------------

    def assign_id(self, task_id: str) -> None:
        """Set the identifier chosen by the persistence layer. Allowed once."""
        if self._id is not None:
            raise ValueError(f"Task already has id '{self._id}'")
        self._id = task_id

    def rename(self, new_title: str) -> None:
        self._title = _guard_title(new_title)

    def rebudget(self, new_sla_hours: int) -> None:
        self._sla_hours = _guard_sla(new_sla_hours)

    def mark_done(self) -> None:
        if self._status == TaskStatus.DONE:
            raise ConflictError("Task is already completed.")
        self._status = TaskStatus.DONE

    def mark_pending(self) -> None:
        if self._status == TaskStatus.DONE:
            raise ConflictError("Cannot mark a completed task as pending.")
        self._status = TaskStatus.PENDING

    def mark_overdue(self) -> None:
        # Completed tasks never become overdue
        if self._status == TaskStatus.DONE:
            return
        if utcnow() < self.due_date:
            raise ConflictError("Cannot mark a task as overdue before its due date.")
        self._status = TaskStatus.OVERDUE

    def attach_url(self, url: str) -> None:
        if not url or not url.strip():
            raise ValidationError.for_field("file", "File URL cannot be empty.")
        self._attachment = ExternalFile(url=url)

    def attach_inline(self, data: bytes, file_name: str, content_type: str) -> None:
        errors = []
        if not data:
            errors.append({"field": "file", "message": "File data cannot be empty."})
        if not file_name or not file_name.strip():
            errors.append({"field": "file", "message": "File name cannot be empty."})
        if not content_type or not content_type.strip():
            errors.append({"field": "file", "message": "Content type cannot be empty."})
        if errors:
            raise ValidationError("Invalid file attachment", details=errors)
        self._attachment = InlineFile(data=bytes(data), file_name=file_name, content_type=content_type)

    def detach_file(self) -> None:
        self._attachment = NO_FILE
