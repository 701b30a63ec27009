"""Task service for business logic."""

import logging

from taskstation.core.exceptions import ErrorCode, NotFoundError, ValidationError
from taskstation.domain.task import InlineFile, Task, TaskStatus
from taskstation.repositories.base import TaskRepository
from taskstation.schemas.task import (
    FileDownload,
    FileUpload,
    TaskCreate,
    TaskRead,
    TaskStatusUpdate,
    TaskUpdate,
)
from taskstation.services.validators import CreateTaskValidator, UpdateTaskValidator
from taskstation.storage.base import FileStorage

logger = logging.getLogger(__name__)


def _parse_status(value: str | None) -> TaskStatus | None:
    """Parse a status name case-insensitively, None when unrecognised."""
    try:
        return TaskStatus((value or "").strip().upper())
    except ValueError:
        return None


class TaskService:
    """Service for task business logic.

    Every operation validates its input before touching the entity, and
    persists once, after all in-memory changes succeeded.

    Attachments go either to the external file storage (only a URL is kept)
    or inline in the task record. The choice is made once, when the service
    is built, from the ``external_storage_enabled`` flag.
    """

    def __init__(
        self,
        repository: TaskRepository,
        file_storage: FileStorage | None = None,
        *,
        external_storage_enabled: bool = False,
        create_validator: CreateTaskValidator | None = None,
        update_validator: UpdateTaskValidator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Task persistence.
            file_storage: External storage, required when enabled.
            external_storage_enabled: Upload attachments instead of storing them inline.
            create_validator: Rules for creation input.
            update_validator: Rules for update input.
        """
        if external_storage_enabled and file_storage is None:
            raise ValueError("External storage is enabled but no file storage was provided")
        self.repository = repository
        self.file_storage = file_storage
        self.external_storage_enabled = external_storage_enabled
        self.create_validator = create_validator or CreateTaskValidator()
        self.update_validator = update_validator or UpdateTaskValidator()

    async def create(self, data: TaskCreate) -> TaskRead:
        """Create a new task.

        Args:
            data: Task creation data.

        Returns:
            Created task.

        Raises:
            ValidationError: If the input breaks any creation rule.
        """
        self.create_validator.validate(data)

        task = Task(title=data.title, sla_hours=data.sla_hours, description=data.description)
        if data.file is not None:
            await self._attach(task, data.file)

        await self.repository.insert(task)
        logger.info("Created task %s with SLA of %sh", task.id, task.sla_hours)

        return TaskRead.from_entity(task)

    async def list(self, status: str | None = None) -> list[TaskRead]:
        """List tasks, newest first, optionally filtered by status.

        ``OVERDUE`` also matches PENDING tasks already past their due date,
        even when the stored status has not been swept yet.

        Args:
            status: PENDING, DONE or OVERDUE (case-insensitive), or None for all.

        Returns:
            Matching tasks.

        Raises:
            ValidationError: If the filter is not a known status.
        """
        if status is None or not status.strip():
            tasks = await self.repository.get_all()
        else:
            parsed = _parse_status(status)
            if parsed is None:
                raise ValidationError.for_field("status", f"Invalid status filter: '{status}'.")
            if parsed == TaskStatus.OVERDUE:
                tasks = await self.repository.get_overdue()
            else:
                tasks = await self.repository.get_by_status(parsed)

        return [TaskRead.from_entity(task) for task in tasks]

    async def get_by_id(self, task_id: str) -> TaskRead:
        """Get a task by ID.

        Raises:
            NotFoundError: If the task does not exist.
        """
        task = await self._load(task_id)
        return TaskRead.from_entity(task)

    async def update(self, task_id: str, data: TaskUpdate) -> TaskRead:
        """Replace a task's title, SLA and status, and optionally its file.

        When both ``remove_file`` and a new file are given, the old file is
        dropped first and the new one attached.

        Args:
            task_id: Task's identifier.
            data: Update data.

        Returns:
            Updated task.

        Raises:
            ValidationError: If the input breaks any update rule.
            NotFoundError: If the task does not exist.
            ConflictError: If the status change is not allowed.
        """
        self.update_validator.validate(data)

        task = await self._load(task_id)

        task.rename(data.title)
        task.rebudget(data.sla_hours)

        target = _parse_status(data.status)
        if target == TaskStatus.DONE:
            task.mark_done()
        elif target == TaskStatus.PENDING:
            task.mark_pending()
        else:
            raise ValidationError.for_field("status", f"Invalid status: '{data.status}'.")

        if data.remove_file:
            task.detach_file()
        if data.file is not None:
            await self._attach(task, data.file)

        await self.repository.update(task)
        logger.info("Updated task %s", task.id)

        return TaskRead.from_entity(task)

    async def update_status(self, task_id: str, data: TaskStatusUpdate) -> TaskRead:
        """Change only the status of a task.

        DONE completes the task; PENDING leaves the task unchanged.

        Raises:
            NotFoundError: If the task does not exist.
            ValidationError: If the status is neither PENDING nor DONE.
            ConflictError: If the task is already done.
        """
        task = await self._load(task_id)

        target = _parse_status(data.status)
        if target == TaskStatus.DONE:
            task.mark_done()
        elif target == TaskStatus.PENDING:
            pass
        else:
            raise ValidationError.for_field(
                "status", f"Invalid status transition: '{data.status}'."
            )

        await self.repository.update(task)

        return TaskRead.from_entity(task)

    async def get_file(self, task_id: str) -> FileDownload | None:
        """Get the inline file of a task.

        Returns:
            The file, or None when the task has no inline file (including
            files kept in external storage).

        Raises:
            NotFoundError: If the task does not exist.
        """
        task = await self._load(task_id)

        attachment = task.attachment
        if not isinstance(attachment, InlineFile):
            return None
        return FileDownload(
            data=attachment.data,
            file_name=attachment.file_name,
            content_type=attachment.content_type,
        )

    async def sweep_overdue(self) -> int:
        """Persist OVERDUE on every PENDING task past its due date.

        Returns:
            Number of tasks rewritten.
        """
        count = await self.repository.mark_overdue()
        logger.info("Overdue sweep marked %d task(s)", count)
        return count

    async def _load(self, task_id: str) -> Task:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise NotFoundError(
                resource="Task",
                resource_id=task_id,
                code=ErrorCode.TASK_NOT_FOUND,
            )
        return task

    async def _attach(self, task: Task, upload: FileUpload) -> None:
        if self.external_storage_enabled:
            upload.stream.seek(0)
            url = await self.file_storage.upload(
                upload.stream, upload.file_name, upload.content_type
            )
            task.attach_url(url)
        else:
            task.attach_inline(upload.read(), upload.file_name, upload.content_type)
