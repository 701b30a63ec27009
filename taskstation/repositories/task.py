"""SQLAlchemy-backed task repository."""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskstation.core.exceptions import ErrorCode, NotFoundError
from taskstation.domain.task import (
    NO_FILE,
    ExternalFile,
    FileAttachment,
    InlineFile,
    Task,
    TaskStatus,
    utcnow,
)
from taskstation.models.task import TaskDocument
from taskstation.repositories.base import TaskRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes returned by backends without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _attachment_from(document: TaskDocument) -> FileAttachment:
    if document.file_url:
        return ExternalFile(url=document.file_url)
    # Incomplete inline rows are treated as having no file
    if document.file_data and document.file_name and document.file_content_type:
        return InlineFile(
            data=document.file_data,
            file_name=document.file_name,
            content_type=document.file_content_type,
        )
    return NO_FILE


def _to_entity(document: TaskDocument) -> Task:
    return Task.restore(
        task_id=document.id,
        title=document.title,
        description=document.description,
        created_at=_as_utc(document.created_at),
        sla_hours=document.sla_hours,
        status=TaskStatus(document.status),
        attachment=_attachment_from(document),
    )


def _write(document: TaskDocument, task: Task) -> None:
    """Copy the full task state onto the document (full replace)."""
    document.title = task.title
    document.description = task.description
    document.created_at = task.created_at
    document.sla_hours = task.sla_hours
    document.due_date = task.due_date
    document.status = task.status.value

    document.file_url = None
    document.file_data = None
    document.file_name = None
    document.file_content_type = None

    attachment = task.attachment
    if isinstance(attachment, ExternalFile):
        document.file_url = attachment.url
    elif isinstance(attachment, InlineFile):
        document.file_data = attachment.data
        document.file_name = attachment.file_name
        document.file_content_type = attachment.content_type


class SqlAlchemyTaskRepository(TaskRepository):
    """Repository for task persistence on top of an async SQLAlchemy session.

    Writes are flushed, not committed; the session owner decides when the
    transaction ends.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task repository.

        Args:
            session: Async database session.
        """
        self.session = session

    async def _fetch(self, query: Select[tuple[TaskDocument]]) -> list[Task]:
        result = await self.session.execute(query.order_by(TaskDocument.created_at.desc()))
        return [_to_entity(document) for document in result.scalars().all()]

    async def get_by_id(self, task_id: str) -> Task | None:
        document = await self.session.get(TaskDocument, task_id)
        if document is None:
            return None
        return _to_entity(document)

    async def get_all(self) -> list[Task]:
        return await self._fetch(select(TaskDocument))

    async def get_by_status(self, status: TaskStatus) -> list[Task]:
        return await self._fetch(
            select(TaskDocument).where(TaskDocument.status == status.value)
        )

    async def get_overdue(self, now: datetime | None = None) -> list[Task]:
        now = now or utcnow()
        return await self._fetch(
            select(TaskDocument).where(
                or_(
                    TaskDocument.status == TaskStatus.OVERDUE.value,
                    and_(
                        TaskDocument.status == TaskStatus.PENDING.value,
                        TaskDocument.due_date < now,
                    ),
                )
            )
        )

    async def insert(self, task: Task) -> None:
        task.assign_id(uuid4().hex)
        document = TaskDocument(id=task.id)
        _write(document, task)
        self.session.add(document)
        await self.session.flush()
        logger.debug("Inserted task %s", task.id)

    async def update(self, task: Task) -> None:
        document = await self.session.get(TaskDocument, task.id)
        if document is None:
            raise NotFoundError(resource="Task", resource_id=task.id, code=ErrorCode.TASK_NOT_FOUND)
        _write(document, task)
        await self.session.flush()

    async def mark_overdue(self, now: datetime | None = None) -> int:
        now = now or utcnow()
        result = await self.session.execute(
            select(TaskDocument).where(
                TaskDocument.status == TaskStatus.PENDING.value,
                TaskDocument.due_date < now,
            )
        )
        documents = result.scalars().all()
        for document in documents:
            document.status = TaskStatus.OVERDUE.value
        await self.session.flush()
        return len(documents)
