"""API dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskstation.config import settings
from taskstation.database import get_db
from taskstation.repositories.task import SqlAlchemyTaskRepository
from taskstation.services.task import TaskService
from taskstation.storage.base import FileStorage
from taskstation.storage.s3 import S3FileStorage

# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


@lru_cache
def _s3_storage() -> S3FileStorage:
    return S3FileStorage.from_settings(settings)


def get_file_storage() -> FileStorage | None:
    """Get the external file storage, or None when uploads stay inline."""
    if not settings.s3_enabled:
        return None
    return _s3_storage()


async def get_task_service(
    session: DBSession,
    file_storage: Annotated[FileStorage | None, Depends(get_file_storage)],
) -> AsyncGenerator[TaskService, None]:
    """Get task service instance.

    Args:
        session: Database session.
        file_storage: External storage when enabled.

    Yields:
        TaskService instance.
    """
    yield TaskService(
        SqlAlchemyTaskRepository(session),
        file_storage,
        external_storage_enabled=settings.s3_enabled,
    )


# Type aliases for dependency injection
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
