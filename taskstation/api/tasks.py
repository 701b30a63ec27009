"""Task endpoints."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, File, Form, Query, Response, UploadFile, status

from taskstation.api.deps import TaskServiceDep
from taskstation.core.exceptions import ErrorCode, NotFoundError
from taskstation.schemas.task import (
    FileUpload,
    TaskCreate,
    TaskRead,
    TaskStatusUpdate,
    TaskUpdate,
)

router = APIRouter()


def content_disposition(file_name: str) -> str:
    """Build an attachment header that survives non-ASCII and quoted names.

    Header values are encoded as Latin-1, so any name that needs escaping
    is sent in the RFC 5987 ``filename*`` form instead.
    """
    quoted = quote(file_name)
    if quoted != file_name:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{file_name}"'


def _to_upload(file: UploadFile | None) -> FileUpload | None:
    """Wrap a multipart file; an empty file part counts as no file."""
    if file is None or not file.filename:
        return None

    size = file.size
    if size is None:
        file.file.seek(0, 2)
        size = file.file.tell()
    file.file.seek(0)

    return FileUpload(
        file_name=file.filename,
        content_type=file.content_type or "application/octet-stream",
        size=size,
        stream=file.file,
    )


@router.get(
    "",
    response_model=list[TaskRead],
    response_model_exclude_none=True,
    summary="List tasks",
    description="List all tasks, newest first, with an optional status filter.",
)
async def list_tasks(
    service: TaskServiceDep,
    status_filter: Annotated[
        str | None,
        Query(alias="status", description="PENDING, DONE or OVERDUE"),
    ] = None,
) -> list[TaskRead]:
    """List tasks.

    - **status**: OVERDUE also returns PENDING tasks already past their due date
    """
    return await service.list(status_filter)


@router.post(
    "",
    response_model=TaskRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description="Create a task from multipart form data with an optional file.",
)
async def create_task(
    service: TaskServiceDep,
    response: Response,
    title: Annotated[str, Form()] = "",
    sla_hours: Annotated[int, Form(alias="slaHours")] = 0,
    description: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> TaskRead:
    """Create a new task.

    - **title**: Task title, up to 200 characters (required)
    - **slaHours**: Hours to complete, 1 to 8760 (required)
    - **description**: Optional notes
    - **file**: Optional attachment, up to 10 MB
    """
    task = await service.create(
        TaskCreate(
            title=title,
            sla_hours=sla_hours,
            description=description,
            file=_to_upload(file),
        )
    )
    response.headers["Location"] = f"/api/tasks/{task.id}"
    return task


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Get task",
)
async def get_task(task_id: str, service: TaskServiceDep) -> TaskRead:
    """Get a specific task by ID."""
    return await service.get_by_id(task_id)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Update task",
    description="Replace title, SLA and status; optionally replace or remove the file.",
)
async def update_task(
    task_id: str,
    service: TaskServiceDep,
    title: Annotated[str, Form()] = "",
    sla_hours: Annotated[int, Form(alias="slaHours")] = 0,
    status_value: Annotated[str, Form(alias="status")] = "",
    file: Annotated[UploadFile | None, File()] = None,
    remove_file: Annotated[bool, Form(alias="removeFile")] = False,
) -> TaskRead:
    """Update a task.

    - **slaHours**: 1 to 720 on this path
    - **status**: PENDING or DONE
    - **removeFile**: Drop the current file (a new file in the same request still wins)
    """
    return await service.update(
        task_id,
        TaskUpdate(
            title=title,
            sla_hours=sla_hours,
            status=status_value,
            file=_to_upload(file),
            remove_file=remove_file,
        ),
    )


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Update task status",
)
async def update_task_status(
    task_id: str,
    data: TaskStatusUpdate,
    service: TaskServiceDep,
) -> TaskRead:
    """Mark a task as DONE; PENDING leaves it unchanged."""
    return await service.update_status(task_id, data)


@router.get(
    "/{task_id}/file",
    response_class=Response,
    summary="Download task file",
    description="Download the file stored inline with the task.",
)
async def download_task_file(task_id: str, service: TaskServiceDep) -> Response:
    """Download a task's inline file as an attachment."""
    download = await service.get_file(task_id)
    if download is None:
        raise NotFoundError(
            resource="File for task",
            resource_id=task_id,
            code=ErrorCode.FILE_NOT_FOUND,
        )

    return Response(
        content=download.data,
        media_type=download.content_type,
        headers={"Content-Disposition": content_disposition(download.file_name)},
    )
