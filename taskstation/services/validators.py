"""Request validators for task creation and update.

Each validator runs every rule and reports all failures at once through a
single ``ValidationError``. The create and update paths keep separate SLA
ceilings (8760 and 720 hours).
"""

from pathlib import PurePath

from taskstation.core.exceptions import ValidationError
from taskstation.domain.task import MAX_TITLE_LENGTH, TaskStatus
from taskstation.schemas.task import TaskCreate, TaskUpdate

ALLOWED_EXTENSIONS = (".pdf", ".png", ".jpg", ".jpeg", ".docx", ".xlsx", ".txt", ".zip")
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB

CREATE_MAX_SLA_HOURS = 8760  # 1 year
UPDATE_MAX_SLA_HOURS = 720  # 30 days

UPDATABLE_STATUSES = (TaskStatus.PENDING, TaskStatus.DONE)


def has_allowed_extension(file_name: str) -> bool:
    """Check the file extension against the allow-list, ignoring case."""
    extension = PurePath(file_name).suffix.lower()
    return extension in ALLOWED_EXTENSIONS


class _Errors:
    def __init__(self) -> None:
        self.details: list[dict[str, str]] = []

    def add(self, field: str, message: str) -> None:
        self.details.append({"field": field, "message": message})

    def raise_if_any(self) -> None:
        if self.details:
            raise ValidationError("One or more validation errors occurred.", details=self.details)


class CreateTaskValidator:
    """Rules for ``TaskCreate``."""

    def validate(self, data: TaskCreate) -> None:
        """Validate creation input.

        Raises:
            ValidationError: With one detail per failed rule.
        """
        errors = _Errors()

        if not data.title or not data.title.strip():
            errors.add("title", "Title is required.")
        elif len(data.title) > MAX_TITLE_LENGTH:
            errors.add("title", f"Title must not exceed {MAX_TITLE_LENGTH} characters.")

        if data.sla_hours <= 0:
            errors.add("slaHours", "SLA hours must be greater than zero.")
        elif data.sla_hours > CREATE_MAX_SLA_HOURS:
            errors.add("slaHours", f"SLA hours must not exceed {CREATE_MAX_SLA_HOURS} (1 year).")

        if data.file is not None:
            if data.file.size > MAX_FILE_SIZE_BYTES:
                errors.add(
                    "file",
                    f"File size must not exceed {MAX_FILE_SIZE_BYTES // (1024 * 1024)} MB.",
                )
            if not has_allowed_extension(data.file.file_name):
                errors.add("file", f"Allowed file extensions: {', '.join(ALLOWED_EXTENSIONS)}")

        errors.raise_if_any()


class UpdateTaskValidator:
    """Rules for ``TaskUpdate``."""

    def validate(self, data: TaskUpdate) -> None:
        """Validate update input.

        Raises:
            ValidationError: With one detail per failed rule.
        """
        errors = _Errors()

        if not data.title or not data.title.strip():
            errors.add("title", "Title is required")
        elif len(data.title) > MAX_TITLE_LENGTH:
            errors.add("title", f"Title cannot exceed {MAX_TITLE_LENGTH} characters")

        if data.sla_hours <= 0:
            errors.add("slaHours", "SlaHours must be greater than 0")
        elif data.sla_hours > UPDATE_MAX_SLA_HOURS:
            errors.add("slaHours", f"SlaHours cannot exceed {UPDATE_MAX_SLA_HOURS} (30 days)")

        if not data.status or not data.status.strip():
            errors.add("status", "Status is required")
        elif data.status.strip().upper() not in UPDATABLE_STATUSES:
            errors.add("status", "Status must be either PENDING or DONE")

        errors.raise_if_any()
