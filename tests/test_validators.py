"""Tests for create and update input validators."""

import io

import pytest

from taskstation.core.exceptions import ValidationError
from taskstation.schemas.task import FileUpload, TaskCreate, TaskUpdate
from taskstation.services.validators import (
    MAX_FILE_SIZE_BYTES,
    CreateTaskValidator,
    UpdateTaskValidator,
    has_allowed_extension,
)


def make_upload(file_name: str = "notes.txt", size: int = 3) -> FileUpload:
    """Build an upload whose declared size may differ from its content."""
    return FileUpload(
        file_name=file_name,
        content_type="text/plain",
        size=size,
        stream=io.BytesIO(b"abc"),
    )


def fields_of(exc: ValidationError) -> list[str]:
    return [d["field"] for d in exc.details or []]


@pytest.mark.parametrize(
    "file_name",
    ["a.pdf", "a.PNG", "photo.jpg", "photo.JPEG", "b.docx", "c.xlsx", "d.txt", "e.zip"],
)
def test_allowed_extensions(file_name: str) -> None:
    """Test that every listed extension passes regardless of case."""
    assert has_allowed_extension(file_name)


@pytest.mark.parametrize("file_name", ["run.exe", "script.sh", "noextension", "archive.tar.gz"])
def test_rejected_extensions(file_name: str) -> None:
    """Test that unlisted extensions are rejected."""
    assert not has_allowed_extension(file_name)


class TestCreateTaskValidator:
    """Creation rules."""

    validator = CreateTaskValidator()

    @pytest.mark.parametrize("sla_hours", [1, 720, 721, 8760])
    def test_valid_sla(self, sla_hours: int) -> None:
        self.validator.validate(TaskCreate(title="Task", sla_hours=sla_hours))

    def test_sla_above_one_year(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskCreate(title="Task", sla_hours=8761))
        assert exc_info.value.messages == ["SLA hours must not exceed 8760 (1 year)."]

    def test_sla_zero(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskCreate(title="Task", sla_hours=0))
        assert exc_info.value.messages == ["SLA hours must be greater than zero."]

    def test_title_boundaries(self) -> None:
        self.validator.validate(TaskCreate(title="x" * 200, sla_hours=1))
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskCreate(title="x" * 201, sla_hours=1))
        assert fields_of(exc_info.value) == ["title"]

    def test_blank_title(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskCreate(title="   ", sla_hours=1))
        assert exc_info.value.messages == ["Title is required."]

    def test_all_failures_reported_together(self) -> None:
        data = TaskCreate(
            title="",
            sla_hours=-1,
            file=make_upload("virus.exe", size=MAX_FILE_SIZE_BYTES + 1),
        )
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(data)

        error = exc_info.value
        assert error.message == "One or more validation errors occurred."
        assert fields_of(error) == ["title", "slaHours", "file", "file"]

    def test_file_at_size_limit(self) -> None:
        data = TaskCreate(title="Task", sla_hours=1, file=make_upload(size=MAX_FILE_SIZE_BYTES))
        self.validator.validate(data)

    def test_file_over_size_limit(self) -> None:
        data = TaskCreate(
            title="Task", sla_hours=1, file=make_upload(size=MAX_FILE_SIZE_BYTES + 1)
        )
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(data)
        assert exc_info.value.messages == ["File size must not exceed 10 MB."]

    def test_file_extension_message_lists_allowed(self) -> None:
        data = TaskCreate(title="Task", sla_hours=1, file=make_upload("run.exe"))
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(data)
        assert ".pdf" in exc_info.value.messages[0]
        assert ".zip" in exc_info.value.messages[0]


class TestUpdateTaskValidator:
    """Update rules, with the tighter SLA ceiling."""

    validator = UpdateTaskValidator()

    @pytest.mark.parametrize("status", ["PENDING", "DONE", "done", " Pending "])
    def test_valid_status(self, status: str) -> None:
        self.validator.validate(TaskUpdate(title="Task", sla_hours=1, status=status))

    def test_sla_720_allowed(self) -> None:
        self.validator.validate(TaskUpdate(title="Task", sla_hours=720, status="DONE"))

    def test_sla_721_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskUpdate(title="Task", sla_hours=721, status="DONE"))
        assert exc_info.value.messages == ["SlaHours cannot exceed 720 (30 days)"]

    def test_sla_zero_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskUpdate(title="Task", sla_hours=0, status="DONE"))
        assert exc_info.value.messages == ["SlaHours must be greater than 0"]

    def test_overdue_not_accepted(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskUpdate(title="Task", sla_hours=1, status="OVERDUE"))
        assert exc_info.value.messages == ["Status must be either PENDING or DONE"]

    def test_missing_status(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskUpdate(title="Task", sla_hours=1, status=""))
        assert exc_info.value.messages == ["Status is required"]

    def test_all_failures_reported_together(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            self.validator.validate(TaskUpdate(title="x" * 201, sla_hours=1000, status="LATER"))
        assert fields_of(exc_info.value) == ["title", "slaHours", "status"]
