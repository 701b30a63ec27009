"""Task document model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskstation.models.base import Base


class TaskDocument(Base):
    """Stored form of a task.

    The four file columns hold at most one storage mode at a time:
    ``file_url`` for object-store references, or ``file_data``,
    ``file_name`` and ``file_content_type`` for inline files.

    Attributes:
        id: Identifier (UUID4 hex) assigned on insert.
        title: Trimmed task title.
        description: Optional notes.
        created_at: Creation time (UTC).
        sla_hours: Time budget in hours.
        due_date: ``created_at + sla_hours``, kept as a column for overdue queries.
        status: PENDING, DONE or OVERDUE.
    """

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    sla_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    file_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    file_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)

    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    file_content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<TaskDocument {self.title[:30]}>"
