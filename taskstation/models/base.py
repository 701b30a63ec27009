"""Base model class for SQLAlchemy models."""

import re

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Generate __tablename__ automatically from class name
    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Generate table name from class name (e.g., TaskDocument -> task_documents)."""
        snake_case = re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()
        # Simple pluralization (add 's', handle 'y' -> 'ies')
        if snake_case.endswith("y"):
            return snake_case[:-1] + "ies"
        return snake_case + "s"
