"""Base schemas for common patterns."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are exposed to API consumers in camelCase (``slaHours``) while
    Python code keeps snake_case names.
    """

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,  # Validate on attribute assignment
    )
