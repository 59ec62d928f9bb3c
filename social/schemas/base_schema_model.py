"""Base pydantic model for centralized configuration of schema definitions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model shared by every schema in the service.

    Accepts both snake_case and camelCase input, reads ORM instances
    directly and stores enum members as their values.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
