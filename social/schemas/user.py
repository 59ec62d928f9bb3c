"""User summary schema."""

from uuid import UUID

from pydantic import Field

from social.schemas.base_schema_model import BaseSchemaModel


class UserSummary(BaseSchemaModel):
    """Public identity of a user embedded in other payloads."""

    user_id: UUID = Field(..., description="User identifier")
    username: str = Field(..., description="Unique handle without the @")
    full_name: str = Field("", description="Display name")
