"""Follow relationship schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from social.enums import FollowStatus
from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.user import UserSummary


class FollowResponse(BaseSchemaModel):
    """A follow edge as returned to callers."""

    follower_id: UUID = Field(..., description="User who follows")
    following_id: UUID = Field(..., description="User being followed")
    status: FollowStatus = Field(..., description="pending or accepted")
    created_at: datetime = Field(..., description="When the edge was created")


class FollowEdgeDetail(FollowResponse):
    """A follow edge with both users expanded, used by list endpoints."""

    follower: UserSummary
    following: UserSummary


class FollowStatusResponse(BaseSchemaModel):
    """Relationship of a viewer to a target, used for profile authorization."""

    is_following: bool = Field(..., description="Whether any edge exists")
    status: FollowStatus | None = Field(
        None, description="Edge status, or null when no edge exists"
    )


class FollowActionResponse(BaseSchemaModel):
    """Result of a follow state transition."""

    message: str
    follow: FollowResponse | None = None
