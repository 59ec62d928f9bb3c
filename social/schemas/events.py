"""Request and response schemas for domain event ingestion."""

from typing import Literal
from uuid import UUID

from pydantic import Field, model_validator

from social.enums import NotificationType
from social.schemas.base_schema_model import BaseSchemaModel

ContentEventType = Literal[
    "thread_like",
    "reply_like",
    "thread_reply",
    "thread_repost",
]


class ContentEventRequest(BaseSchemaModel):
    """A like, reply or repost reported by the content service."""

    event_type: ContentEventType = Field(..., description="Kind of content event")
    recipient_id: UUID = Field(..., description="Author of the liked/replied content")
    sender_id: UUID = Field(..., description="User who acted")
    thread_id: UUID = Field(..., description="Thread the event belongs to")
    reply_id: UUID | None = Field(None, description="Reply involved, if any")

    @model_validator(mode="after")
    def check_reply_reference(self) -> "ContentEventRequest":
        """Reply likes and replies must reference the reply."""
        needs_reply = self.event_type in (
            NotificationType.REPLY_LIKE.value,
            NotificationType.THREAD_REPLY.value,
        )
        if needs_reply and self.reply_id is None:
            raise ValueError(f"reply_id is required for {self.event_type}")
        return self


class MentionEventRequest(BaseSchemaModel):
    """Newly published or edited content to scan for @mentions."""

    content: str = Field(..., max_length=10000)
    author_id: UUID
    thread_id: UUID | None = None


class BroadcastRequest(BaseSchemaModel):
    """Operational announcement pushed to every connected user."""

    message: str = Field(..., min_length=1, max_length=500)


class BatchNotificationResponse(BaseSchemaModel):
    """Notifications created for one ingested event."""

    notification_ids: list[UUID]
    created_count: int


class BroadcastResponse(BaseSchemaModel):
    """Outcome of a system broadcast."""

    delivered: int
    failed: int
