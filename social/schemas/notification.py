"""Notification schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from social.enums import NotificationType
from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.user import UserSummary


class NotificationEvent(BaseSchemaModel):
    """Input to the notification engine: one event for one recipient."""

    recipient_id: UUID
    sender_id: UUID
    notification_type: NotificationType
    thread_id: UUID | None = None
    reply_id: UUID | None = None


class NotificationDetail(BaseSchemaModel):
    """A persisted notification as exposed to clients and pushed live."""

    notification_id: UUID
    recipient_id: UUID
    sender: UserSummary
    notification_type: NotificationType
    thread_id: UUID | None = None
    reply_id: UUID | None = None
    is_read: bool
    created_at: datetime


class UnreadCountResponse(BaseSchemaModel):
    """Unread notification count for the current user."""

    count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseSchemaModel):
    """Result of marking every notification as read."""

    updated_count: int = Field(..., ge=0)
    unread_count: int = Field(0, ge=0)


class NotificationTypeStats(BaseSchemaModel):
    """Totals for one notification type."""

    notification_type: NotificationType
    total: int
    unread: int


class NotificationStatsResponse(BaseSchemaModel):
    """Per-type notification statistics for a user."""

    stats: list[NotificationTypeStats]
