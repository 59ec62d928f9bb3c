"""Pydantic schemas for the social graph service."""

from social.schemas.base_schema_model import BaseSchemaModel
from social.schemas.events import (
    BatchNotificationResponse,
    BroadcastRequest,
    BroadcastResponse,
    ContentEventRequest,
    MentionEventRequest,
)
from social.schemas.follow import (
    FollowActionResponse,
    FollowEdgeDetail,
    FollowResponse,
    FollowStatusResponse,
)
from social.schemas.health import DependencyHealth, LivenessResponse, ReadinessResponse
from social.schemas.notification import (
    MarkAllReadResponse,
    NotificationDetail,
    NotificationEvent,
    NotificationStatsResponse,
    NotificationTypeStats,
    UnreadCountResponse,
)
from social.schemas.preferences import DeliveryPreference
from social.schemas.realtime import RealtimeMessage
from social.schemas.user import UserSummary

__all__ = [
    "BaseSchemaModel",
    "BatchNotificationResponse",
    "BroadcastRequest",
    "BroadcastResponse",
    "ContentEventRequest",
    "DeliveryPreference",
    "DependencyHealth",
    "FollowActionResponse",
    "FollowEdgeDetail",
    "FollowResponse",
    "FollowStatusResponse",
    "LivenessResponse",
    "MarkAllReadResponse",
    "MentionEventRequest",
    "NotificationDetail",
    "NotificationEvent",
    "NotificationStatsResponse",
    "NotificationTypeStats",
    "ReadinessResponse",
    "RealtimeMessage",
    "UnreadCountResponse",
    "UserSummary",
]
