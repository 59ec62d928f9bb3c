"""Enumerations for the social app."""

from social.enums.follow import FollowStatus, MentionPermission
from social.enums.health_status import HealthStatus
from social.enums.notification import (
    DeliveryChannel,
    NotificationType,
    RealtimeEventType,
)

__all__ = [
    "DeliveryChannel",
    "FollowStatus",
    "HealthStatus",
    "MentionPermission",
    "NotificationType",
    "RealtimeEventType",
]
