"""Notification-related enumerations.

This module contains the closed set of notification types, the delivery
channels a user can toggle per type, and the event names of the realtime
wire contract.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Kinds of events that become a notification for one recipient."""

    # Social graph events
    FOLLOW_REQUEST = "follow_request"
    FOLLOW_ACCEPTED = "follow_accepted"
    NEW_FOLLOWER = "new_follower"

    # Content events
    THREAD_LIKE = "thread_like"
    REPLY_LIKE = "reply_like"
    THREAD_REPLY = "thread_reply"
    THREAD_REPOST = "thread_repost"
    MENTION = "mention"


class DeliveryChannel(str, Enum):
    """Delivery channels that can be toggled per notification type."""

    EMAIL = "email"
    PUSH = "push"
    IN_APP = "in_app"


class RealtimeEventType(str, Enum):
    """Event names observed by connected clients."""

    NEW_NOTIFICATION = "new_notification"
    UNREAD_COUNT = "unread_count"
    SYSTEM_NOTIFICATION = "system_notification"
