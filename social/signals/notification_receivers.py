"""Receivers turning domain events into notifications."""

from django.dispatch import receiver

import structlog

from social.enums import NotificationType
from social.schemas import NotificationEvent
from social.services.notification_service import notification_service
from social.signals.events import (
    content_published,
    follow_accepted,
    follow_requested,
    new_follower,
    reply_liked,
    thread_liked,
    thread_replied,
    thread_reposted,
)

logger = structlog.get_logger(__name__)


@receiver(follow_requested)
def notify_follow_request(sender, follower_id, target_id, **_kwargs):
    """Tell a private account owner that someone asked to follow them."""
    return notification_service.create_notification(
        NotificationEvent(
            recipient_id=target_id,
            sender_id=follower_id,
            notification_type=NotificationType.FOLLOW_REQUEST,
        )
    )


@receiver(new_follower)
def notify_new_follower(sender, follower_id, target_id, **_kwargs):
    return notification_service.create_notification(
        NotificationEvent(
            recipient_id=target_id,
            sender_id=follower_id,
            notification_type=NotificationType.NEW_FOLLOWER,
        )
    )


@receiver(follow_accepted)
def notify_follow_accepted(sender, follower_id, target_id, **_kwargs):
    """The original requester is told; the accepting user is the sender."""
    return notification_service.create_notification(
        NotificationEvent(
            recipient_id=follower_id,
            sender_id=target_id,
            notification_type=NotificationType.FOLLOW_ACCEPTED,
        )
    )


def _content_notification(notification_type, recipient_id, sender_id, thread_id, reply_id):
    return notification_service.create_notification(
        NotificationEvent(
            recipient_id=recipient_id,
            sender_id=sender_id,
            notification_type=notification_type,
            thread_id=thread_id,
            reply_id=reply_id,
        )
    )


@receiver(thread_liked)
def notify_thread_liked(sender, recipient_id, sender_id, thread_id, reply_id=None, **_kwargs):
    return _content_notification(
        NotificationType.THREAD_LIKE, recipient_id, sender_id, thread_id, reply_id
    )


@receiver(reply_liked)
def notify_reply_liked(sender, recipient_id, sender_id, thread_id, reply_id=None, **_kwargs):
    return _content_notification(
        NotificationType.REPLY_LIKE, recipient_id, sender_id, thread_id, reply_id
    )


@receiver(thread_replied)
def notify_thread_replied(
    sender, recipient_id, sender_id, thread_id, reply_id=None, **_kwargs
):
    return _content_notification(
        NotificationType.THREAD_REPLY, recipient_id, sender_id, thread_id, reply_id
    )


@receiver(thread_reposted)
def notify_thread_reposted(
    sender, recipient_id, sender_id, thread_id, reply_id=None, **_kwargs
):
    return _content_notification(
        NotificationType.THREAD_REPOST, recipient_id, sender_id, thread_id, reply_id
    )


@receiver(content_published)
def notify_mentioned_users(sender, author_id, content, thread_id=None, **_kwargs):
    """Fan one published post out to every user it mentions."""
    notifications = notification_service.create_mention_notifications(
        content, author_id, thread_id
    )
    logger.debug(
        "content_published_processed",
        author_id=str(author_id),
        mentions=len(notifications),
    )
    return notifications
