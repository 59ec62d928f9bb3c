"""Domain events and the receivers that turn them into notifications."""

from social.signals import notification_receivers
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

__all__ = [
    "content_published",
    "follow_accepted",
    "follow_requested",
    "new_follower",
    "notification_receivers",
    "reply_liked",
    "thread_liked",
    "thread_replied",
    "thread_reposted",
]
