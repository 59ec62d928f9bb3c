"""Notification model.

One row per delivery-worthy event per recipient. Rows are only mutated by
the read operations; deletion is a user-initiated side operation.
"""

import uuid
from typing import ClassVar

from django.db import models

from social.enums import NotificationType


class Notification(models.Model):
    """A single notification for one recipient.

    Attributes:
        notification_id: Unique identifier for the notification.
        recipient: The user receiving this notification.
        sender: The user whose action triggered it (never the recipient).
        notification_type: One of NotificationType.
        thread_id: Thread the event refers to, if any.
        reply_id: Reply the event refers to, if any.
        is_read: Whether the recipient has read this notification.
        created_at: When the notification was created.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    recipient = models.ForeignKey(
        "social.User",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="recipient_id",
    )
    sender = models.ForeignKey(
        "social.User",
        on_delete=models.CASCADE,
        related_name="sent_notifications",
        db_column="sender_id",
    )
    notification_type = models.CharField(
        max_length=30,
        choices=[(t.value, t.value) for t in NotificationType],
    )
    thread_id = models.UUIDField(null=True, blank=True)
    reply_id = models.UUIDField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["recipient", "is_read", "-created_at"]),
            models.Index(fields=["recipient", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.notification_type} for user {self.recipient_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"type={self.notification_type}, "
            f"recipient={self.recipient_id}, "
            f"is_read={self.is_read})>"
        )
