"""Per-user unread notification counter."""

from django.db import models


class UnreadCounter(models.Model):
    """Denormalized count of a user's unread notifications.

    Written only through the UnreadCounterService so that every change is a
    single-row ``F()`` update attributed to one triggering operation.
    """

    user = models.OneToOneField(
        "social.User",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="unread_counter",
        db_column="user_id",
    )
    unread_count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_unread_counters"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the counter."""
        return f"{self.user_id}: {self.unread_count} unread"
