"""User settings model (read-only for this service)."""

from django.db import models

from social.enums import MentionPermission


class UserSettings(models.Model):
    """Privacy and notification settings owned by the settings service.

    ``notification_preferences`` maps a notification type to channel flags,
    e.g. ``{"thread_like": {"email": false, "push": true, "in_app": true}}``.
    Missing types or channels default to enabled.
    """

    user = models.OneToOneField(
        "social.User",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="settings",
        db_column="user_id",
    )
    who_can_mention_me = models.CharField(
        max_length=10,
        choices=[(p.value, p.value) for p in MentionPermission],
        default=MentionPermission.EVERYONE.value,
    )
    notification_preferences = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "user_settings"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the settings row."""
        return f"Settings for {self.user_id}"
