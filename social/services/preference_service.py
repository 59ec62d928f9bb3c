"""Read-only access to user notification and privacy settings."""

from uuid import UUID

import structlog
from pydantic import ValidationError

from social.enums import MentionPermission, NotificationType
from social.models import UserSettings
from social.schemas import DeliveryPreference

logger = structlog.get_logger(__name__)


class PreferenceService:
    """Reads per-type delivery flags and mention privacy from the settings store.

    Users without a settings row, and types or channels missing from the
    stored preferences, get every channel enabled.
    """

    def get_delivery_preferences(
        self, user_id: UUID | str
    ) -> dict[str, DeliveryPreference]:
        """Return delivery flags for every notification type.

        Args:
            user_id: User whose settings are read

        Returns:
            Mapping of notification type value to its DeliveryPreference
        """
        stored = (
            UserSettings.objects.filter(user_id=user_id)
            .values_list("notification_preferences", flat=True)
            .first()
        ) or {}

        preferences = {}
        for notification_type in NotificationType:
            raw = stored.get(notification_type.value) or {}
            try:
                preferences[notification_type.value] = DeliveryPreference.model_validate(
                    raw
                )
            except ValidationError:
                logger.warning(
                    "invalid_delivery_preference",
                    user_id=str(user_id),
                    notification_type=notification_type.value,
                )
                preferences[notification_type.value] = DeliveryPreference()
        return preferences

    def get_delivery_preference(
        self, user_id: UUID | str, notification_type: NotificationType | str
    ) -> DeliveryPreference:
        """Return delivery flags for one notification type."""
        return self.get_delivery_preferences(user_id)[
            NotificationType(notification_type).value
        ]

    def get_mention_permission(self, user_id: UUID | str) -> MentionPermission:
        """Return who may mention the user; ``everyone`` when unset."""
        value = (
            UserSettings.objects.filter(user_id=user_id)
            .values_list("who_can_mention_me", flat=True)
            .first()
        )
        try:
            return MentionPermission(value or MentionPermission.EVERYONE.value)
        except ValueError:
            logger.warning(
                "invalid_mention_permission", user_id=str(user_id), value=value
            )
            return MentionPermission.EVERYONE


preference_service = PreferenceService()
