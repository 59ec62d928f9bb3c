"""Tests for PreferenceService."""

import pytest

from social.enums import DeliveryChannel, MentionPermission, NotificationType
from social.models import UserSettings
from social.services.preference_service import PreferenceService
from tests.factories import create_settings, create_user


@pytest.mark.django_db
class TestPreferenceService:
    """Test suite for PreferenceService."""

    @pytest.fixture
    def service(self):
        return PreferenceService()

    def test_user_without_settings_gets_everything_enabled(self, service):
        user = create_user()

        preferences = service.get_delivery_preferences(user.user_id)

        assert set(preferences) == {t.value for t in NotificationType}
        for preference in preferences.values():
            assert preference.email and preference.push and preference.in_app

    def test_stored_flags_override_defaults(self, service):
        user = create_user()
        create_settings(
            user,
            notification_preferences={"thread_like": {"email": False, "in_app": False}},
        )

        preference = service.get_delivery_preference(user.user_id, "thread_like")

        assert preference.email is False
        assert preference.in_app is False
        assert preference.push is True

    def test_camel_case_keys_are_accepted(self, service):
        user = create_user()
        create_settings(
            user, notification_preferences={"mention": {"inApp": False}}
        )

        assert not service.get_delivery_preference(
            user.user_id, NotificationType.MENTION
        ).allows(DeliveryChannel.IN_APP)

    def test_malformed_entry_falls_back_to_enabled(self, service):
        user = create_user()
        create_settings(
            user, notification_preferences={"reply_like": {"email": "sometimes"}}
        )

        assert service.get_delivery_preference(
            user.user_id, NotificationType.REPLY_LIKE
        ).allows(DeliveryChannel.EMAIL)

    def test_mention_permission_defaults_to_everyone(self, service):
        user = create_user()

        assert service.get_mention_permission(user.user_id) == MentionPermission.EVERYONE

    def test_mention_permission_is_read(self, service):
        user = create_user()
        create_settings(user, who_can_mention_me=MentionPermission.NOBODY)

        assert service.get_mention_permission(user.user_id) == MentionPermission.NOBODY

    def test_unknown_mention_permission_falls_back_to_everyone(self, service):
        user = create_user()
        UserSettings.objects.create(user=user, who_can_mention_me="friends")

        assert service.get_mention_permission(user.user_id) == MentionPermission.EVERYONE
