"""Factory helpers for test data generation."""

from faker import Faker

from social.enums import FollowStatus, MentionPermission, NotificationType
from social.models import Follow, Notification, User, UserSettings

fake = Faker()


def create_user(**overrides) -> User:
    """Create a user with realistic fake profile data."""
    username = overrides.pop("username", None) or (
        f"{fake.first_name().lower()}_{fake.unique.random_int(10000, 99999)}"
    )
    defaults = {
        "username": username,
        "email": fake.unique.email(),
        "full_name": fake.name(),
        "is_private": False,
    }
    defaults.update(overrides)
    return User.objects.create(**defaults)


def create_follow(follower: User, following: User, status=FollowStatus.ACCEPTED) -> Follow:
    """Create an edge directly, keeping the counters consistent."""
    follow = Follow.objects.create(
        follower=follower, following=following, status=FollowStatus(status).value
    )
    if follow.is_accepted:
        follower.following_count += 1
        follower.save(update_fields=["following_count"])
        following.followers_count += 1
        following.save(update_fields=["followers_count"])
    return follow


def create_notification(
    recipient: User,
    sender: User,
    notification_type=NotificationType.THREAD_LIKE,
    **overrides,
) -> Notification:
    """Create a notification row without going through the engine."""
    return Notification.objects.create(
        recipient=recipient,
        sender=sender,
        notification_type=NotificationType(notification_type).value,
        **overrides,
    )


def create_settings(
    user: User,
    notification_preferences: dict | None = None,
    who_can_mention_me=MentionPermission.EVERYONE,
) -> UserSettings:
    """Create the settings row of a user."""
    return UserSettings.objects.create(
        user=user,
        notification_preferences=notification_preferences or {},
        who_can_mention_me=MentionPermission(who_can_mention_me).value,
    )
