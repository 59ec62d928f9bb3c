"""Repository for user directory lookups and counter updates."""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import F
from django.db.models.functions import Greatest

from social.exceptions import NotFoundError
from social.models import User


class UserRepository:
    """Repository for encapsulating user database queries.

    Follower/following counters are only ever changed here, each with a
    single ``UPDATE ... SET count = count + n`` statement so concurrent
    follow transitions for the same user never lose an update.
    """

    @staticmethod
    def get_user(user_id: UUID | str) -> User:
        """Look up a user by id.

        Args:
            user_id: UUID of the user

        Returns:
            The User instance

        Raises:
            NotFoundError: If no user has that id
        """
        try:
            return User.objects.get(user_id=user_id)
        except (User.DoesNotExist, ValidationError) as e:
            raise NotFoundError("User not found", detail=str(user_id)) from e

    @staticmethod
    def get_users_by_usernames(usernames: list[str]) -> dict[str, User]:
        """Batch lookup users by exact username.

        Args:
            usernames: Handles without the leading ``@``

        Returns:
            Mapping of username to User for the handles that exist. Lookups
            are case-sensitive, so ``Alice`` does not resolve ``alice``.
        """
        if not usernames:
            return {}
        users = User.objects.filter(username__in=usernames)
        return {user.username: user for user in users if user.username in usernames}

    @staticmethod
    def increment_follow_counters(follower_id: UUID | str, following_id: UUID | str):
        """Count a newly accepted edge on both users."""
        User.objects.filter(user_id=follower_id).update(
            following_count=F("following_count") + 1
        )
        User.objects.filter(user_id=following_id).update(
            followers_count=F("followers_count") + 1
        )

    @staticmethod
    def decrement_follow_counters(follower_id: UUID | str, following_id: UUID | str):
        """Uncount a removed accepted edge on both users, never below zero."""
        User.objects.filter(user_id=follower_id).update(
            following_count=Greatest(F("following_count") - 1, 0)
        )
        User.objects.filter(user_id=following_id).update(
            followers_count=Greatest(F("followers_count") - 1, 0)
        )
