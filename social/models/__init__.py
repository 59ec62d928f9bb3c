"""Database models for the social app."""

from social.models.follow import Follow
from social.models.notification import Notification
from social.models.unread_counter import UnreadCounter
from social.models.user import User
from social.models.user_settings import UserSettings

__all__ = ["Follow", "Notification", "UnreadCounter", "User", "UserSettings"]
