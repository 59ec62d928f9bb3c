"""Follow relationship enumerations."""

from enum import Enum


class FollowStatus(str, Enum):
    """Lifecycle state of a follow edge.

    Rejected requests are deleted rather than stored, so there is no
    REJECTED member.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"


class MentionPermission(str, Enum):
    """Who may mention a user in threads and replies."""

    EVERYONE = "everyone"
    FOLLOWERS = "followers"
    NOBODY = "nobody"
