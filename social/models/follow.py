"""Follow model."""

from typing import ClassVar

from django.db import models

from social.enums import FollowStatus


class Follow(models.Model):
    """Directed follow edge ``follower -> following``.

    At most one edge exists per ordered pair and a user never follows
    themselves. Edges to public accounts are created ``accepted``; edges to
    private accounts start ``pending`` until the followed user accepts.
    """

    follower = models.ForeignKey(
        "social.User",
        on_delete=models.CASCADE,
        related_name="following_edges",
        db_column="follower_id",
    )
    following = models.ForeignKey(
        "social.User",
        on_delete=models.CASCADE,
        related_name="follower_edges",
        db_column="following_id",
    )
    status = models.CharField(
        max_length=10,
        choices=[(s.value, s.value) for s in FollowStatus],
        default=FollowStatus.PENDING.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "follows"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["follower", "following"],
                name="follows_unique_pair",
            ),
            models.CheckConstraint(
                condition=~models.Q(follower=models.F("following")),
                name="follows_no_self_follow",
            ),
        ]
        indexes: ClassVar[list] = [
            models.Index(fields=["following", "status", "-created_at"]),
            models.Index(fields=["follower", "status", "-created_at"]),
        ]

    @property
    def is_accepted(self) -> bool:
        """Whether the edge counts towards follower/following totals."""
        return self.status == FollowStatus.ACCEPTED.value

    def __str__(self) -> str:
        """Return string representation of follow relationship."""
        return f"{self.follower_id} -> {self.following_id} ({self.status})"

    def __repr__(self) -> str:
        """Return detailed representation of follow relationship."""
        return (
            f"<Follow(follower={self.follower_id}, "
            f"following={self.following_id}, status={self.status})>"
        )
