"""User model."""

import uuid
from typing import ClassVar

from django.db import models


class User(models.Model):
    """User directory entry matching the users table.

    Profile fields are owned by the user service; this service only reads
    them and maintains the denormalized follower/following counters, always
    through single-statement ``F()`` updates.
    """

    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=50, unique=True)
    email = models.EmailField(max_length=255, blank=True, default="")
    full_name = models.CharField(max_length=255, default="", blank=True)
    is_private = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    followers_count = models.PositiveIntegerField(default=0)
    following_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    @property
    def display_name(self) -> str:
        """Name shown to other users."""
        return self.full_name or self.username

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"@{self.username}"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(user_id={self.user_id}, username='{self.username}')>"
