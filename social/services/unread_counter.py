"""Per-user unread notification counter."""

from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import F
from django.db.models.functions import Greatest

from social.models import UnreadCounter


class UnreadCounterService:
    """Maintains ``UnreadCounter`` rows with single-statement updates.

    Every method is meant to run inside the transaction of the operation
    that caused the change (notification created, read, deleted).
    """

    def get(self, user_id: UUID | str) -> int:
        """Return the current unread count (0 when no row exists)."""
        count = (
            UnreadCounter.objects.filter(user_id=user_id)
            .values_list("unread_count", flat=True)
            .first()
        )
        return count or 0

    def increment(self, user_id: UUID | str) -> int:
        """Add one unread notification and return the new count."""
        updated = UnreadCounter.objects.filter(user_id=user_id).update(
            unread_count=F("unread_count") + 1
        )
        if not updated:
            try:
                with transaction.atomic():
                    UnreadCounter.objects.create(user_id=user_id, unread_count=1)
            except IntegrityError:
                # Row was created concurrently
                UnreadCounter.objects.filter(user_id=user_id).update(
                    unread_count=F("unread_count") + 1
                )
        return self.get(user_id)

    def decrement(self, user_id: UUID | str) -> int:
        """Remove one unread notification, never going below zero."""
        UnreadCounter.objects.filter(user_id=user_id).update(
            unread_count=Greatest(F("unread_count") - 1, 0)
        )
        return self.get(user_id)

    def reset(self, user_id: UUID | str) -> int:
        """Set the count to zero."""
        UnreadCounter.objects.filter(user_id=user_id).update(unread_count=0)
        return 0


unread_counter_service = UnreadCounterService()
