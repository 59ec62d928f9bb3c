"""Notification engine.

Decides whether a domain event becomes a persisted notification, keeps the
unread counter in step with it, and hands the result to the realtime
dispatcher and the email queue once the write has committed.
"""

from datetime import timedelta
from functools import partial
from typing import Any
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

import django_rq
import structlog
from rq import Retry

from social.constants import EMAIL_SNIPPET_MAX_LENGTH
from social.enums import DeliveryChannel, FollowStatus, MentionPermission, NotificationType
from social.exceptions import ForbiddenError, NotFoundError
from social.models import Follow, Notification, User
from social.realtime.dispatcher import RealtimeDispatcher, realtime_dispatcher
from social.repositories import UserRepository
from social.schemas import NotificationDetail, NotificationEvent, NotificationTypeStats
from social.services.mention_resolver import detect_mentions
from social.services.preference_service import PreferenceService, preference_service
from social.services.unread_counter import UnreadCounterService, unread_counter_service

logger = structlog.get_logger(__name__)


class NotificationService:
    """Creates, reads and removes notifications for one recipient at a time.

    All writes run in one atomic block together with their unread counter
    change. Live pushes and email jobs are registered with
    ``transaction.on_commit`` so they only happen for committed rows, in the
    order the operations completed, and their failures are logged without
    affecting the stored notification.
    """

    def __init__(
        self,
        dispatcher: RealtimeDispatcher | None = None,
        unread_counter: UnreadCounterService | None = None,
        preferences: PreferenceService | None = None,
    ) -> None:
        """Initialize notification service."""
        self.dispatcher = dispatcher or realtime_dispatcher
        self.unread_counter = unread_counter or unread_counter_service
        self.preferences = preferences or preference_service
        self._queue = None

    @property
    def queue(self):
        """django-rq queue used for email jobs, resolved on first use."""
        if self._queue is None:
            self._queue = django_rq.get_queue("default")
        return self._queue

    def create_notification(
        self, event: NotificationEvent, email_extra: str | None = None
    ) -> Notification | None:
        """Materialize one event as a notification for its recipient.

        Args:
            event: Recipient, sender, type and optional thread/reply ids.
            email_extra: Optional content snippet quoted in the email body.

        Returns:
            The new notification; the existing one when an identical
            notification was created within the dedup window; None when the
            event was skipped (self-notification or opted out).

        Raises:
            NotFoundError: If the recipient or sender does not exist.
        """
        recipient_id = str(event.recipient_id)
        sender_id = str(event.sender_id)
        notification_type = NotificationType(event.notification_type)

        if recipient_id == sender_id:
            logger.debug(
                "notification_skipped_self",
                user_id=recipient_id,
                notification_type=notification_type.value,
            )
            return None

        preference = self.preferences.get_delivery_preference(
            recipient_id, notification_type
        )
        always_on = notification_type.value in settings.SOCIAL_ALWAYS_DELIVER_TYPES
        if not always_on and not preference.allows(DeliveryChannel.IN_APP):
            logger.info(
                "notification_skipped_by_preference",
                recipient_id=recipient_id,
                notification_type=notification_type.value,
            )
            return None

        recipient = UserRepository.get_user(recipient_id)
        sender = UserRepository.get_user(sender_id)

        with transaction.atomic():
            duplicate = self._find_recent_duplicate(event)
            if duplicate is not None:
                logger.info(
                    "notification_deduplicated",
                    notification_id=str(duplicate.notification_id),
                    recipient_id=recipient_id,
                    notification_type=notification_type.value,
                )
                return duplicate

            notification = Notification.objects.create(
                recipient=recipient,
                sender=sender,
                notification_type=notification_type.value,
                thread_id=event.thread_id,
                reply_id=event.reply_id,
            )
            unread_count = self.unread_counter.increment(recipient_id)

            transaction.on_commit(
                partial(
                    self._deliver,
                    notification,
                    unread_count,
                    push=always_on or preference.allows(DeliveryChannel.PUSH),
                    email=preference.allows(DeliveryChannel.EMAIL),
                    email_extra=email_extra,
                )
            )

        logger.info(
            "notification_created",
            notification_id=str(notification.notification_id),
            recipient_id=recipient_id,
            sender_id=sender_id,
            notification_type=notification_type.value,
        )
        return notification

    def create_mention_notifications(
        self,
        content: str | None,
        author_id: UUID | str,
        thread_id: UUID | str | None = None,
    ) -> list[Notification]:
        """Notify every user mentioned in ``content``.

        Handles that match no username, the author, and users whose mention
        setting excludes the author are skipped silently.

        Returns:
            Notifications created (or deduplicated), one per recipient.
        """
        handles = detect_mentions(content)
        if not handles:
            return []

        author_id = str(author_id)
        users = UserRepository.get_users_by_usernames(handles)
        snippet = (content or "")[:EMAIL_SNIPPET_MAX_LENGTH]

        notifications = []
        seen: set[str] = set()
        for handle in handles:
            user = users.get(handle)
            if user is None:
                logger.debug("mention_unresolved", handle=handle)
                continue

            recipient_id = str(user.user_id)
            if recipient_id == author_id or recipient_id in seen:
                continue
            seen.add(recipient_id)

            if not self.can_mention(author_id, user):
                logger.info(
                    "mention_blocked_by_privacy",
                    author_id=author_id,
                    recipient_id=recipient_id,
                )
                continue

            notification = self.create_notification(
                NotificationEvent(
                    recipient_id=user.user_id,
                    sender_id=author_id,
                    notification_type=NotificationType.MENTION,
                    thread_id=thread_id,
                ),
                email_extra=snippet,
            )
            if notification is not None:
                notifications.append(notification)

        logger.info(
            "mention_notifications_created",
            author_id=author_id,
            handles=len(handles),
            created=len(notifications),
        )
        return notifications

    def can_mention(self, author_id: UUID | str, user: User) -> bool:
        """Apply the mentioned user's ``who_can_mention_me`` setting."""
        permission = self.preferences.get_mention_permission(user.user_id)
        if permission == MentionPermission.EVERYONE:
            return True
        if permission == MentionPermission.NOBODY:
            return False
        return Follow.objects.filter(
            follower_id=author_id,
            following_id=user.user_id,
            status=FollowStatus.ACCEPTED.value,
        ).exists()

    def list_notifications(
        self, user_id: UUID | str, unread_only: bool = False
    ) -> QuerySet[Notification]:
        """Notifications of a user, newest first."""
        queryset = Notification.objects.filter(recipient_id=user_id)
        if unread_only:
            queryset = queryset.filter(is_read=False)
        return queryset.select_related("sender").order_by("-created_at")

    def get_unread_count(self, user_id: UUID | str) -> int:
        return self.unread_counter.get(user_id)

    def get_notification_stats(self, user_id: UUID | str) -> list[NotificationTypeStats]:
        """Total and unread counts per notification type."""
        rows = (
            Notification.objects.filter(recipient_id=user_id)
            .values("notification_type")
            .annotate(
                total=Count("notification_id"),
                unread=Count("notification_id", filter=Q(is_read=False)),
            )
            .order_by("notification_type")
        )
        return [NotificationTypeStats.model_validate(row) for row in rows]

    def mark_read(self, notification_id: UUID | str, user_id: UUID | str) -> Notification:
        """Mark one notification read; a no-op if it already is.

        Raises:
            NotFoundError: If the notification does not exist.
            ForbiddenError: If it belongs to another user.
        """
        notification = self._get_owned_notification(notification_id, user_id)

        with transaction.atomic():
            updated = Notification.objects.filter(
                notification_id=notification.notification_id, is_read=False
            ).update(is_read=True)
            if updated:
                unread_count = self.unread_counter.decrement(user_id)
                transaction.on_commit(
                    partial(self._push_unread_count, str(user_id), unread_count)
                )

        notification.is_read = True
        logger.info(
            "notification_marked_read",
            notification_id=str(notification.notification_id),
            user_id=str(user_id),
            transitioned=bool(updated),
        )
        return notification

    def mark_all_read(self, user_id: UUID | str) -> int:
        """Mark every unread notification of the user read.

        Returns:
            Number of notifications that changed state.
        """
        with transaction.atomic():
            updated = Notification.objects.filter(
                recipient_id=user_id, is_read=False
            ).update(is_read=True)
            self.unread_counter.reset(user_id)
            transaction.on_commit(partial(self._push_unread_count, str(user_id), 0))

        logger.info("notifications_marked_all_read", user_id=str(user_id), updated=updated)
        return updated

    def delete_notification(self, notification_id: UUID | str, user_id: UUID | str) -> None:
        """Delete one notification owned by the user.

        Raises:
            NotFoundError: If the notification does not exist.
            ForbiddenError: If it belongs to another user.
        """
        notification = self._get_owned_notification(notification_id, user_id)

        with transaction.atomic():
            deleted, _ = Notification.objects.filter(
                notification_id=notification.notification_id
            ).delete()
            if deleted and not notification.is_read:
                unread_count = self.unread_counter.decrement(user_id)
                transaction.on_commit(
                    partial(self._push_unread_count, str(user_id), unread_count)
                )

        logger.info(
            "notification_deleted",
            notification_id=str(notification.notification_id),
            user_id=str(user_id),
        )

    def delete_all_notifications(self, user_id: UUID | str) -> int:
        """Delete every notification of the user and reset the counter.

        Returns:
            Number of notifications deleted.
        """
        with transaction.atomic():
            deleted, _ = Notification.objects.filter(recipient_id=user_id).delete()
            self.unread_counter.reset(user_id)
            transaction.on_commit(partial(self._push_unread_count, str(user_id), 0))

        logger.info("notifications_cleared", user_id=str(user_id), deleted=deleted)
        return deleted

    def _get_owned_notification(
        self, notification_id: UUID | str, user_id: UUID | str
    ) -> Notification:
        notification = Notification.objects.filter(notification_id=notification_id).first()
        if notification is None:
            raise NotFoundError("Notification not found", detail=str(notification_id))
        if str(notification.recipient_id) != str(user_id):
            logger.warning(
                "notification_access_denied",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )
            raise ForbiddenError("You can only manage your own notifications")
        return notification

    def _find_recent_duplicate(self, event: NotificationEvent) -> Notification | None:
        window = settings.NOTIFICATION_DEDUP_WINDOW_SECONDS
        if window <= 0:
            return None
        return (
            Notification.objects.filter(
                recipient_id=event.recipient_id,
                sender_id=event.sender_id,
                notification_type=NotificationType(event.notification_type).value,
                thread_id=event.thread_id,
                reply_id=event.reply_id,
                created_at__gte=timezone.now() - timedelta(seconds=window),
            )
            .order_by("-created_at")
            .first()
        )

    def _deliver(
        self,
        notification: Notification,
        unread_count: int,
        push: bool,
        email: bool,
        email_extra: str | None,
    ) -> None:
        """Post-commit fan-out to the live channel and the email queue."""
        recipient_id = str(notification.recipient_id)
        if push:
            payload = self.serialize(notification)
            self.dispatcher.send_notification(recipient_id, payload)
        self.dispatcher.push_unread_count(recipient_id, unread_count)

        if email:
            self._queue_email(notification, email_extra)

    def _push_unread_count(self, user_id: str, count: int) -> None:
        self.dispatcher.push_unread_count(user_id, count)

    def _queue_email(self, notification: Notification, extra: str | None) -> None:
        if not settings.NOTIFICATION_EMAIL_ENABLED:
            return
        if not notification.recipient.email:
            logger.debug(
                "notification_email_skipped_no_address",
                notification_id=str(notification.notification_id),
            )
            return

        try:
            self.queue.enqueue(
                "social.jobs.email_jobs.send_notification_email_job",
                str(notification.notification_id),
                extra=extra,
                retry=Retry(max=settings.NOTIFICATION_EMAIL_MAX_RETRIES, interval=60),
            )
        except Exception as e:
            logger.error(
                "notification_email_enqueue_failed",
                notification_id=str(notification.notification_id),
                error=str(e),
            )
            return

        logger.info(
            "notification_email_queued",
            notification_id=str(notification.notification_id),
        )

    @staticmethod
    def serialize(notification: Notification) -> dict[str, Any]:
        """JSON-ready representation pushed to clients."""
        return NotificationDetail.model_validate(notification).model_dump(mode="json")


notification_service = NotificationService()
