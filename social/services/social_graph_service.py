"""Follow relationship lifecycle.

Edges to public accounts are accepted immediately, edges to private
accounts wait for the followed user. Every transition and the matching
follower/following counter change commit in the same transaction, and
the notification triggered by the transition is created inside it too.
"""

from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

import structlog

from social.enums import FollowStatus
from social.exceptions import ConflictError, InvalidOperationError, NotFoundError
from social.models import Follow
from social.repositories import UserRepository
from social.schemas import FollowStatusResponse
from social.signals.events import follow_accepted, follow_requested, new_follower

logger = structlog.get_logger(__name__)


class SocialGraphService:
    """Enforces the follow state machine and keeps counters consistent."""

    def request_follow(self, follower_id: UUID | str, target_id: UUID | str) -> Follow:
        """Follow a user, or ask to when the account is private.

        Returns:
            The created edge, ``accepted`` or ``pending``.

        Raises:
            InvalidOperationError: If a user tries to follow themselves.
            NotFoundError: If either user does not exist.
            ConflictError: If an edge already exists; ``code`` is
                ``already_following`` or ``request_pending``.
        """
        if str(follower_id) == str(target_id):
            raise InvalidOperationError("You cannot follow yourself")

        follower = UserRepository.get_user(follower_id)
        target = UserRepository.get_user(target_id)

        with transaction.atomic():
            existing = Follow.objects.filter(follower=follower, following=target).first()
            if existing is not None:
                raise self._conflict(existing.status)

            status = (
                FollowStatus.PENDING.value
                if target.is_private
                else FollowStatus.ACCEPTED.value
            )
            try:
                with transaction.atomic():
                    follow = Follow.objects.create(
                        follower=follower, following=target, status=status
                    )
            except IntegrityError as e:
                # Lost a race with an identical request
                current = (
                    Follow.objects.filter(follower=follower, following=target)
                    .values_list("status", flat=True)
                    .first()
                )
                raise self._conflict(current or FollowStatus.PENDING.value) from e

            if follow.is_accepted:
                UserRepository.increment_follow_counters(
                    follower.user_id, target.user_id
                )
                new_follower.send(
                    sender=self.__class__,
                    follower_id=follower.user_id,
                    target_id=target.user_id,
                )
            else:
                follow_requested.send(
                    sender=self.__class__,
                    follower_id=follower.user_id,
                    target_id=target.user_id,
                )

        logger.info(
            "follow_created",
            follower_id=str(follower.user_id),
            following_id=str(target.user_id),
            status=follow.status,
        )
        return follow

    def accept_follow(self, target_id: UUID | str, follower_id: UUID | str) -> Follow:
        """Accept a pending request sent to ``target_id``.

        Raises:
            NotFoundError: If no pending edge exists for the pair.
        """
        with transaction.atomic():
            updated = Follow.objects.filter(
                follower_id=follower_id,
                following_id=target_id,
                status=FollowStatus.PENDING.value,
            ).update(status=FollowStatus.ACCEPTED.value, updated_at=timezone.now())
            if not updated:
                raise NotFoundError("No pending follow request from this user")

            UserRepository.increment_follow_counters(follower_id, target_id)
            follow_accepted.send(
                sender=self.__class__,
                follower_id=follower_id,
                target_id=target_id,
            )
            follow = Follow.objects.get(follower_id=follower_id, following_id=target_id)

        logger.info(
            "follow_request_accepted",
            follower_id=str(follower_id),
            following_id=str(target_id),
        )
        return follow

    def reject_follow(self, target_id: UUID | str, follower_id: UUID | str) -> None:
        """Delete the edge ``follower -> target`` whatever its status.

        Raises:
            NotFoundError: If no edge exists for the pair.
        """
        self._delete_edge(
            follower_id, target_id, statuses=None, event="follow_rejected"
        )

    def unfollow(self, follower_id: UUID | str, target_id: UUID | str) -> None:
        """Stop following an account.

        Raises:
            NotFoundError: If the follower has no accepted edge to the target.
        """
        self._delete_edge(
            follower_id,
            target_id,
            statuses=[FollowStatus.ACCEPTED.value],
            event="unfollowed",
        )

    def remove_follower(self, owner_id: UUID | str, follower_id: UUID | str) -> None:
        """Remove someone from the owner's followers.

        Raises:
            NotFoundError: If that user does not follow the owner.
        """
        self._delete_edge(
            follower_id,
            owner_id,
            statuses=[FollowStatus.ACCEPTED.value],
            event="follower_removed",
        )

    def list_pending(self, user_id: UUID | str) -> QuerySet[Follow]:
        """Requests waiting for ``user_id`` to answer, newest first."""
        return self._edges(following_id=user_id, status=FollowStatus.PENDING.value)

    def list_sent(self, user_id: UUID | str) -> QuerySet[Follow]:
        """Requests ``user_id`` sent that are still pending, newest first."""
        return self._edges(follower_id=user_id, status=FollowStatus.PENDING.value)

    def list_followers(self, user_id: UUID | str) -> QuerySet[Follow]:
        return self._edges(following_id=user_id, status=FollowStatus.ACCEPTED.value)

    def list_following(self, user_id: UUID | str) -> QuerySet[Follow]:
        return self._edges(follower_id=user_id, status=FollowStatus.ACCEPTED.value)

    def get_status(
        self, viewer_id: UUID | str, target_id: UUID | str
    ) -> FollowStatusResponse:
        """Relationship of the viewer to the target."""
        status = (
            Follow.objects.filter(follower_id=viewer_id, following_id=target_id)
            .values_list("status", flat=True)
            .first()
        )
        return FollowStatusResponse(is_following=status is not None, status=status)

    def can_view_profile(self, viewer_id: UUID | str, target_id: UUID | str) -> bool:
        """Private profiles are visible to their owner and accepted followers."""
        if str(viewer_id) == str(target_id):
            return True
        target = UserRepository.get_user(target_id)
        if not target.is_private:
            return True
        return self.get_status(viewer_id, target_id).status == FollowStatus.ACCEPTED.value

    def _edges(self, **filters) -> QuerySet[Follow]:
        return (
            Follow.objects.filter(**filters)
            .select_related("follower", "following")
            .order_by("-created_at")
        )

    def _delete_edge(
        self,
        follower_id: UUID | str,
        target_id: UUID | str,
        statuses: list[str] | None,
        event: str,
    ) -> None:
        with transaction.atomic():
            edges = Follow.objects.select_for_update().filter(
                follower_id=follower_id, following_id=target_id
            )
            if statuses is not None:
                edges = edges.filter(status__in=statuses)

            follow = edges.first()
            if follow is None:
                raise NotFoundError("Follow relationship not found")

            deleted, _ = Follow.objects.filter(pk=follow.pk).delete()
            if deleted and follow.is_accepted:
                UserRepository.decrement_follow_counters(follower_id, target_id)

        logger.info(
            event,
            follower_id=str(follower_id),
            following_id=str(target_id),
            status=follow.status,
        )

    @staticmethod
    def _conflict(status: str) -> ConflictError:
        if status == FollowStatus.ACCEPTED.value:
            return ConflictError(
                "You are already following this user",
                code=ConflictError.ALREADY_FOLLOWING,
            )
        return ConflictError(
            "Follow request already pending",
            code=ConflictError.REQUEST_PENDING,
        )


social_graph_service = SocialGraphService()
