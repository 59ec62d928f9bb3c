"""Tests for SocialGraphService."""

from datetime import timedelta
from uuid import uuid4

from social.enums import FollowStatus, NotificationType
from social.exceptions import ConflictError, InvalidOperationError, NotFoundError
from social.models import Follow, Notification, User
from social.services.social_graph_service import SocialGraphService
from tests.base import BaseUnitTest
from tests.factories import create_follow, create_user


class SocialGraphTestCase(BaseUnitTest):
    """Shared fixtures and helpers."""

    def setUp(self):
        self.service = SocialGraphService()
        self.alice = create_user(username="alice")
        self.bob = create_user(username="bob")
        self.carol = create_user(username="carol", is_private=True)

    def assert_counters_consistent(self):
        """Every counter equals the number of accepted edges it summarizes."""
        for user in User.objects.all():
            accepted = Follow.objects.filter(status=FollowStatus.ACCEPTED.value)
            self.assertEqual(
                user.followers_count, accepted.filter(following=user).count()
            )
            self.assertEqual(
                user.following_count, accepted.filter(follower=user).count()
            )

    def refresh(self, *users):
        for user in users:
            user.refresh_from_db()


class TestRequestFollow(SocialGraphTestCase):
    """Tests for request_follow."""

    def test_public_account_is_followed_immediately(self):
        follow = self.service.request_follow(self.alice.user_id, self.bob.user_id)

        self.assertEqual(follow.status, FollowStatus.ACCEPTED.value)
        self.refresh(self.alice, self.bob)
        self.assertEqual(self.alice.following_count, 1)
        self.assertEqual(self.bob.followers_count, 1)
        self.assertTrue(
            Notification.objects.filter(
                recipient=self.bob,
                sender=self.alice,
                notification_type=NotificationType.NEW_FOLLOWER.value,
            ).exists()
        )

    def test_private_account_gets_pending_request(self):
        follow = self.service.request_follow(self.alice.user_id, self.carol.user_id)

        self.assertEqual(follow.status, FollowStatus.PENDING.value)
        self.refresh(self.alice, self.carol)
        self.assertEqual(self.alice.following_count, 0)
        self.assertEqual(self.carol.followers_count, 0)
        types = list(
            Notification.objects.filter(recipient=self.carol).values_list(
                "notification_type", flat=True
            )
        )
        self.assertEqual(types, [NotificationType.FOLLOW_REQUEST.value])

    def test_status_after_request(self):
        self.service.request_follow(self.alice.user_id, self.bob.user_id)
        self.service.request_follow(self.alice.user_id, self.carol.user_id)

        public = self.service.get_status(self.alice.user_id, self.bob.user_id)
        private = self.service.get_status(self.alice.user_id, self.carol.user_id)

        self.assertTrue(public.is_following)
        self.assertEqual(public.status, "accepted")
        self.assertTrue(private.is_following)
        self.assertEqual(private.status, "pending")

    def test_following_yourself_is_invalid_for_any_account(self):
        for user in (self.alice, self.carol):
            with self.subTest(user=user.username):
                with self.assertRaises(InvalidOperationError):
                    self.service.request_follow(user.user_id, user.user_id)
        self.assertFalse(Follow.objects.exists())

    def test_second_request_conflicts_with_already_following(self):
        self.service.request_follow(self.alice.user_id, self.bob.user_id)

        with self.assertRaises(ConflictError) as ctx:
            self.service.request_follow(self.alice.user_id, self.bob.user_id)

        self.assertEqual(ctx.exception.code, ConflictError.ALREADY_FOLLOWING)

    def test_second_request_conflicts_with_request_pending(self):
        self.service.request_follow(self.alice.user_id, self.carol.user_id)

        with self.assertRaises(ConflictError) as ctx:
            self.service.request_follow(self.alice.user_id, self.carol.user_id)

        self.assertEqual(ctx.exception.code, ConflictError.REQUEST_PENDING)
        self.assertNotEqual(
            ctx.exception.message, "You are already following this user"
        )

    def test_unknown_target(self):
        with self.assertRaises(NotFoundError):
            self.service.request_follow(self.alice.user_id, uuid4())


class TestAcceptFollow(SocialGraphTestCase):
    """Tests for accept_follow."""

    def test_accept_pending_request(self):
        self.service.request_follow(self.alice.user_id, self.carol.user_id)

        follow = self.service.accept_follow(self.carol.user_id, self.alice.user_id)

        self.assertEqual(follow.status, FollowStatus.ACCEPTED.value)
        self.refresh(self.alice, self.carol)
        self.assertEqual(self.alice.following_count, 1)
        self.assertEqual(self.carol.followers_count, 1)
        self.assertTrue(
            Notification.objects.filter(
                recipient=self.alice,
                sender=self.carol,
                notification_type=NotificationType.FOLLOW_ACCEPTED.value,
            ).exists()
        )

    def test_accept_without_request_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.accept_follow(self.carol.user_id, self.alice.user_id)

    def test_accept_twice_is_not_found(self):
        self.service.request_follow(self.alice.user_id, self.carol.user_id)
        self.service.accept_follow(self.carol.user_id, self.alice.user_id)

        with self.assertRaises(NotFoundError):
            self.service.accept_follow(self.carol.user_id, self.alice.user_id)

        self.refresh(self.carol)
        self.assertEqual(self.carol.followers_count, 1)


class TestRemovingEdges(SocialGraphTestCase):
    """Tests for reject_follow, unfollow and remove_follower."""

    def test_reject_pending_request_leaves_counters(self):
        self.service.request_follow(self.alice.user_id, self.carol.user_id)

        self.service.reject_follow(self.carol.user_id, self.alice.user_id)

        self.assertFalse(Follow.objects.exists())
        self.refresh(self.alice, self.carol)
        self.assertEqual(self.carol.followers_count, 0)
        self.assertEqual(self.alice.following_count, 0)

    def test_reject_accepted_edge_decrements_counters(self):
        create_follow(self.alice, self.bob)

        self.service.reject_follow(self.bob.user_id, self.alice.user_id)

        self.refresh(self.alice, self.bob)
        self.assertEqual(self.bob.followers_count, 0)
        self.assertEqual(self.alice.following_count, 0)

    def test_reject_without_edge_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.reject_follow(self.bob.user_id, self.alice.user_id)

    def test_unfollow_then_unfollow_again(self):
        self.service.request_follow(self.alice.user_id, self.bob.user_id)

        self.service.unfollow(self.alice.user_id, self.bob.user_id)

        self.refresh(self.alice, self.bob)
        self.assertEqual(self.alice.following_count, 0)
        self.assertEqual(self.bob.followers_count, 0)
        with self.assertRaises(NotFoundError):
            self.service.unfollow(self.alice.user_id, self.bob.user_id)

    def test_unfollow_does_not_cancel_pending_request(self):
        self.service.request_follow(self.alice.user_id, self.carol.user_id)

        with self.assertRaises(NotFoundError):
            self.service.unfollow(self.alice.user_id, self.carol.user_id)

        self.assertTrue(Follow.objects.filter(follower=self.alice).exists())

    def test_remove_follower(self):
        create_follow(self.alice, self.bob)

        self.service.remove_follower(self.bob.user_id, self.alice.user_id)

        self.refresh(self.alice, self.bob)
        self.assertEqual(self.bob.followers_count, 0)
        self.assertEqual(self.alice.following_count, 0)
        with self.assertRaises(NotFoundError):
            self.service.remove_follower(self.bob.user_id, self.alice.user_id)

    def test_counter_invariant_over_mixed_sequence(self):
        dave = create_user(username="dave", is_private=True)
        users = [self.alice, self.bob, self.carol, dave]

        for follower in users:
            for target in users:
                if follower != target:
                    self.service.request_follow(follower.user_id, target.user_id)
        self.assert_counters_consistent()

        self.service.accept_follow(self.carol.user_id, self.alice.user_id)
        self.service.accept_follow(dave.user_id, self.bob.user_id)
        self.service.reject_follow(self.carol.user_id, self.bob.user_id)
        self.assert_counters_consistent()

        self.service.unfollow(self.carol.user_id, self.alice.user_id)
        self.service.remove_follower(dave.user_id, self.bob.user_id)
        self.service.reject_follow(self.bob.user_id, self.alice.user_id)
        self.assert_counters_consistent()


class TestQueries(SocialGraphTestCase):
    """Tests for list and status queries."""

    def test_pending_and_sent_lists(self):
        dave = create_user(username="dave")
        self.service.request_follow(self.alice.user_id, self.carol.user_id)
        self.service.request_follow(dave.user_id, self.carol.user_id)
        self.service.request_follow(self.alice.user_id, self.bob.user_id)

        pending = list(self.service.list_pending(self.carol.user_id))
        sent = list(self.service.list_sent(self.alice.user_id))

        self.assertEqual(
            {f.follower_id for f in pending}, {dave.user_id, self.alice.user_id}
        )
        self.assertEqual([f.following_id for f in sent], [self.carol.user_id])

    def test_followers_and_following_lists_only_hold_accepted_edges(self):
        self.service.request_follow(self.alice.user_id, self.bob.user_id)
        self.service.request_follow(self.carol.user_id, self.bob.user_id)
        self.service.request_follow(self.bob.user_id, self.carol.user_id)

        followers = list(self.service.list_followers(self.bob.user_id))
        following = list(self.service.list_following(self.bob.user_id))

        self.assertEqual(
            {f.follower_id for f in followers}, {self.alice.user_id, self.carol.user_id}
        )
        self.assertEqual(following, [])

    def test_status_without_edge(self):
        status = self.service.get_status(self.alice.user_id, self.bob.user_id)

        self.assertFalse(status.is_following)
        self.assertIsNone(status.status)

    def test_can_view_profile(self):
        self.assertTrue(self.service.can_view_profile(self.alice.user_id, self.bob.user_id))
        self.assertTrue(
            self.service.can_view_profile(self.carol.user_id, self.carol.user_id)
        )
        self.assertFalse(
            self.service.can_view_profile(self.alice.user_id, self.carol.user_id)
        )

        self.service.request_follow(self.alice.user_id, self.carol.user_id)
        self.assertFalse(
            self.service.can_view_profile(self.alice.user_id, self.carol.user_id)
        )

        self.service.accept_follow(self.carol.user_id, self.alice.user_id)
        self.assertTrue(
            self.service.can_view_profile(self.alice.user_id, self.carol.user_id)
        )

    def test_lists_are_newest_first(self):
        dave = create_user(username="dave")
        older = create_follow(self.alice, self.bob)
        newer = create_follow(dave, self.bob)
        Follow.objects.filter(pk=older.pk).update(
            created_at=newer.created_at - timedelta(minutes=5)
        )

        followers = list(self.service.list_followers(self.bob.user_id))

        self.assertEqual(
            [f.follower_id for f in followers], [dave.user_id, self.alice.user_id]
        )
