"""API views for the social graph service."""

import json

from django.conf import settings
from django.http import StreamingHttpResponse

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.renderers import BaseRenderer, JSONRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from social.auth.oauth2 import OAuth2Authentication, QueryTokenAuthentication
from social.constants import SCOPE_ADMIN, SCOPE_USER
from social.enums import FollowStatus
from social.exceptions import ForbiddenError
from social.pagination import SocialPageNumberPagination
from social.realtime import (
    Connected,
    Disconnected,
    QueueChannel,
    connection_manager,
    realtime_dispatcher,
)
from social.schemas import (
    BatchNotificationResponse,
    BroadcastRequest,
    BroadcastResponse,
    ContentEventRequest,
    FollowActionResponse,
    FollowEdgeDetail,
    FollowResponse,
    MarkAllReadResponse,
    MentionEventRequest,
    NotificationDetail,
    NotificationStatsResponse,
    UnreadCountResponse,
)
from social.services import health_service
from social.services.notification_service import notification_service
from social.services.social_graph_service import social_graph_service
from social.signals import (
    content_published,
    reply_liked,
    thread_liked,
    thread_replied,
    thread_reposted,
)

logger = structlog.get_logger(__name__)

CONTENT_EVENT_SIGNALS = {
    "thread_like": thread_liked,
    "reply_like": reply_liked,
    "thread_reply": thread_replied,
    "thread_repost": thread_reposted,
}


def _scope_denied(request, *scopes: str) -> Response | None:
    """Return a 403 response unless the caller holds one of ``scopes``."""
    if request.user.has_any_scope(*scopes):
        return None

    logger.warning(
        "User lacks required scope",
        user_id=request.user.user_id,
        scopes=request.user.scopes,
        required=list(scopes),
    )
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": f"Requires one of: {', '.join(scopes)}",
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _bad_request(error: ValidationError) -> Response:
    errors = error.errors(include_url=False, include_context=False)
    logger.warning("Invalid request body", validation_errors=errors)
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _paginated(request, queryset, schema) -> Response:
    paginator = SocialPageNumberPagination()
    page = paginator.paginate_queryset(queryset, request) or []
    return paginator.get_paginated_response(
        [schema.model_validate(item).model_dump() for item in page]
    )


class EventStreamRenderer(BaseRenderer):
    """Lets ``Accept: text/event-stream`` pass content negotiation.

    Only error bodies go through ``render``; the stream itself is a
    StreamingHttpResponse.
    """

    media_type = "text/event-stream"
    format = "event-stream"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if data is None:
            return b""
        return json.dumps(data, default=str).encode(self.charset)


class SocialAPIView(APIView):
    """Base for authenticated endpoints using OAuth2 bearer tokens."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)


class LivenessCheckView(APIView):
    """Liveness probe endpoint.

    Exempt from authentication so orchestrator probes can reach it.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint.

    Reports database and Redis health and the number of users with a live
    connection on this process. Degraded dependencies still answer 200.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        readiness = health_service.get_readiness_status()
        return Response(readiness.model_dump(), status=status.HTTP_200_OK)


class FollowView(SocialAPIView):
    """Follow or unfollow the user in the URL."""

    def post(self, request, user_id):
        """Follow ``user_id``; private accounts get a pending request.

        Returns:
            201 Created with the edge, 409 Conflict if an edge already
            exists (``already_following`` or ``request_pending``).
        """
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        follow = social_graph_service.request_follow(request.user.user_id, user_id)
        message = (
            "Follow request sent"
            if follow.status == FollowStatus.PENDING.value
            else "You are now following this user"
        )
        body = FollowActionResponse(
            message=message, follow=FollowResponse.model_validate(follow)
        )
        return Response(body.model_dump(), status=status.HTTP_201_CREATED)

    def delete(self, request, user_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        social_graph_service.unfollow(request.user.user_id, user_id)
        body = FollowActionResponse(message="Unfollowed")
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class FollowStatusView(SocialAPIView):
    """Relationship of the caller to another user."""

    def get(self, request, user_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        follow_status = social_graph_service.get_status(request.user.user_id, user_id)
        return Response(follow_status.model_dump(), status=status.HTTP_200_OK)


class FollowerView(SocialAPIView):
    """Remove a follower from the caller's followers."""

    def delete(self, request, user_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        social_graph_service.remove_follower(request.user.user_id, user_id)
        body = FollowActionResponse(message="Follower removed")
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class FollowersListView(SocialAPIView):
    """Accepted followers of a user.

    Lists of private accounts are only visible to the owner and accepted
    followers.
    """

    def get(self, request, user_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        if not social_graph_service.can_view_profile(request.user.user_id, user_id):
            raise ForbiddenError("This account is private")

        queryset = social_graph_service.list_followers(user_id)
        return _paginated(request, queryset, FollowEdgeDetail)


class FollowingListView(SocialAPIView):
    """Accounts a user follows (accepted edges only)."""

    def get(self, request, user_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        if not social_graph_service.can_view_profile(request.user.user_id, user_id):
            raise ForbiddenError("This account is private")

        queryset = social_graph_service.list_following(user_id)
        return _paginated(request, queryset, FollowEdgeDetail)


class PendingFollowRequestsView(SocialAPIView):
    """Follow requests waiting for the caller's answer, newest first."""

    def get(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        queryset = social_graph_service.list_pending(request.user.user_id)
        return _paginated(request, queryset, FollowEdgeDetail)


class SentFollowRequestsView(SocialAPIView):
    """Follow requests the caller sent that are still pending."""

    def get(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        queryset = social_graph_service.list_sent(request.user.user_id)
        return _paginated(request, queryset, FollowEdgeDetail)


class AcceptFollowRequestView(SocialAPIView):
    """Accept a pending request from ``follower_id``."""

    def post(self, request, follower_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        follow = social_graph_service.accept_follow(request.user.user_id, follower_id)
        body = FollowActionResponse(
            message="Follow request accepted",
            follow=FollowResponse.model_validate(follow),
        )
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class RejectFollowRequestView(SocialAPIView):
    """Reject a request from ``follower_id`` (or drop an existing follower)."""

    def post(self, request, follower_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        social_graph_service.reject_follow(request.user.user_id, follower_id)
        body = FollowActionResponse(message="Follow request rejected")
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class NotificationListView(SocialAPIView):
    """The caller's notifications, newest first."""

    def get(self, request):
        """List notifications.

        Query parameters:
            page, page_size: pagination
            unread_only: only unread notifications when true
        """
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        unread_only = request.query_params.get("unread_only", "false").lower() in (
            "1",
            "true",
            "yes",
        )
        queryset = notification_service.list_notifications(
            request.user.user_id, unread_only=unread_only
        )
        return _paginated(request, queryset, NotificationDetail)


class UnreadCountView(SocialAPIView):
    def get(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        count = notification_service.get_unread_count(request.user.user_id)
        return Response(
            UnreadCountResponse(count=count).model_dump(), status=status.HTTP_200_OK
        )


class NotificationStatsView(SocialAPIView):
    """Total and unread notifications per type."""

    def get(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        stats = notification_service.get_notification_stats(request.user.user_id)
        body = NotificationStatsResponse(stats=stats)
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class MarkAllReadView(SocialAPIView):
    def put(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        updated = notification_service.mark_all_read(request.user.user_id)
        body = MarkAllReadResponse(updated_count=updated, unread_count=0)
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class ClearAllNotificationsView(SocialAPIView):
    def delete(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        deleted = notification_service.delete_all_notifications(request.user.user_id)
        return Response({"deleted_count": deleted}, status=status.HTTP_200_OK)


class MarkReadView(SocialAPIView):
    """Mark one of the caller's notifications as read."""

    def put(self, request, notification_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        notification = notification_service.mark_read(
            notification_id, request.user.user_id
        )
        return Response(
            NotificationDetail.model_validate(notification).model_dump(),
            status=status.HTTP_200_OK,
        )


class NotificationDetailView(SocialAPIView):
    """Delete one of the caller's notifications."""

    def delete(self, request, notification_id):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        notification_service.delete_notification(notification_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ContentEventView(SocialAPIView):
    """Ingest a like, reply or repost reported by the content service.

    Requires the admin scope: only trusted services report events.
    """

    def post(self, request):
        """Turn the event into a notification for the content author.

        Returns:
            201 Created with the created notification ids (empty when the
            event was skipped), 400 on an invalid body.
        """
        denied = _scope_denied(request, SCOPE_ADMIN)
        if denied:
            return denied

        try:
            event = ContentEventRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e)

        logger.info(
            "Content event received",
            event_type=event.event_type,
            recipient_id=str(event.recipient_id),
            sender_id=str(event.sender_id),
        )

        responses = CONTENT_EVENT_SIGNALS[event.event_type].send(
            sender=self.__class__,
            recipient_id=event.recipient_id,
            sender_id=event.sender_id,
            thread_id=event.thread_id,
            reply_id=event.reply_id,
        )
        notification_ids = [
            notification.notification_id
            for _receiver, notification in responses
            if notification is not None
        ]
        body = BatchNotificationResponse(
            notification_ids=notification_ids, created_count=len(notification_ids)
        )
        return Response(body.model_dump(), status=status.HTTP_201_CREATED)


class MentionEventView(SocialAPIView):
    """Scan newly published content for @mentions and notify those users."""

    def post(self, request):
        denied = _scope_denied(request, SCOPE_ADMIN)
        if denied:
            return denied

        try:
            event = MentionEventRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e)

        responses = content_published.send(
            sender=self.__class__,
            author_id=event.author_id,
            content=event.content,
            thread_id=event.thread_id,
        )
        notification_ids = [
            notification.notification_id
            for _receiver, notifications in responses
            for notification in notifications or []
        ]
        body = BatchNotificationResponse(
            notification_ids=notification_ids, created_count=len(notification_ids)
        )
        return Response(body.model_dump(), status=status.HTTP_201_CREATED)


class SystemBroadcastView(SocialAPIView):
    """Push an operational announcement to every connected user."""

    def post(self, request):
        denied = _scope_denied(request, SCOPE_ADMIN)
        if denied:
            return denied

        try:
            broadcast = BroadcastRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e)

        result = realtime_dispatcher.broadcast_system(broadcast.message)
        logger.info(
            "System broadcast requested",
            user_id=request.user.user_id,
            delivered=result.delivered,
            failed=result.failed,
        )
        body = BroadcastResponse(delivered=result.delivered, failed=result.failed)
        return Response(body.model_dump(), status=status.HTTP_200_OK)


class NotificationStreamView(SocialAPIView):
    """Live channel delivered as Server-Sent Events.

    The handshake authenticates the token (header or ``?access_token=``);
    a failed handshake never registers a connection. On success the
    channel is registered for the user, replacing any previous one, and
    unregistered when the client goes away.
    """

    authentication_classes = (QueryTokenAuthentication,)
    renderer_classes = (JSONRenderer, EventStreamRenderer)

    def get(self, request):
        denied = _scope_denied(request, SCOPE_USER, SCOPE_ADMIN)
        if denied:
            return denied

        user_id = str(request.user.user_id)
        channel = QueueChannel(user_id)

        def event_stream():
            try:
                # Registered once the server starts streaming
                connection_manager.handle(Connected(user_id=user_id, channel=channel))
                yield from channel.iter_frames(settings.REALTIME_STREAM_HEARTBEAT_SECONDS)
            finally:
                connection_manager.handle(Disconnected(user_id=user_id, channel=channel))

        response = StreamingHttpResponse(
            event_stream(), content_type="text/event-stream"
        )
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        return response
