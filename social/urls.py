"""URL routing configuration for the social app."""

from django.urls import path

from .views import (
    AcceptFollowRequestView,
    ClearAllNotificationsView,
    ContentEventView,
    FollowersListView,
    FollowerView,
    FollowingListView,
    FollowStatusView,
    FollowView,
    LivenessCheckView,
    MarkAllReadView,
    MarkReadView,
    MentionEventView,
    NotificationDetailView,
    NotificationListView,
    NotificationStatsView,
    NotificationStreamView,
    PendingFollowRequestsView,
    ReadinessCheckView,
    RejectFollowRequestView,
    SentFollowRequestsView,
    SystemBroadcastView,
    UnreadCountView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Follow relationships
    path("follows/<uuid:user_id>", FollowView.as_view(), name="follow"),
    path(
        "follows/<uuid:user_id>/status",
        FollowStatusView.as_view(),
        name="follow-status",
    ),
    path("followers/<uuid:user_id>", FollowerView.as_view(), name="follower"),
    path(
        "users/<uuid:user_id>/followers",
        FollowersListView.as_view(),
        name="user-followers",
    ),
    path(
        "users/<uuid:user_id>/following",
        FollowingListView.as_view(),
        name="user-following",
    ),
    # Follow requests
    path(
        "follow-requests/pending",
        PendingFollowRequestsView.as_view(),
        name="follow-requests-pending",
    ),
    path(
        "follow-requests/sent",
        SentFollowRequestsView.as_view(),
        name="follow-requests-sent",
    ),
    path(
        "follow-requests/<uuid:follower_id>/accept",
        AcceptFollowRequestView.as_view(),
        name="follow-request-accept",
    ),
    path(
        "follow-requests/<uuid:follower_id>/reject",
        RejectFollowRequestView.as_view(),
        name="follow-request-reject",
    ),
    # Notifications (specific routes before generic)
    path("notifications", NotificationListView.as_view(), name="notifications"),
    path(
        "notifications/unread-count",
        UnreadCountView.as_view(),
        name="notifications-unread-count",
    ),
    path(
        "notifications/stats",
        NotificationStatsView.as_view(),
        name="notifications-stats",
    ),
    path(
        "notifications/read-all",
        MarkAllReadView.as_view(),
        name="notifications-read-all",
    ),
    path(
        "notifications/clear-all",
        ClearAllNotificationsView.as_view(),
        name="notifications-clear-all",
    ),
    path(
        "notifications/<uuid:notification_id>/read",
        MarkReadView.as_view(),
        name="notification-read",
    ),
    path(
        "notifications/<uuid:notification_id>",
        NotificationDetailView.as_view(),
        name="notification-detail",
    ),
    # Domain event ingestion
    path("events/content", ContentEventView.as_view(), name="events-content"),
    path("events/mentions", MentionEventView.as_view(), name="events-mentions"),
    # Realtime
    path(
        "realtime/broadcast",
        SystemBroadcastView.as_view(),
        name="realtime-broadcast",
    ),
    path(
        "realtime/stream",
        NotificationStreamView.as_view(),
        name="realtime-stream",
    ),
]
