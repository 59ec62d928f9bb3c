"""Email wording for each notification type.

A single registry maps every ``NotificationType`` to its subject and body
template; ``build_email_message`` renders them for the email job.
"""

from typing import TypedDict

from social.constants import EMAIL_SNIPPET_MAX_LENGTH
from social.enums import NotificationType


class EmailTemplateConfig(TypedDict):
    """Subject and body templates for one notification type."""

    subject: str
    body: str


class EmailMessageContent(TypedDict):
    """Rendered email ready for the email sink."""

    subject: str
    message: str


DEFAULT_SENDER_NAME = "Someone"

DEFAULT_TEMPLATE: EmailTemplateConfig = {
    "subject": "New notification",
    "body": "You have a new notification.",
}

EMAIL_TEMPLATES: dict[NotificationType, EmailTemplateConfig] = {
    # Social graph events
    NotificationType.NEW_FOLLOWER: {
        "subject": "{sender} started following you",
        "body": "{sender} started following you.",
    },
    NotificationType.FOLLOW_REQUEST: {
        "subject": "{sender} wants to follow you",
        "body": "{sender} sent you a follow request.",
    },
    NotificationType.FOLLOW_ACCEPTED: {
        "subject": "{sender} accepted your follow request",
        "body": "{sender} accepted your follow request.",
    },
    # Content events
    NotificationType.THREAD_LIKE: {
        "subject": "{sender} liked your post",
        "body": "{sender} liked your post.",
    },
    NotificationType.REPLY_LIKE: {
        "subject": "{sender} liked your reply",
        "body": "{sender} liked your reply.",
    },
    NotificationType.THREAD_REPLY: {
        "subject": "{sender} replied to your post",
        "body": "{sender} replied to your post.",
    },
    NotificationType.THREAD_REPOST: {
        "subject": "{sender} reposted your post",
        "body": "{sender} reposted your post.",
    },
    NotificationType.MENTION: {
        "subject": "{sender} mentioned you",
        "body": "{sender} mentioned you in a post.",
    },
}


def get_email_template(notification_type: NotificationType | str) -> EmailTemplateConfig:
    """Return the templates for a type, or the generic fallback."""
    try:
        return EMAIL_TEMPLATES[NotificationType(notification_type)]
    except ValueError:
        return DEFAULT_TEMPLATE


def build_email_message(
    notification_type: NotificationType | str,
    sender_name: str | None,
    extra: str | None = None,
) -> EmailMessageContent:
    """Render the email subject and body for a notification.

    Args:
        notification_type: Notification type; unknown values fall back to a
            generic message instead of failing.
        sender_name: Display name of the user who acted.
        extra: Optional content snippet quoted below the body.

    Returns:
        EmailMessageContent with ``subject`` and ``message``.
    """
    template = get_email_template(notification_type)
    sender = (sender_name or "").strip() or DEFAULT_SENDER_NAME

    subject = template["subject"].format(sender=sender)
    message = template["body"].format(sender=sender)

    snippet = (extra or "").strip()
    if snippet:
        if len(snippet) > EMAIL_SNIPPET_MAX_LENGTH:
            snippet = snippet[: EMAIL_SNIPPET_MAX_LENGTH - 3].rstrip() + "..."
        message = f'{message}\n\n"{snippet}"'

    return {"subject": subject, "message": message}
