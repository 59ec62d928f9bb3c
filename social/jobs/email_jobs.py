"""Background job sending notification emails.

Enqueued by the notification engine after the notification committed.
Failures are logged and re-raised so rq applies the job's retry policy;
they never reach the operation that created the notification.
"""

from django.conf import settings

import structlog

from social.exceptions import DeliveryFailureError
from social.models import Notification
from social.services.email_service import EmailService
from social.services.notification_templates import build_email_message

logger = structlog.get_logger(__name__)


def send_notification_email_job(notification_id: str, extra: str | None = None) -> bool:
    """Render and send the email for one notification.

    Args:
        notification_id: UUID of the notification.
        extra: Optional content snippet quoted in the body.

    Returns:
        True if an email was sent, False if there was nothing to send.
    """
    notification = (
        Notification.objects.select_related("recipient", "sender")
        .filter(notification_id=notification_id)
        .first()
    )
    if notification is None:
        # Deleted by the recipient before the job ran
        logger.info("notification_email_skipped_missing", notification_id=notification_id)
        return False

    recipient = notification.recipient
    if not recipient.email:
        logger.info(
            "notification_email_skipped_no_address",
            notification_id=notification_id,
            recipient_id=str(recipient.user_id),
        )
        return False

    content = build_email_message(
        notification.notification_type,
        notification.sender.display_name,
        extra,
    )
    message = content["message"]
    if notification.thread_id:
        message = (
            f"{message}\n\n{settings.FRONTEND_BASE_URL}/threads/{notification.thread_id}"
        )

    try:
        EmailService().send_email(
            to_email=recipient.email,
            subject=content["subject"],
            text_content=message,
        )
    except Exception as e:
        logger.warning(
            "notification_email_failed",
            notification_id=notification_id,
            recipient_id=str(recipient.user_id),
            error=str(e),
        )
        raise DeliveryFailureError("email", str(recipient.user_id), str(e)) from e

    logger.info(
        "notification_email_sent",
        notification_id=notification_id,
        recipient_id=str(recipient.user_id),
        notification_type=notification.notification_type,
    )
    return True
