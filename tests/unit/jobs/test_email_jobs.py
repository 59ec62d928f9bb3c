"""Tests for the notification email job."""

import smtplib
from unittest.mock import patch
from uuid import uuid4

from django.test import TestCase

from social.enums import NotificationType
from social.exceptions import DeliveryFailureError
from social.jobs.email_jobs import send_notification_email_job
from tests.factories import create_notification, create_user


class TestSendNotificationEmailJob(TestCase):
    """Test suite for send_notification_email_job."""

    def setUp(self):
        """Set up test fixtures."""
        self.recipient = create_user(username="dana", email="dana@example.com")
        self.sender = create_user(username="alice", full_name="Alice Liddell")
        self.thread_id = uuid4()
        self.notification = create_notification(
            self.recipient,
            self.sender,
            NotificationType.MENTION,
            thread_id=self.thread_id,
        )

    def test_sends_rendered_email(self):
        with patch("social.jobs.email_jobs.EmailService") as mock_email_service:
            mock_service = mock_email_service.return_value

            result = send_notification_email_job(
                str(self.notification.notification_id), extra="hello @dana"
            )

            self.assertIs(result, True)
            kwargs = mock_service.send_email.call_args.kwargs
            self.assertEqual(kwargs["to_email"], "dana@example.com")
            self.assertEqual(kwargs["subject"], "Alice Liddell mentioned you")
            self.assertIn('"hello @dana"', kwargs["text_content"])
            self.assertTrue(
                kwargs["text_content"].endswith(
                    f"http://localhost:3000/threads/{self.thread_id}"
                )
            )

    def test_notification_without_thread_has_no_link(self):
        follow = create_notification(
            self.recipient, self.sender, NotificationType.NEW_FOLLOWER
        )

        with patch("social.jobs.email_jobs.EmailService") as mock_email_service:
            send_notification_email_job(str(follow.notification_id))

            kwargs = mock_email_service.return_value.send_email.call_args.kwargs
            self.assertEqual(kwargs["text_content"], "Alice Liddell started following you.")

    def test_deleted_notification_is_skipped(self):
        with patch("social.jobs.email_jobs.EmailService") as mock_email_service:
            result = send_notification_email_job(str(uuid4()))

            self.assertIs(result, False)
            mock_email_service.return_value.send_email.assert_not_called()

    def test_recipient_without_email_is_skipped(self):
        self.recipient.email = ""
        self.recipient.save(update_fields=["email"])

        with patch("social.jobs.email_jobs.EmailService") as mock_email_service:
            result = send_notification_email_job(str(self.notification.notification_id))

            self.assertIs(result, False)
            mock_email_service.return_value.send_email.assert_not_called()

    def test_smtp_failure_is_reraised_for_retry(self):
        with patch("social.jobs.email_jobs.EmailService") as mock_email_service:
            mock_email_service.return_value.send_email.side_effect = (
                smtplib.SMTPException("SMTP error")
            )

            with self.assertRaises(DeliveryFailureError) as ctx:
                send_notification_email_job(str(self.notification.notification_id))

            self.assertEqual(ctx.exception.channel, "email")
            self.assertIsInstance(ctx.exception.__cause__, smtplib.SMTPException)
