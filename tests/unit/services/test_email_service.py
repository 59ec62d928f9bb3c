"""Tests for EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

from django.test import TestCase, override_settings

from social.services.email_service import EmailService


class TestEmailService(TestCase):
    """Test suite for EmailService."""

    def setUp(self):
        """Set up test fixtures."""
        self.email_service = EmailService()

    @patch("social.services.email_service.smtplib.SMTP")
    def test_send_email_success(self, mock_smtp_class):
        """Test successful email sending."""
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        result = self.email_service.send_email(
            to_email="dana@example.com",
            subject="alice started following you",
            text_content="alice started following you.",
        )

        self.assertIs(result, True)
        mock_smtp.send_message.assert_called_once()
        message = mock_smtp.send_message.call_args[0][0]
        self.assertEqual(message["To"], "dana@example.com")
        self.assertEqual(message["From"], "no-reply@social.local")

    @patch("social.services.email_service.smtplib.SMTP")
    def test_message_has_text_and_html_parts(self, mock_smtp_class):
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        self.email_service.send_email(
            to_email="dana@example.com",
            subject="Mention",
            text_content='alice mentioned you.\n\n"<b>hi</b> @dana"',
        )

        message = mock_smtp.send_message.call_args[0][0]
        parts = {part.get_content_type(): part.get_payload() for part in message.get_payload()}
        self.assertIn("alice mentioned you.", parts["text/plain"])
        self.assertIn("<p>alice mentioned you.</p>", parts["text/html"])
        self.assertIn("&lt;b&gt;hi&lt;/b&gt;", parts["text/html"])

    @patch("social.services.email_service.smtplib.SMTP")
    def test_send_email_with_custom_from(self, mock_smtp_class):
        """Test sending email with custom from address."""
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        self.email_service.send_email(
            to_email="dana@example.com",
            subject="Test",
            text_content="Test",
            from_email="custom@example.com",
        )

        call_args = mock_smtp.send_message.call_args[0][0]
        self.assertEqual(call_args["From"], "custom@example.com")

    def test_send_email_invalid_email(self):
        """Test sending email with invalid email address."""
        with self.assertRaisesRegex(ValueError, "Invalid email address"):
            self.email_service.send_email(
                to_email="invalid-email",
                subject="Test",
                text_content="Test",
            )

    def test_send_email_smtp_exception(self):
        """SMTP errors propagate so the job can be retried."""
        with patch("social.services.email_service.smtplib.SMTP") as mock_smtp:
            mock_smtp.return_value.__enter__.return_value.send_message.side_effect = (
                smtplib.SMTPException("SMTP error")
            )

            with self.assertRaises(smtplib.SMTPException):
                self.email_service.send_email(
                    to_email="dana@example.com",
                    subject="Test",
                    text_content="Test",
                )

    @override_settings(
        EMAIL_USE_TLS=True, EMAIL_HOST_USER="mailer", EMAIL_HOST_PASSWORD="secret"
    )
    @patch("social.services.email_service.smtplib.SMTP")
    def test_tls_and_login_when_configured(self, mock_smtp_class):
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        EmailService().send_email(
            to_email="dana@example.com", subject="Test", text_content="Test"
        )

        mock_smtp.starttls.assert_called_once()
        mock_smtp.login.assert_called_once_with("mailer", "secret")

    @patch("social.services.email_service.smtplib.SMTP")
    def test_plain_sink_skips_tls_and_login(self, mock_smtp_class):
        mock_smtp = MagicMock()
        mock_smtp_class.return_value.__enter__.return_value = mock_smtp

        self.email_service.send_email(
            to_email="dana@example.com", subject="Test", text_content="Test"
        )

        mock_smtp_class.assert_called_once_with("localhost", 1025)
        mock_smtp.starttls.assert_not_called()
        mock_smtp.login.assert_not_called()

    def test_is_valid_email(self):
        self.assertTrue(EmailService.is_valid_email("a.b+c@example.co"))
        self.assertFalse(EmailService.is_valid_email(""))
        self.assertFalse(EmailService.is_valid_email("no-at-sign"))
