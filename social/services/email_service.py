"""Email sink: plain SMTP delivery of notification emails."""

import html
import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from django.conf import settings

import structlog

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class EmailService:
    """Sends emails via SMTP.

    Messages carry a plain-text part and an HTML alternative generated from
    it. SMTP errors propagate so the calling job can be retried.
    """

    def __init__(self) -> None:
        """Initialize email service with SMTP configuration."""
        self.smtp_host = settings.EMAIL_HOST
        self.smtp_port = settings.EMAIL_PORT
        self.smtp_user = settings.EMAIL_HOST_USER
        self.smtp_password = settings.EMAIL_HOST_PASSWORD
        self.use_tls = settings.EMAIL_USE_TLS
        self.from_email = settings.DEFAULT_FROM_EMAIL

    def send_email(
        self,
        to_email: str,
        subject: str,
        text_content: str,
        from_email: str | None = None,
    ) -> bool:
        """Send an email via SMTP.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            text_content: Plain text body; paragraphs separated by blank lines
            from_email: Sender email (defaults to DEFAULT_FROM_EMAIL)

        Returns:
            True once the SMTP server accepted the message

        Raises:
            ValueError: If email address is invalid
            smtplib.SMTPException: If SMTP operation fails
        """
        if not self.is_valid_email(to_email):
            raise ValueError(f"Invalid email address: {to_email}")

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = from_email or self.from_email
        msg["To"] = to_email
        msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(self._text_to_html(text_content), "html"))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        except smtplib.SMTPException as e:
            logger.error(
                "email_send_failed",
                to_email=to_email,
                subject=subject,
                error=str(e),
            )
            raise

        logger.info("email_sent", to_email=to_email, subject=subject)
        return True

    @staticmethod
    def is_valid_email(email: str) -> bool:
        return bool(email and EMAIL_PATTERN.match(email))

    @staticmethod
    def _text_to_html(text: str) -> str:
        paragraphs = [p for p in text.split("\n\n") if p.strip()]
        body = "".join(
            f"<p>{html.escape(p).replace(chr(10), '<br>')}</p>" for p in paragraphs
        )
        return f"<html><body>{body}</body></html>"
