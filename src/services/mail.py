"""Outgoing account mail."""

import logging
import smtplib
from email.mime.text import MIMEText

from src.config import Settings
from src.models.user import User

logger = logging.getLogger(__name__)


def build_confirmation_message(user: User, settings: Settings) -> MIMEText:
    """Build the plain-text account confirmation email."""
    link = f"{settings.confirmation_url.rstrip('/')}/{user.confirmation_code}"
    body = (
        f"Hello {user.name},\n\n"
        "An account has been created for you. Please confirm your email address "
        f"by visiting the link below:\n\n{link}\n"
    )
    msg = MIMEText(body, "plain")
    msg["From"] = settings.mail_from_address
    msg["To"] = user.email
    msg["Subject"] = "Confirm your account"
    return msg


def send_message(msg: MIMEText, settings: Settings) -> None:
    """Send a message over SMTP, using STARTTLS when credentials are set."""
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
        if settings.smtp_username and settings.smtp_password:
            server.starttls()
            server.login(settings.smtp_username, settings.smtp_password)
        server.send_message(msg)
    logger.info(f"Sent '{msg['Subject']}' to {msg['To']}")


class ConfirmationMailer:
    """Queues confirmation emails; delivery happens in a Celery worker."""

    def send_confirmation_email(self, user_id: int) -> None:
        """Fire-and-forget: queue the confirmation email for a user."""
        from src.tasks.confirmation import send_confirmation_email

        send_confirmation_email.delay(user_id)
        logger.info(f"Queued confirmation email for user {user_id}")
