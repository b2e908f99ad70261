"""Celery task for account confirmation emails."""

import logging
import smtplib

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.config import get_settings
from src.database import SessionLocal
from src.models.user import User
from src.services.mail import build_confirmation_message, send_message

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=2)
def send_confirmation_email(self, user_id: int) -> dict:
    """Send the confirmation email for a user.

    Args:
        user_id: ID of the user to confirm

    Returns:
        dict describing what happened
    """
    db: Session = SessionLocal()
    try:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            logger.warning(f"User {user_id} not found, skipping confirmation email")
            return {"sent": False, "reason": "not_found"}

        if user.confirmed:
            logger.info(f"User {user_id} already confirmed, skipping confirmation email")
            return {"sent": False, "reason": "already_confirmed"}

        settings = get_settings()
        send_message(build_confirmation_message(user, settings), settings)
        return {"sent": True, "user_id": user_id}

    except smtplib.SMTPException as e:
        logger.error(f"Failed to send confirmation email to user {user_id}: {e}")
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60)
        return {"sent": False, "reason": str(e)}

    finally:
        db.close()
