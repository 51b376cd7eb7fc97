"""
In-app notifications for workflow events

Moderation, refund decisions, feedback replies and appointment status
changes all report to the affected email through send_notification.
Delivery is best-effort: a failure is logged and never fails the
request that triggered it.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Notification

logger = logging.getLogger(__name__)


def send_notification(
    db: Session,
    recipient: Optional[str],
    title: str,
    message: str,
    data: Optional[dict] = None,
) -> Optional[Notification]:
    """
    Store a notification for a recipient email

    Args:
        db: Database session
        recipient: Recipient email; nothing is stored when empty
        title: Short title
        message: Body text
        data: Extra payload such as the related document id and event type

    Returns:
        The stored Notification, or None when skipped or failed
    """
    if not recipient:
        logger.debug(f"No recipient for notification '{title}', skipping")
        return None

    try:
        notification = Notification(
            recipient=recipient,
            title=title,
            message=message,
            data=data or {},
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
        logger.info(f"Notification sent to {recipient}: {title} - {message}")
        return notification
    except Exception as e:
        db.rollback()
        logger.error(f"Error sending notification to {recipient}: {e}")
        return None


def notify_status_change(
    db: Session,
    recipient: Optional[str],
    subject: str,
    status: str,
    data: dict,
) -> Optional[Notification]:
    """Notify an owner that an admin changed the status of something they submitted"""
    return send_notification(
        db,
        recipient,
        title=f"{subject} {status}",
        message=f"Your {subject.lower()} has been {status.lower()}.",
        data=data,
    )
