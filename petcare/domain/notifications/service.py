"""Notification service - Reading and clearing a recipient's notifications"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def get_notifications(self, recipient: str) -> list[Notification]:
        return self.repo.get_notifications(self.db, recipient.strip().lower())

    def count_unread(self, recipient: str) -> int:
        return self.repo.count_unread(self.db, recipient.strip().lower())

    def get_notification(self, notification_id: str) -> Notification:
        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        return notification

    def mark_read(self, notification_id: str) -> Notification:
        notification = self.repo.mark_read(self.db, self.get_notification(notification_id))
        logger.info(f"Notification {notification_id} marked as read")
        return notification

    def mark_all_read(self, recipient: str) -> int:
        updated = self.repo.mark_all_read(self.db, recipient.strip().lower())
        logger.info(f"Marked {updated} notifications as read for {recipient}")
        return updated

    def delete_notification(self, notification_id: str) -> dict:
        self.repo.delete_notification(self.db, self.get_notification(notification_id))
        logger.info(f"Notification {notification_id} deleted")
        return {"message": "Notification deleted"}
