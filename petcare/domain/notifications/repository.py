"""Notification repository - Database operations for in-app notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Notification


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def get_notifications(db: Session, recipient: str) -> list[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.recipient == recipient)
            .order_by(Notification.created_at.desc())
            .all()
        )

    @staticmethod
    def count_unread(db: Session, recipient: str) -> int:
        return (
            db.query(Notification)
            .filter(Notification.recipient == recipient, Notification.read.is_(False))
            .count()
        )

    @staticmethod
    def get_notification_by_id(db: Session, notification_id: str) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def mark_read(db: Session, notification: Notification) -> Notification:
        notification.read = True
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def mark_all_read(db: Session, recipient: str) -> int:
        updated = (
            db.query(Notification)
            .filter(Notification.recipient == recipient, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
        return updated

    @staticmethod
    def delete_notification(db: Session, notification: Notification) -> None:
        db.delete(notification)
        db.commit()
