"""Notification router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Notification
from .schemas import MarkAllReadResponse, NotificationResponse, UnreadCountResponse
from .service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


def to_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        recipient=notification.recipient,
        title=notification.title,
        message=notification.message,
        data=notification.data or {},
        read=notification.read,
        createdAt=notification.created_at,
        updatedAt=notification.updated_at,
    )


@router.get("/{recipient}", response_model=list[NotificationResponse])
async def get_notifications(
    recipient: str,
    service: NotificationService = Depends(get_notification_service),
):
    """Notifications for an email, newest first"""
    return [to_response(n) for n in service.get_notifications(recipient)]


@router.get("/{recipient}/unread/count", response_model=UnreadCountResponse)
async def get_unread_count(
    recipient: str,
    service: NotificationService = Depends(get_notification_service),
):
    return UnreadCountResponse(count=service.count_unread(recipient))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
):
    return to_response(service.mark_read(notification_id))


@router.put("/{recipient}/read-all", response_model=MarkAllReadResponse)
async def mark_all_notifications_read(
    recipient: str,
    service: NotificationService = Depends(get_notification_service),
):
    return MarkAllReadResponse(updated=service.mark_all_read(recipient))


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
):
    return service.delete_notification(notification_id)
