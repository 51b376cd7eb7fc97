"""Notification domain schemas"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: str
    recipient: str
    title: str
    message: str
    data: dict[str, Any] = {}
    read: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int
