"""Feedback domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

FEEDBACK_SERVICE_TYPES = ("grooming", "boarding", "training", "veterinary", "other")
FEEDBACK_STATUSES = ("pending", "approved", "rejected")


class FeedbackCreate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    serviceType: Optional[str] = None


class FeedbackUpdate(BaseModel):
    """Owner edit; the email must match the one the feedback was left under"""

    email: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    serviceType: Optional[str] = None


class FeedbackStatusUpdate(BaseModel):
    status: Optional[str] = None


class FeedbackReply(BaseModel):
    message: Optional[str] = None


class AdminReply(BaseModel):
    message: str
    repliedAt: Optional[datetime] = None


class FeedbackResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    rating: int
    comment: str
    serviceType: str
    status: str
    adminReply: Optional[AdminReply] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
