"""Feedback service - Customer reviews, owner edits and admin replies"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Feedback, utcnow
from ...services.notification_service import send_notification
from ...shared.validators import is_blank, validate_email
from ...utils.sanitization import validate_and_sanitize_input
from .repository import FeedbackRepository
from .schemas import (
    FEEDBACK_SERVICE_TYPES,
    FEEDBACK_STATUSES,
    FeedbackCreate,
    FeedbackUpdate,
)

logger = logging.getLogger(__name__)


def _check_rating(rating: Optional[int]) -> int:
    if rating is None or not 1 <= rating <= 5:
        raise HTTPException(status_code=400, detail="Rating must be between 1 and 5")
    return rating


def _check_service_type(service_type: Optional[str]) -> str:
    if service_type not in FEEDBACK_SERVICE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid service type")
    return service_type


def _clean_text(value: Optional[str], label: str) -> str:
    if is_blank(value):
        raise HTTPException(status_code=400, detail=f"{label} is required")
    try:
        return validate_and_sanitize_input(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _check_email(email: Optional[str]) -> str:
    if is_blank(email):
        raise HTTPException(status_code=400, detail="Email is required")
    try:
        return validate_email(email)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


class FeedbackService:
    """Service layer for feedback business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = FeedbackRepository()

    def get_all_feedback(self) -> list[Feedback]:
        return self.repo.get_all_feedback(self.db)

    def get_user_feedback(self, email: str) -> list[Feedback]:
        return self.repo.get_feedback_by_email(self.db, email.strip().lower())

    def get_feedback(self, feedback_id: str) -> Feedback:
        feedback = self.repo.get_feedback_by_id(self.db, feedback_id)
        if not feedback:
            raise HTTPException(status_code=404, detail="Feedback not found")
        return feedback

    def create_feedback(self, data: FeedbackCreate) -> Feedback:
        email = _check_email(data.email)
        rating = _check_rating(data.rating)
        comment = _clean_text(data.comment, "Comment")
        service_type = _check_service_type(data.serviceType)

        feedback = self.repo.create_feedback(
            self.db,
            email=email,
            name=data.name.strip() if data.name else None,
            rating=rating,
            comment=comment,
            service_type=service_type,
            status="pending",
        )
        logger.info(f"Feedback {feedback.id} submitted by {email} ({rating}/5)")
        return feedback

    def update_status(self, feedback_id: str, status: Optional[str]) -> Feedback:
        if status not in FEEDBACK_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status value")
        feedback = self.get_feedback(feedback_id)
        feedback = self.repo.update_feedback(self.db, feedback, status=status)
        logger.info(f"Feedback {feedback.id} status set to {status}")
        return feedback

    def reply(self, feedback_id: str, message: Optional[str]) -> Feedback:
        """Store the admin reply, stamp it and let the author know"""
        reply_message = _clean_text(message, "Reply message")
        feedback = self.get_feedback(feedback_id)
        feedback = self.repo.update_feedback(
            self.db,
            feedback,
            admin_reply_message=reply_message,
            admin_replied_at=utcnow(),
        )
        logger.info(f"Admin replied to feedback {feedback.id}")

        send_notification(
            self.db,
            feedback.email,
            title="Feedback Reply",
            message="An admin has replied to your feedback.",
            data={"feedbackId": feedback.id, "type": "feedback_reply"},
        )
        return feedback

    def _get_owned(self, feedback_id: str, email: Optional[str]) -> Feedback:
        if is_blank(email):
            raise HTTPException(status_code=400, detail="Email is required")
        feedback = self.repo.get_owned_feedback(self.db, feedback_id, email.strip().lower())
        if not feedback:
            raise HTTPException(status_code=404, detail="Feedback not found")
        return feedback

    def update_feedback(self, feedback_id: str, data: FeedbackUpdate) -> Feedback:
        """Owner edit of rating, comment and service type"""
        updates = {}
        if data.rating is not None:
            updates["rating"] = _check_rating(data.rating)
        if data.comment is not None:
            updates["comment"] = _clean_text(data.comment, "Comment")
        if data.serviceType is not None:
            updates["service_type"] = _check_service_type(data.serviceType)

        feedback = self._get_owned(feedback_id, data.email)
        feedback = self.repo.update_feedback(self.db, feedback, **updates)
        logger.info(f"Feedback {feedback.id} edited by owner")
        return feedback

    def delete_feedback(self, feedback_id: str, email: Optional[str]) -> dict:
        feedback = self._get_owned(feedback_id, email)
        self.repo.delete_feedback(self.db, feedback)
        logger.info(f"Feedback {feedback_id} deleted by owner")
        return {"message": "Feedback deleted"}
