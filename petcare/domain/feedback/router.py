"""Feedback router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Feedback
from .schemas import (
    AdminReply,
    FeedbackCreate,
    FeedbackReply,
    FeedbackResponse,
    FeedbackStatusUpdate,
    FeedbackUpdate,
)
from .service import FeedbackService

router = APIRouter(prefix="/feedback", tags=["Feedback"])


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    """Dependency injection for FeedbackService"""
    return FeedbackService(db)


def to_response(feedback: Feedback) -> FeedbackResponse:
    admin_reply = None
    if feedback.admin_reply_message:
        admin_reply = AdminReply(
            message=feedback.admin_reply_message, repliedAt=feedback.admin_replied_at
        )
    return FeedbackResponse(
        id=feedback.id,
        email=feedback.email,
        name=feedback.name,
        rating=feedback.rating,
        comment=feedback.comment,
        serviceType=feedback.service_type,
        status=feedback.status,
        adminReply=admin_reply,
        createdAt=feedback.created_at,
        updatedAt=feedback.updated_at,
    )


@router.post("", response_model=FeedbackResponse, status_code=201)
async def create_feedback(
    data: FeedbackCreate,
    service: FeedbackService = Depends(get_feedback_service),
):
    return to_response(service.create_feedback(data))


@router.get("/all", response_model=list[FeedbackResponse])
async def get_all_feedback(service: FeedbackService = Depends(get_feedback_service)):
    """Admin: every feedback entry"""
    return [to_response(f) for f in service.get_all_feedback()]


@router.get("/my-feedback/{email}", response_model=list[FeedbackResponse])
async def get_my_feedback(
    email: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    return [to_response(f) for f in service.get_user_feedback(email)]


@router.patch("/{feedback_id}/status", response_model=FeedbackResponse)
async def update_feedback_status(
    feedback_id: str,
    data: FeedbackStatusUpdate,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Admin: approve or reject feedback"""
    return to_response(service.update_status(feedback_id, data.status))


@router.post("/{feedback_id}/reply", response_model=FeedbackResponse)
async def reply_to_feedback(
    feedback_id: str,
    data: FeedbackReply,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Admin: reply to feedback"""
    return to_response(service.reply(feedback_id, data.message))


@router.patch("/{feedback_id}", response_model=FeedbackResponse)
async def update_feedback(
    feedback_id: str,
    data: FeedbackUpdate,
    service: FeedbackService = Depends(get_feedback_service),
):
    return to_response(service.update_feedback(feedback_id, data))


@router.delete("/{feedback_id}")
async def delete_feedback(
    feedback_id: str,
    email: Optional[str] = Query(None),
    service: FeedbackService = Depends(get_feedback_service),
):
    return service.delete_feedback(feedback_id, email)
