"""Feedback repository - Database operations for feedback"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Feedback


class FeedbackRepository:
    """Repository for feedback database operations"""

    @staticmethod
    def get_all_feedback(db: Session) -> list[Feedback]:
        return db.query(Feedback).order_by(Feedback.created_at.desc()).all()

    @staticmethod
    def get_feedback_by_email(db: Session, email: str) -> list[Feedback]:
        return (
            db.query(Feedback)
            .filter(Feedback.email == email)
            .order_by(Feedback.created_at.desc())
            .all()
        )

    @staticmethod
    def get_feedback_by_id(db: Session, feedback_id: str) -> Optional[Feedback]:
        return db.query(Feedback).filter(Feedback.id == feedback_id).first()

    @staticmethod
    def get_owned_feedback(db: Session, feedback_id: str, email: str) -> Optional[Feedback]:
        return (
            db.query(Feedback)
            .filter(Feedback.id == feedback_id, Feedback.email == email)
            .first()
        )

    @staticmethod
    def create_feedback(db: Session, **feedback_data) -> Feedback:
        feedback = Feedback(**feedback_data)
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
        return feedback

    @staticmethod
    def update_feedback(db: Session, feedback: Feedback, **updates) -> Feedback:
        for key, value in updates.items():
            if value is not None and hasattr(feedback, key):
                setattr(feedback, key, value)

        db.commit()
        db.refresh(feedback)
        return feedback

    @staticmethod
    def delete_feedback(db: Session, feedback: Feedback) -> None:
        db.delete(feedback)
        db.commit()
