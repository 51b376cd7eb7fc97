"""Refund repository - Database operations for refund requests"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Refund
from .schemas import DECIDED_STATUSES


class RefundRepository:
    """Repository for refund database operations"""

    @staticmethod
    def get_refund_by_id(db: Session, refund_id: str) -> Optional[Refund]:
        return db.query(Refund).filter(Refund.id == refund_id).first()

    @staticmethod
    def get_refund_by_transaction(db: Session, transaction_id: str) -> Optional[Refund]:
        return db.query(Refund).filter(Refund.transaction_id == transaction_id).first()

    @staticmethod
    def get_user_refunds(
        db: Session,
        email: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> list[Refund]:
        query = db.query(Refund).filter(Refund.email == email)
        if start_date is not None:
            query = query.filter(Refund.request_date >= start_date)
        if end_date is not None:
            query = query.filter(Refund.request_date <= end_date)
        if status is not None:
            query = query.filter(Refund.status == status)
        return query.order_by(Refund.request_date.desc()).all()

    @staticmethod
    def get_all_refunds(
        db: Session,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Refund]:
        query = db.query(Refund)
        if start_date is not None:
            query = query.filter(Refund.created_at >= start_date)
        if end_date is not None:
            query = query.filter(Refund.created_at <= end_date)
        return query.order_by(Refund.created_at.desc()).all()

    @staticmethod
    def get_decided_since(db: Session, email: str, last_checked: datetime) -> list[Refund]:
        """Approved or rejected refunds that changed after last_checked"""
        return (
            db.query(Refund)
            .filter(
                Refund.email == email,
                Refund.status.in_(DECIDED_STATUSES),
                or_(Refund.updated_at > last_checked, Refund.action_date > last_checked),
            )
            .order_by(Refund.updated_at.desc())
            .all()
        )

    @staticmethod
    def create_refund(db: Session, **refund_data) -> Refund:
        refund = Refund(**refund_data)
        db.add(refund)
        db.commit()
        db.refresh(refund)
        return refund

    @staticmethod
    def update_refund(db: Session, refund: Refund, **updates) -> Refund:
        for key, value in updates.items():
            if value is not None and hasattr(refund, key):
                setattr(refund, key, value)

        db.commit()
        db.refresh(refund)
        return refund
