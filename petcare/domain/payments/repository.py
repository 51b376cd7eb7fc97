"""Payment repository - Database operations for payments and pending OTPs"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Payment, PaymentOTP, Refund


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    def get_payments(
        db: Session,
        email: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> list[Payment]:
        query = db.query(Payment)
        if email is not None:
            query = query.filter(Payment.email == email)
        if start_date is not None:
            query = query.filter(Payment.payment_date >= start_date)
        if end_date is not None:
            query = query.filter(Payment.payment_date <= end_date)
        if status is not None:
            query = query.filter(Payment.status == status)
        return query.order_by(Payment.payment_date.desc()).all()

    @staticmethod
    def get_payment_by_id(db: Session, payment_id: str) -> Optional[Payment]:
        return db.query(Payment).filter(Payment.id == payment_id).first()

    @staticmethod
    def get_payment_by_transaction(
        db: Session, transaction_id: str, email: Optional[str] = None
    ) -> Optional[Payment]:
        query = db.query(Payment).filter(Payment.transaction_id == transaction_id)
        if email is not None:
            query = query.filter(Payment.email == email)
        return query.first()

    @staticmethod
    def get_refunds_for_transactions(db: Session, transaction_ids: list[str]) -> dict[str, Refund]:
        if not transaction_ids:
            return {}
        refunds = db.query(Refund).filter(Refund.transaction_id.in_(transaction_ids)).all()
        return {refund.transaction_id: refund for refund in refunds}

    @staticmethod
    def get_status_breakdown(db: Session) -> dict[str, int]:
        rows = db.query(Payment.status, func.count(Payment.id)).group_by(Payment.status).all()
        return {status: count for status, count in rows}

    @staticmethod
    def update_payment(db: Session, payment: Payment, **updates) -> Payment:
        for key, value in updates.items():
            if value is not None and hasattr(payment, key):
                setattr(payment, key, value)

        db.commit()
        db.refresh(payment)
        return payment

    @staticmethod
    def delete_payment(db: Session, payment: Payment) -> None:
        db.delete(payment)
        db.commit()

    @staticmethod
    def get_pending_otp(db: Session, email: str) -> Optional[PaymentOTP]:
        return db.query(PaymentOTP).filter(PaymentOTP.email == email).first()

    @staticmethod
    def store_pending_otp(
        db: Session, email: str, otp: str, expires_at: datetime, payment_data: dict
    ) -> PaymentOTP:
        """Insert or replace the pending OTP for an email"""
        db.query(PaymentOTP).filter(PaymentOTP.email == email).delete()
        pending = PaymentOTP(
            email=email, otp=otp, expires_at=expires_at, payment_data=payment_data
        )
        db.add(pending)
        db.commit()
        db.refresh(pending)
        return pending

    @staticmethod
    def delete_pending_otp(db: Session, pending: PaymentOTP) -> None:
        db.delete(pending)
        db.commit()
