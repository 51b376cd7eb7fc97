"""Refund service - Refund requests against recorded payments and admin decisions"""

import logging
import secrets
import string
import time
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Refund, utcnow
from ...services.notification_service import notify_status_change
from ...shared.validators import is_blank, validate_email
from ...utils.sanitization import validate_and_sanitize_input
from ..payments.repository import PaymentRepository
from .repository import RefundRepository
from .schemas import REFUND_STATUSES, RefundCreate

logger = logging.getLogger(__name__)

DUPLICATE_REFUND_MESSAGE = "Refund already requested for this transaction"


def generate_refund_id() -> str:
    """REF-<epoch ms>-<7 random base36 chars>"""
    suffix = "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(7))
    return f"REF-{int(time.time() * 1000)}-{suffix}"


class RefundService:
    """Service layer for refund business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = RefundRepository()
        self.payments = PaymentRepository()

    def request_refund(self, data: RefundCreate) -> Refund:
        """
        Open a refund request for one of the requester's payments.

        Raises:
            HTTPException: 400 on invalid input or a repeated request,
                404 when no payment matches the transaction and email
        """
        if (
            is_blank(data.transactionId)
            or not data.amount
            or is_blank(data.reason)
            or is_blank(data.email)
        ):
            raise HTTPException(
                status_code=400,
                detail="Transaction ID, amount, reason, and email are required",
            )
        if data.amount < 0:
            raise HTTPException(status_code=400, detail="Invalid amount")

        try:
            email = validate_email(data.email)
            reason = validate_and_sanitize_input(data.reason)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        transaction_id = data.transactionId.strip()
        if not self.payments.get_payment_by_transaction(self.db, transaction_id, email):
            logger.warning(f"Refund request for unknown payment {transaction_id} by {email}")
            raise HTTPException(
                status_code=404, detail="Payment not found or does not belong to user"
            )

        if self.repo.get_refund_by_transaction(self.db, transaction_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_REFUND_MESSAGE)

        try:
            refund = self.repo.create_refund(
                self.db,
                refund_id=generate_refund_id(),
                transaction_id=transaction_id,
                amount=float(data.amount),
                email=email,
                reason=reason,
                status="pending",
                request_date=utcnow(),
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_REFUND_MESSAGE) from e

        logger.info(f"Refund {refund.refund_id} requested for transaction {transaction_id}")
        return refund

    def get_user_refunds(
        self,
        email: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> list[Refund]:
        if status is not None:
            status = status.strip().lower()
            if status not in REFUND_STATUSES:
                raise HTTPException(
                    status_code=400,
                    detail="Invalid status value. Use pending, approved, or rejected",
                )
        return self.repo.get_user_refunds(
            self.db, email.strip().lower(), start_date, end_date, status
        )

    def get_all_refunds(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> list[Refund]:
        return self.repo.get_all_refunds(self.db, start_date, end_date)

    def get_refund_notifications(
        self, email: str, last_checked: Optional[datetime] = None
    ) -> list[Refund]:
        """Decided refunds the requester has not seen since last_checked"""
        return self.repo.get_decided_since(
            self.db, email.strip().lower(), last_checked or datetime.min
        )

    def decide(self, refund_id: str, status: str, admin_comment: Optional[str]) -> Refund:
        """Approve or reject a refund, stamping the decision time"""
        refund = self.repo.get_refund_by_id(self.db, refund_id)
        if not refund:
            raise HTTPException(status_code=404, detail="Refund not found")

        try:
            comment = validate_and_sanitize_input(admin_comment)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        refund = self.repo.update_refund(
            self.db, refund, status=status, action_date=utcnow(), admin_comment=comment
        )
        logger.info(f"Refund {refund.refund_id} {status}")

        notify_status_change(
            self.db,
            refund.email,
            subject="Refund",
            status=status.capitalize(),
            data={
                "refundId": refund.refund_id,
                "transactionId": refund.transaction_id,
                "type": "refund_status",
            },
        )
        return refund
