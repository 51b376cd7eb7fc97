"""Payment service - OTP-gated payment capture, history and reporting

A payment is only recorded once the payer confirms the one-time code sent
to their email. The pending payload waits in payment_otps until then.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ... import config, email_service
from ...models import Advertisement, Payment, Refund, utcnow
from ...shared.validators import is_blank, validate_email
from ..advertisements.schemas import PAYMENT_PAID
from .repository import PaymentRepository
from .schemas import PAYMENT_METHODS, PAYMENT_STATUSES, PaymentCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "transactionId",
    "name",
    "email",
    "phone",
    "address",
    "amount",
    "purpose",
    "paymentMethod",
)


def generate_otp(length: int = 6) -> str:
    """Generate a cryptographically secure random numeric OTP code"""
    return "".join(secrets.choice(string.digits) for _ in range(length))


def check_status(status: Optional[str]) -> Optional[str]:
    """Lowercased payment status, or 400 when it is not paid/failed"""
    if status is None:
        return None
    status = status.strip().lower()
    if status not in PAYMENT_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status value. Use paid or failed")
    return status


class PaymentService:
    """Service layer for payment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepository()

    async def request_payment(self, data: PaymentCreate) -> str:
        """
        Validate a payment, park it behind an OTP and email the code.

        Returns:
            The normalized payer email the code was sent to

        Raises:
            HTTPException: 400 on invalid input, 500 when the email cannot be sent
        """
        if any(is_blank(getattr(data, field)) for field in REQUIRED_FIELDS):
            logger.warning("Payment request rejected: missing fields")
            raise HTTPException(status_code=400, detail="All fields are required")

        try:
            email = validate_email(data.email)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        if data.amount <= 0:
            raise HTTPException(status_code=400, detail="Invalid amount")
        if data.paymentMethod not in PAYMENT_METHODS:
            raise HTTPException(status_code=400, detail="Invalid payment method")
        status = check_status(data.status) or "paid"

        transaction_id = data.transactionId.strip()
        if self.repo.get_payment_by_transaction(self.db, transaction_id):
            raise HTTPException(status_code=400, detail="Transaction ID already exists")

        payment_data = {
            "transaction_id": transaction_id,
            "name": data.name.strip(),
            "email": email,
            "phone": data.phone.strip(),
            "address": data.address.strip(),
            "amount": float(data.amount),
            "purpose": data.purpose.strip(),
            "payment_method": data.paymentMethod,
            "status": status,
            "advertisement_id": data.advertisementId or None,
        }

        otp = generate_otp(6)
        expires_at = utcnow() + timedelta(minutes=config.OTP_EXPIRY_MINUTES)
        pending = self.repo.store_pending_otp(self.db, email, otp, expires_at, payment_data)
        logger.info(f"Payment OTP stored for {email}, transaction {transaction_id}")

        try:
            await email_service.send_payment_otp_email(to=email, otp=otp)
        except email_service.EmailDeliveryError as e:
            logger.error(f"Failed to send payment OTP to {email}: {e}")
            self.repo.delete_pending_otp(self.db, pending)
            raise HTTPException(status_code=500, detail="Failed to send OTP email") from e

        return email

    def verify_otp(self, email: Optional[str], otp: Optional[str]) -> Payment:
        """
        Confirm a pending payment.

        The payment row, the linked advertisement's payment status and the
        removal of the OTP are committed together.
        """
        if is_blank(email) or is_blank(otp):
            raise HTTPException(status_code=400, detail="Email and OTP are required")

        email = email.strip().lower()
        pending = self.repo.get_pending_otp(self.db, email)
        if not pending:
            raise HTTPException(status_code=400, detail="OTP expired or not found")

        if pending.expires_at < utcnow():
            logger.info(f"Payment OTP for {email} expired at {pending.expires_at}")
            self.repo.delete_pending_otp(self.db, pending)
            raise HTTPException(status_code=400, detail="OTP expired")

        otp = otp.strip()
        if not (otp.isascii() and otp.isdigit()) or not secrets.compare_digest(pending.otp, otp):
            logger.warning(f"Invalid payment OTP for {email}")
            raise HTTPException(status_code=400, detail="Invalid OTP")

        payment = Payment(**pending.payment_data, payment_date=utcnow())
        self.db.add(payment)

        if payment.advertisement_id:
            advertisement = (
                self.db.query(Advertisement)
                .filter(Advertisement.id == payment.advertisement_id)
                .first()
            )
            if advertisement:
                advertisement.payment_status = PAYMENT_PAID
            else:
                logger.warning(
                    f"Payment {payment.transaction_id} references unknown advertisement "
                    f"{payment.advertisement_id}"
                )

        self.db.delete(pending)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate transaction {payment.transaction_id}: {e}")
            raise HTTPException(status_code=400, detail="Transaction ID already exists") from e

        self.db.refresh(payment)
        logger.info(f"Payment {payment.transaction_id} recorded for {email}")
        return payment

    def get_all_payments(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> list[Payment]:
        return self.repo.get_payments(self.db, start_date=start_date, end_date=end_date)

    def get_user_payments(
        self,
        email: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> list[tuple[Payment, Optional[Refund]]]:
        """Payments for an email, each paired with its refund request if any"""
        payments = self.repo.get_payments(
            self.db,
            email=email.strip().lower(),
            start_date=start_date,
            end_date=end_date,
            status=check_status(status),
        )
        refunds = self.repo.get_refunds_for_transactions(
            self.db, [p.transaction_id for p in payments]
        )
        return [(payment, refunds.get(payment.transaction_id)) for payment in payments]

    def get_report(self) -> dict:
        breakdown = self.repo.get_status_breakdown(self.db)
        return {"totalPayments": sum(breakdown.values()), "statusBreakdown": breakdown}

    def get_payment(self, payment_id: str) -> Payment:
        payment = self.repo.get_payment_by_id(self.db, payment_id)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        return payment

    def update_status(self, payment_id: str, status: Optional[str]) -> Payment:
        status = check_status(status)
        if status is None:
            raise HTTPException(status_code=400, detail="Status is required")
        payment = self.get_payment(payment_id)
        payment = self.repo.update_payment(self.db, payment, status=status)
        logger.info(f"Payment {payment.transaction_id} status set to {status}")
        return payment

    def delete_payment(self, payment_id: str) -> dict:
        payment = self.get_payment(payment_id)
        self.repo.delete_payment(self.db, payment)
        logger.info(f"Payment {payment.transaction_id} deleted")
        return {"message": "Payment deleted"}
