"""Payment router - OTP confirmation flow, history and admin operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Payment, Refund
from ...shared.validators import parse_date_param
from .schemas import (
    OTPSentResponse,
    OTPVerifyRequest,
    PaymentCreate,
    PaymentCreatedResponse,
    PaymentReport,
    PaymentResponse,
    PaymentStatusResponse,
    PaymentStatusUpdate,
    UserPaymentResponse,
)
from .service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


def _payment_fields(payment: Payment) -> dict:
    return {
        "id": payment.id,
        "transactionId": payment.transaction_id,
        "name": payment.name,
        "email": payment.email,
        "phone": payment.phone,
        "address": payment.address,
        "amount": payment.amount,
        "purpose": payment.purpose,
        "paymentMethod": payment.payment_method,
        "status": payment.status,
        "advertisementId": payment.advertisement_id,
        "paymentDate": payment.payment_date,
        "createdAt": payment.created_at,
        "updatedAt": payment.updated_at,
    }


def to_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(**_payment_fields(payment))


def to_user_response(payment: Payment, refund: Optional[Refund]) -> UserPaymentResponse:
    return UserPaymentResponse(
        **_payment_fields(payment),
        refundStatus=refund.status if refund else "none",
        refundDecisionDate=refund.action_date if refund else None,
        adminComment=refund.admin_comment if refund else None,
        isRefundEligible=payment.status == "paid" and refund is None,
    )


@router.post("", response_model=OTPSentResponse)
async def create_payment(
    data: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
):
    """Start a payment; the payer receives an OTP by email to confirm it"""
    email = await service.request_payment(data)
    return OTPSentResponse(message="OTP sent successfully", email=email)


@router.post("/verify-otp", response_model=PaymentCreatedResponse, status_code=201)
async def verify_otp_and_create_payment(
    data: OTPVerifyRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Confirm the OTP and record the payment"""
    payment = service.verify_otp(data.email, data.otp)
    return PaymentCreatedResponse(
        message="Payment created successfully", payment=to_response(payment)
    )


@router.get("/all", response_model=list[PaymentResponse])
async def get_all_payments(
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    service: PaymentService = Depends(get_payment_service),
):
    """Admin: all payments, optionally within a date range"""
    payments = service.get_all_payments(parse_date_param(startDate), parse_date_param(endDate))
    return [to_response(p) for p in payments]


@router.get("/user/{email}", response_model=list[UserPaymentResponse])
async def get_user_payments(
    email: str,
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: PaymentService = Depends(get_payment_service),
):
    """Payment history for an email with refund state"""
    rows = service.get_user_payments(
        email, parse_date_param(startDate), parse_date_param(endDate), status
    )
    return [to_user_response(payment, refund) for payment, refund in rows]


@router.get("/report", response_model=PaymentReport)
async def get_payment_report(service: PaymentService = Depends(get_payment_service)):
    return service.get_report()


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    return to_response(service.get_payment(payment_id))


@router.patch("/{payment_id}/status", response_model=PaymentStatusResponse)
async def update_payment_status(
    payment_id: str,
    data: PaymentStatusUpdate,
    service: PaymentService = Depends(get_payment_service),
):
    payment = service.update_status(payment_id, data.status)
    return PaymentStatusResponse(message="Payment status updated", payment=to_response(payment))


@router.delete("/{payment_id}")
async def delete_payment(
    payment_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    return service.delete_payment(payment_id)
