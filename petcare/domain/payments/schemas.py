"""Payment domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

PAYMENT_METHODS = ("card", "bank_transfer")
PAYMENT_STATUSES = ("paid", "failed")


class PaymentCreate(BaseModel):
    """Payment details held until the emailed OTP is confirmed"""

    transactionId: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    amount: Optional[float] = None
    purpose: Optional[str] = None
    paymentMethod: Optional[str] = None
    status: Optional[str] = None
    advertisementId: Optional[str] = None


class OTPVerifyRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None


class PaymentStatusUpdate(BaseModel):
    status: Optional[str] = None


class OTPSentResponse(BaseModel):
    message: str
    email: str


class PaymentResponse(BaseModel):
    id: str
    transactionId: str
    name: str
    email: str
    phone: str
    address: str
    amount: float
    purpose: str
    paymentMethod: str
    status: str
    advertisementId: Optional[str] = None
    paymentDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserPaymentResponse(PaymentResponse):
    """Payment as shown to its owner, with the state of any refund request"""

    refundStatus: str = "none"
    refundDecisionDate: Optional[datetime] = None
    adminComment: Optional[str] = None
    isRefundEligible: bool = False


class PaymentCreatedResponse(BaseModel):
    message: str
    payment: PaymentResponse


class PaymentStatusResponse(BaseModel):
    message: str
    payment: PaymentResponse


class PaymentReport(BaseModel):
    totalPayments: int
    statusBreakdown: dict[str, int]
