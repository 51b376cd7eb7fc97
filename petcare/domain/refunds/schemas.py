"""Refund domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

REFUND_STATUSES = ("pending", "approved", "rejected")
DECIDED_STATUSES = ("approved", "rejected")


class RefundCreate(BaseModel):
    transactionId: Optional[str] = None
    amount: Optional[float] = None
    reason: Optional[str] = None
    email: Optional[str] = None


class RefundDecision(BaseModel):
    adminComment: Optional[str] = None


class RefundResponse(BaseModel):
    id: str
    refundId: str
    transactionId: str
    amount: float
    email: str
    reason: str
    status: str
    requestDate: Optional[datetime] = None
    actionDate: Optional[datetime] = None
    adminComment: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RefundActionResponse(BaseModel):
    message: str
    refund: RefundResponse
