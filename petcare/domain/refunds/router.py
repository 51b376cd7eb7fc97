"""Refund router"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Refund
from ...shared.validators import parse_date_param
from .schemas import RefundActionResponse, RefundCreate, RefundDecision, RefundResponse
from .service import RefundService

router = APIRouter(prefix="/refunds", tags=["Refunds"])


def get_refund_service(db: Session = Depends(get_db)) -> RefundService:
    """Dependency injection for RefundService"""
    return RefundService(db)


def to_response(refund: Refund) -> RefundResponse:
    return RefundResponse(
        id=refund.id,
        refundId=refund.refund_id,
        transactionId=refund.transaction_id,
        amount=refund.amount,
        email=refund.email,
        reason=refund.reason,
        status=refund.status,
        requestDate=refund.request_date,
        actionDate=refund.action_date,
        adminComment=refund.admin_comment,
        createdAt=refund.created_at,
        updatedAt=refund.updated_at,
    )


@router.post("/request", response_model=RefundActionResponse, status_code=201)
async def request_refund(
    data: RefundCreate,
    service: RefundService = Depends(get_refund_service),
):
    refund = service.request_refund(data)
    return RefundActionResponse(
        message="Refund request submitted successfully", refund=to_response(refund)
    )


@router.get("/user/{email}", response_model=list[RefundResponse])
async def get_user_refunds(
    email: str,
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: RefundService = Depends(get_refund_service),
):
    refunds = service.get_user_refunds(
        email, parse_date_param(startDate), parse_date_param(endDate), status
    )
    return [to_response(r) for r in refunds]


@router.get("/admin", response_model=list[RefundResponse])
async def get_all_refunds(
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    service: RefundService = Depends(get_refund_service),
):
    """Admin: every refund request"""
    refunds = service.get_all_refunds(parse_date_param(startDate), parse_date_param(endDate))
    return [to_response(r) for r in refunds]


@router.get("/notifications/{email}", response_model=list[RefundResponse])
async def get_refund_notifications(
    email: str,
    lastChecked: Optional[str] = Query(None),
    service: RefundService = Depends(get_refund_service),
):
    """Refund decisions made since the client last checked"""
    refunds = service.get_refund_notifications(email, parse_date_param(lastChecked))
    return [to_response(r) for r in refunds]


@router.post("/approve/{refund_id}", response_model=RefundActionResponse)
async def approve_refund(
    refund_id: str,
    data: Optional[RefundDecision] = Body(None),
    service: RefundService = Depends(get_refund_service),
):
    refund = service.decide(refund_id, "approved", data.adminComment if data else None)
    return RefundActionResponse(message="Refund approved successfully", refund=to_response(refund))


@router.post("/reject/{refund_id}", response_model=RefundActionResponse)
async def reject_refund(
    refund_id: str,
    data: Optional[RefundDecision] = Body(None),
    service: RefundService = Depends(get_refund_service),
):
    refund = service.decide(refund_id, "rejected", data.adminComment if data else None)
    return RefundActionResponse(message="Refund rejected successfully", refund=to_response(refund))
