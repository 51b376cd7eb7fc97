"""Supplier router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Supplier
from .schemas import MessageResponse, SupplierCreate, SupplierResponse, SupplierUpdate
from .service import SupplierService

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


def get_supplier_service(db: Session = Depends(get_db)) -> SupplierService:
    """Dependency injection for SupplierService"""
    return SupplierService(db)


def to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,
        name=supplier.name,
        email=supplier.email,
        phone=supplier.phone or "",
        address=supplier.address or "",
        products=supplier.products or "",
        logo=supplier.logo or "",
        status=supplier.status,
        createdAt=supplier.created_at,
        updatedAt=supplier.updated_at,
    )


@router.get("", response_model=list[SupplierResponse])
async def get_suppliers(service: SupplierService = Depends(get_supplier_service)):
    return [to_response(s) for s in service.get_suppliers()]


@router.post("", response_model=SupplierResponse, status_code=201)
async def create_supplier(
    data: SupplierCreate,
    service: SupplierService = Depends(get_supplier_service),
):
    return to_response(service.create_supplier(data))


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: str, service: SupplierService = Depends(get_supplier_service)):
    return to_response(service.get_supplier(supplier_id))


@router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: str,
    data: SupplierUpdate,
    service: SupplierService = Depends(get_supplier_service),
):
    return to_response(service.update_supplier(supplier_id, data))


@router.delete("/{supplier_id}", response_model=MessageResponse)
async def delete_supplier(
    supplier_id: str,
    service: SupplierService = Depends(get_supplier_service),
):
    return service.delete_supplier(supplier_id)
