"""Inventory router - Admin stock management and the public store listing"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import InventoryItem
from .schemas import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryReport,
    MessageResponse,
    StockAdjustment,
)
from .service import InventoryService, stock_status

router = APIRouter(prefix="/inventory", tags=["Inventory"])
store_router = APIRouter(prefix="/store", tags=["Store"])


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    """Dependency injection for InventoryService"""
    return InventoryService(db)


def to_response(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(
        id=item.id,
        name=item.name,
        category=item.category,
        description=item.description or "",
        quantity=item.quantity,
        price=item.price,
        stockStatus=stock_status(item.quantity),
        createdAt=item.created_at,
        updatedAt=item.updated_at,
    )


@router.get("", response_model=list[InventoryItemResponse])
async def get_items(
    category: Optional[str] = Query(None),
    service: InventoryService = Depends(get_inventory_service),
):
    return [to_response(i) for i in service.get_items(category)]


@router.post("", response_model=InventoryItemResponse, status_code=201)
async def create_item(
    data: InventoryItemCreate,
    service: InventoryService = Depends(get_inventory_service),
):
    return to_response(service.create_item(data))


@router.get("/report", response_model=InventoryReport)
async def get_inventory_report(service: InventoryService = Depends(get_inventory_service)):
    """Stock totals and status distribution"""
    return service.get_report()


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_item(item_id: str, service: InventoryService = Depends(get_inventory_service)):
    return to_response(service.get_item(item_id))


@router.put("/{item_id}", response_model=InventoryItemResponse)
async def update_item(
    item_id: str,
    data: InventoryItemUpdate,
    service: InventoryService = Depends(get_inventory_service),
):
    return to_response(service.update_item(item_id, data))


@router.post("/{item_id}/stock", response_model=InventoryItemResponse)
async def adjust_stock(
    item_id: str,
    data: StockAdjustment,
    service: InventoryService = Depends(get_inventory_service),
):
    """Record units received or taken out"""
    return to_response(service.adjust_stock(item_id, data.amount))


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(item_id: str, service: InventoryService = Depends(get_inventory_service)):
    return service.delete_item(item_id)


@store_router.get("/inventory", response_model=list[InventoryItemResponse])
async def get_store_items(
    category: Optional[str] = Query(None),
    service: InventoryService = Depends(get_inventory_service),
):
    """Items shown in the store, with their stock status"""
    return [to_response(i) for i in service.get_items(category)]
