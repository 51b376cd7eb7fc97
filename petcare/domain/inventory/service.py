"""Inventory service - Store items, stock movements and the stock report"""

import logging
from typing import Optional, Union

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import InventoryItem
from ...shared.validators import is_blank
from ...utils.sanitization import validate_and_sanitize_input
from .repository import InventoryRepository
from .schemas import (
    IN_STOCK,
    LOW_STOCK,
    LOW_STOCK_THRESHOLD,
    OUT_OF_STOCK,
    InventoryItemCreate,
    InventoryItemUpdate,
)

logger = logging.getLogger(__name__)


def stock_status(quantity: int) -> str:
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= LOW_STOCK_THRESHOLD:
        return LOW_STOCK
    return IN_STOCK


def _check_quantity(quantity: Optional[int]) -> Optional[int]:
    if quantity is not None and quantity < 0:
        raise HTTPException(status_code=400, detail="Quantity cannot be negative")
    return quantity


def _check_price(price: Optional[float]) -> Optional[float]:
    if price is not None and price < 0:
        raise HTTPException(status_code=400, detail="Price cannot be negative")
    return price


def _clean_text(value: Optional[str], max_length: int = 2000) -> str:
    try:
        return validate_and_sanitize_input(value, max_length=max_length)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _parse_amount(amount: Union[int, str, None]) -> int:
    try:
        return int(str(amount).strip())
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid amount") from e


class InventoryService:
    """Service layer for store inventory"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepository()

    def get_items(self, category: Optional[str] = None) -> list[InventoryItem]:
        return self.repo.get_items(self.db, category.strip() if category else None)

    def get_item(self, item_id: str) -> InventoryItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Item not found")
        return item

    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        if is_blank(data.name) or is_blank(data.category):
            raise HTTPException(status_code=400, detail="Name and category are required")

        item = self.repo.create_item(
            self.db,
            name=_clean_text(data.name, max_length=255),
            category=_clean_text(data.category, max_length=100),
            description=_clean_text(data.description),
            quantity=_check_quantity(data.quantity) or 0,
            price=_check_price(data.price) or 0,
        )
        logger.info(f"Inventory item {item.id} ({item.name}) added with {item.quantity} units")
        return item

    def update_item(self, item_id: str, data: InventoryItemUpdate) -> InventoryItem:
        updates = {
            "quantity": _check_quantity(data.quantity),
            "price": _check_price(data.price),
        }
        if not is_blank(data.name):
            updates["name"] = _clean_text(data.name, max_length=255)
        if not is_blank(data.category):
            updates["category"] = _clean_text(data.category, max_length=100)
        if data.description is not None:
            updates["description"] = _clean_text(data.description)

        item = self.get_item(item_id)
        item = self.repo.update_item(self.db, item, **updates)
        logger.info(f"Inventory item {item.id} updated")
        return item

    def adjust_stock(self, item_id: str, amount: Union[int, str, None]) -> InventoryItem:
        """Receive (positive amount) or take out (negative amount) stock"""
        amount = _parse_amount(amount)
        item = self.get_item(item_id)

        if not self.repo.adjust_quantity(self.db, item, amount):
            logger.warning(
                f"Rejected stock change of {amount} for item {item.id}: only {item.quantity} left"
            )
            raise HTTPException(status_code=400, detail="Insufficient stock")

        logger.info(f"Stock of item {item.id} changed by {amount}, now {item.quantity}")
        return item

    def delete_item(self, item_id: str) -> dict:
        item = self.get_item(item_id)
        self.repo.delete_item(self.db, item)
        logger.info(f"Inventory item {item_id} deleted")
        return {"message": "Item deleted successfully"}

    def get_report(self) -> dict:
        """Totals, stock status counts and items per category"""
        items = self.repo.get_items(self.db)

        status_counts = {IN_STOCK: 0, LOW_STOCK: 0, OUT_OF_STOCK: 0}
        category_counts: dict[str, int] = {}
        for item in items:
            status_counts[stock_status(item.quantity)] += 1
            category = (item.category or "Other").upper()
            category_counts[category] = category_counts.get(category, 0) + 1

        return {
            "totalProducts": len(items),
            "totalQuantity": sum(item.quantity for item in items),
            "totalValue": round(sum(item.price * item.quantity for item in items), 2),
            "statusCounts": status_counts,
            "categoryCounts": category_counts,
        }
