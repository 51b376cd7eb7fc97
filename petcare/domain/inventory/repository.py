"""Inventory repository - Database operations for store items"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import InventoryItem


class InventoryRepository:
    """Repository for inventory database operations"""

    @staticmethod
    def get_items(db: Session, category: Optional[str] = None) -> list[InventoryItem]:
        query = db.query(InventoryItem)
        if category:
            query = query.filter(InventoryItem.category == category)
        return query.order_by(InventoryItem.name).all()

    @staticmethod
    def get_item_by_id(db: Session, item_id: str) -> Optional[InventoryItem]:
        return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    @staticmethod
    def create_item(db: Session, **item_data) -> InventoryItem:
        item = InventoryItem(**item_data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update_item(db: Session, item: InventoryItem, **updates) -> InventoryItem:
        """Update an item with provided fields; None values are left untouched"""
        for key, value in updates.items():
            if value is not None and hasattr(item, key):
                setattr(item, key, value)

        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def adjust_quantity(db: Session, item: InventoryItem, amount: int) -> bool:
        """
        Add amount to the stored quantity in a single UPDATE.

        Returns False, changing nothing, when the result would be negative.
        """
        updated = (
            db.query(InventoryItem)
            .filter(InventoryItem.id == item.id, InventoryItem.quantity + amount >= 0)
            .update(
                {InventoryItem.quantity: InventoryItem.quantity + amount},
                synchronize_session=False,
            )
        )
        db.commit()
        db.refresh(item)
        return updated == 1

    @staticmethod
    def delete_item(db: Session, item: InventoryItem) -> None:
        db.delete(item)
        db.commit()
