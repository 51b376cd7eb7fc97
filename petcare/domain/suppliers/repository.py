"""Supplier repository - Database operations for suppliers"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Supplier


class SupplierRepository:
    """Repository for supplier database operations"""

    @staticmethod
    def get_suppliers(db: Session) -> list[Supplier]:
        """Get all suppliers, newest first"""
        return db.query(Supplier).order_by(Supplier.created_at.desc()).all()

    @staticmethod
    def get_supplier_by_id(db: Session, supplier_id: str) -> Optional[Supplier]:
        return db.query(Supplier).filter(Supplier.id == supplier_id).first()

    @staticmethod
    def get_supplier_by_email(
        db: Session, email: str, exclude_id: Optional[str] = None
    ) -> Optional[Supplier]:
        query = db.query(Supplier).filter(Supplier.email == email)
        if exclude_id:
            query = query.filter(Supplier.id != exclude_id)
        return query.first()

    @staticmethod
    def create_supplier(db: Session, **supplier_data) -> Supplier:
        supplier = Supplier(**supplier_data)
        db.add(supplier)
        db.commit()
        db.refresh(supplier)
        return supplier

    @staticmethod
    def update_supplier(db: Session, supplier: Supplier, **updates) -> Supplier:
        """Update a supplier with provided fields; None values are left untouched"""
        for key, value in updates.items():
            if value is not None and hasattr(supplier, key):
                setattr(supplier, key, value)

        db.commit()
        db.refresh(supplier)
        return supplier

    @staticmethod
    def delete_supplier(db: Session, supplier: Supplier) -> None:
        db.delete(supplier)
        db.commit()
