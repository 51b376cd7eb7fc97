"""Supplier service - Supplier directory with unique contact emails"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Supplier
from ...shared.validators import is_blank, validate_email
from ...utils.sanitization import validate_and_sanitize_input
from .repository import SupplierRepository
from .schemas import SUPPLIER_STATUSES, SupplierCreate, SupplierUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A supplier with this email already exists"


def _clean_text(value: Optional[str], max_length: int = 2000) -> str:
    try:
        return validate_and_sanitize_input(value, max_length=max_length)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


class SupplierService:
    """Service layer for suppliers"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SupplierRepository()

    def get_suppliers(self) -> list[Supplier]:
        return self.repo.get_suppliers(self.db)

    def get_supplier(self, supplier_id: str) -> Supplier:
        supplier = self.repo.get_supplier_by_id(self.db, supplier_id)
        if not supplier:
            raise HTTPException(status_code=404, detail="Supplier not found")
        return supplier

    def _validate(self, data: SupplierCreate) -> dict:
        if is_blank(data.name) or is_blank(data.email):
            raise HTTPException(status_code=400, detail="Name and email are required fields")
        try:
            email = validate_email(data.email)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return {
            "name": _clean_text(data.name, max_length=255),
            "email": email,
            "phone": (data.phone or "").strip(),
            "address": _clean_text(data.address, max_length=500),
            "products": _clean_text(data.products),
            # Data URIs run long, so only control characters are stripped
            "logo": _clean_text(data.logo, max_length=2_000_000),
        }

    def create_supplier(self, data: SupplierCreate) -> Supplier:
        supplier_data = self._validate(data)
        if self.repo.get_supplier_by_email(self.db, supplier_data["email"]):
            raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_MESSAGE)

        try:
            supplier = self.repo.create_supplier(self.db, **supplier_data, status="active")
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_MESSAGE) from e

        logger.info(f"Supplier {supplier.id} ({supplier.email}) added")
        return supplier

    def update_supplier(self, supplier_id: str, data: SupplierUpdate) -> Supplier:
        """Replace the supplier's details; status changes only when one is sent"""
        updates = self._validate(data)
        if data.status is not None:
            if data.status not in SUPPLIER_STATUSES:
                raise HTTPException(status_code=400, detail="Invalid status")
            updates["status"] = data.status

        if self.repo.get_supplier_by_email(self.db, updates["email"], exclude_id=supplier_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_MESSAGE)

        supplier = self.get_supplier(supplier_id)
        try:
            supplier = self.repo.update_supplier(self.db, supplier, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_MESSAGE) from e

        logger.info(f"Supplier {supplier.id} updated")
        return supplier

    def delete_supplier(self, supplier_id: str) -> dict:
        supplier = self.get_supplier(supplier_id)
        self.repo.delete_supplier(self.db, supplier)
        logger.info(f"Supplier {supplier_id} deleted")
        return {"message": "Supplier deleted successfully"}
